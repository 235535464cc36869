"""Order creation across the stock, order and inventory services."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from contextlib import suppress
from types import SimpleNamespace
from typing import Any

from stocky2pc.clients.oms import OrderProductInput
from stocky2pc.models import Order, OrderCreateRequest, OrderProduct, OrderResponse, OrderStatus, ProductDetail

MessageFactory = Callable[..., Any]


def _plain_message(type_name: str, **fields: Any) -> SimpleNamespace:
    return SimpleNamespace(**fields)


class ProductOutOfStockError(Exception):
    """The stock holds less of a product than the order asks for."""

    def __init__(self, product_uuid: str) -> None:
        super().__init__(f"product out of Stock\nproduct - {product_uuid}")
        self.product_uuid = product_uuid


class OrderService:
    """Creates orders, reserving stock and undoing the reservation on failure."""

    def __init__(
        self,
        oms: Any,
        sms: Any,
        scs: Any,
        iims: Any,
        make_message: MessageFactory = _plain_message,
    ) -> None:
        self.oms = oms
        self.sms = sms
        self.scs = scs
        self.iims = iims
        self._message = make_message

    def _restore_amounts(self, amounts: Mapping[str, float]) -> None:
        for product_uuid, amount in amounts.items():
            with suppress(Exception):
                self.sms.set_product_amount(product_uuid, amount)

    def _describe(self, product: Any) -> OrderProduct:
        data = self.iims.get_by_product_code(product.product_code)
        return OrderProduct(
            uuid=product.product_uuid,
            name=data.name,
            description=data.description,
            price=data.price,
        )

    def create_order(
        self, comment: str, user_id: str, staff_id: str, products: Iterable[OrderProductInput]
    ) -> Order:
        """Take the products out of stock, create the order and describe its products."""
        wanted = list(products)
        start_amounts: dict[str, float] = {}
        try:
            for product in wanted:
                amount = self.sms.get_product_amount(product.product_uuid)
                if amount < product.amount:
                    raise ProductOutOfStockError(product.product_uuid)
                start_amounts[product.product_uuid] = amount
                self.sms.set_product_amount(product.product_uuid, amount - product.amount)

            order = self.oms.create_order(comment, user_id, staff_id, wanted)
            try:
                result_products = [self._describe(product) for product in order.products]
            except Exception:
                with suppress(Exception):
                    self.oms.delete_order(order.uuid)
                raise
        except Exception:
            self._restore_amounts(start_amounts)
            raise

        return Order(
            uuid=order.uuid,
            comment=order.comment,
            user_id=order.user_id,
            staff_id=order.staff_id,
            price=order.order_cost,
            products=result_products,
        )

    def tcc_create_order(self, request: OrderCreateRequest) -> OrderResponse:
        """Create an order through the order service's try-confirm stream."""
        inputs = [
            self._message("OrderProductInput", product_uuid=str(product.product_id), amount=product.amount)
            for product in request.products
        ]
        message = self._message(
            "CreateOrderRequest",
            comment=request.comment,
            user_id=request.user_id,
            staff_id=request.staff_id,
            products=inputs,
        )
        result = self.oms.tcc_order_creation(message)

        details = [
            ProductDetail(
                price=product.result_price,
                product_code=product.product_code,
                amount=int(product.amount),
                total_price=product.result_price * float(product.amount),
            )
            for product in result.products
        ]
        return OrderResponse(
            id=result.uuid,
            comment=result.comment,
            user_id=result.user_id,
            staff_id=result.staff_id,
            order_cost=result.order_cost,
            status=OrderStatus.NEW,
            creation_date=str(result.creation_date),
            products=details,
        )