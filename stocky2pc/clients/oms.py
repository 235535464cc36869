"""Client for the order management service: products and orders."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any

MessageFactory = Callable[..., Any]


def _plain_message(type_name: str, **fields: Any) -> SimpleNamespace:
    return SimpleNamespace(**fields)


@dataclass(frozen=True)
class OrderProductInput:
    """A product and the amount of it to put into an order."""

    product_uuid: str
    amount: int


class OMSClient:
    """Calls the order and product services through their gRPC stubs.

    ``make_message(type_name, **fields)`` builds request messages; by default
    they are plain namespaces.
    """

    def __init__(self, order_stub: Any, product_stub: Any, make_message: MessageFactory = _plain_message) -> None:
        self._orders = order_stub
        self._products = product_stub
        self._message = make_message

    def tcc_order_creation(self, order: Any) -> Any:
        """Run the streamed creation: an empty message to reserve, then the order."""
        requests = iter([self._message("CreateOrderRequest"), order])
        responses = self._orders.TCCCreateOrder(requests)
        try:
            return next(iter(responses))
        except StopIteration:
            raise EOFError("order stream closed before a response arrived") from None

    def create_product(self, name: str, product_code: str, customer_cost: float) -> Any:
        request = self._message("CreateRequest", name=name, product_code=product_code, customer_cost=customer_cost)
        return self._products.Create(request)

    def get_product(self, uuid: str) -> Any:
        return self._products.Get(self._message("GetRequest", uuid=uuid))

    def list_products(self, limit: int, offset: int) -> list[Any]:
        request = self._message("ListRequest", limit=limit, offset=offset)
        return list(self._products.List(request).products)

    def update_product(
        self,
        uuid: str,
        name: str | None = None,
        product_code: str | None = None,
        customer_cost: float | None = None,
    ) -> Any:
        optional = {"name": name, "product_code": product_code, "customer_cost": customer_cost}
        fields = {key: value for key, value in optional.items() if value is not None}
        return self._products.Update(self._message("UpdateRequest", uuid=uuid, **fields))

    def delete_product(self, uuid: str) -> None:
        self._products.Delete(self._message("DeleteRequest", uuid=uuid))

    def get_products_by_order(self, order_uuid: str) -> list[Any]:
        request = self._message("GetByOrderRequest", order_uuid=order_uuid)
        return list(self._products.GetByOrder(request).products)

    def create_order(
        self, comment: str, user_id: str, staff_id: str, products: Iterable[OrderProductInput]
    ) -> Any:
        inputs = [
            self._message("OrderProductInput", product_uuid=product.product_uuid, amount=product.amount)
            for product in products
        ]
        request = self._message(
            "CreateOrderRequest",
            comment=comment,
            user_id=user_id,
            staff_id=staff_id,
            products=inputs,
        )
        return self._orders.Create(request)

    def get_order(self, uuid: str) -> Any:
        return self._orders.Get(self._message("GetOrderRequest", uuid=uuid))

    def list_orders(self, limit: int, offset: int, status: Any) -> list[Any]:
        request = self._message("ListOrderRequest", limit=limit, offset=offset, status=status)
        return list(self._orders.List(request).orders)

    def update_order(self, uuid: str, comment: str | None = None, status: Any = None) -> Any:
        optional = {"comment": comment, "status": status}
        fields = {key: value for key, value in optional.items() if value is not None}
        return self._orders.Update(self._message("UpdateOrderRequest", uuid=uuid, **fields))

    def delete_order(self, uuid: str) -> None:
        self._orders.Delete(self._message("DeleteOrderRequest", uuid=uuid))

    def get_order_products(self, order_uuid: str) -> list[Any]:
        request = self._message("GetProductsRequest", order_uuid=order_uuid)
        return list(self._orders.GetProducts(request).products)