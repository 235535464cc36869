"""Client for the inventory service: products and sales."""

from __future__ import annotations

from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

MessageFactory = Callable[..., Any]


def _plain_message(type_name: str, **fields: Any) -> SimpleNamespace:
    return SimpleNamespace(**fields)


class IIMSClient:
    """Calls the product and sale services through their gRPC stubs.

    ``make_message(type_name, **fields)`` builds request messages; by default
    they are plain namespaces.
    """

    def __init__(self, product_stub: Any, sale_stub: Any, make_message: MessageFactory = _plain_message) -> None:
        self._products = product_stub
        self._sales = sale_stub
        self._message = make_message

    def insert_product(self, name: str, description: str, creation_date: str, price: float) -> str:
        request = self._message(
            "InsertProductRequest",
            name=name,
            description=description,
            creation_date=creation_date,
            price=price,
        )
        return self._products.InsertOne(request).id

    def get_products(self, limit: int, offset: int) -> list[Any]:
        request = self._message("GetProductsRequest", limit=limit, offset=offset)
        return list(self._products.Get(request).products)

    def get_by_id(self, product_id: str) -> Any:
        return self._products.GetById(self._message("GetByIdProductRequest", id=product_id))

    def get_by_product_code(self, product_code: str) -> Any:
        return self._products.GetByProductCode(self._message("GetByProductCodeRequest", code=product_code))

    def delete_product(self, product_id: str) -> None:
        self._products.Delete(self._message("DeleteProductRequest", id=product_id))

    def update_product(
        self, product_id: str, name: str, description: str, creation_date: str, price: float
    ) -> None:
        request = self._message(
            "UpdateProductRequest",
            id=product_id,
            name=name,
            description=description,
            creation_date=creation_date,
            price=price,
        )
        self._products.Update(request)

    def block_product(self, product_id: str) -> None:
        self._products.BlockProduct(self._message("BlockProductOperationMessage", id=product_id))

    def unblock_product(self, product_id: str) -> None:
        self._products.UnblockProduct(self._message("BlockProductOperationMessage", id=product_id))

    def insert_sale(self, name: str, description: str, sale_size: int, product: str) -> str:
        request = self._message(
            "InsertSaleRequest",
            name=name,
            description=description,
            sale_size=sale_size,
            product=product,
        )
        return self._sales.InsertOne(request).id

    def get_sales(self, limit: int, offset: int) -> list[Any]:
        request = self._message("GetSalesRequest", limit=limit, offset=offset)
        return list(self._sales.Get(request).sales)

    def delete_sale(self, sale_id: str) -> None:
        self._sales.Delete(self._message("DeleteSaleRequest", id=sale_id))

    def update_sale(self, sale_id: str, name: str, description: str, sale_size: int) -> None:
        request = self._message(
            "UpdateSaleRequest",
            id=sale_id,
            name=name,
            description=description,
            sale_size=sale_size,
        )
        self._sales.Update(request)

    def block_sale(self, sale_id: str) -> None:
        self._sales.BlockSale(self._message("BlockSaleOperationMessage", id=sale_id))

    def unblock_sale(self, sale_id: str) -> None:
        self._sales.UnblockSale(self._message("BlockSaleOperationMessage", id=sale_id))