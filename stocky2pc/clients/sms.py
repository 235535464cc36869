"""Client for the stock management service: products and supplies."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any

MessageFactory = Callable[..., Any]


def _plain_message(type_name: str, **fields: Any) -> SimpleNamespace:
    return SimpleNamespace(**fields)


@dataclass(frozen=True)
class SupplyProduct:
    """A product and the amount of it in a supply."""

    product_uuid: str
    amount: float


class SMSClient:
    """Calls the product and supply services through their gRPC stubs.

    ``make_message(type_name, **fields)`` builds request messages; by default
    they are plain namespaces.
    """

    def __init__(self, product_stub: Any, supply_stub: Any, make_message: MessageFactory = _plain_message) -> None:
        self._products = product_stub
        self._supplies = supply_stub
        self._message = make_message

    def create_product(self, store_cost: float) -> str:
        request = self._message("CreateProductMessage", store_cost=store_cost)
        return self._products.CreateProduct(request).uuid

    def delete_product(self, uuid: str) -> str:
        return self._products.DeleteProduct(self._message("UuidRequest", uuid=uuid)).uuid

    def set_product_cost(self, uuid: str, cost: float) -> str:
        request = self._message("SetProductCostRequest", uuid=uuid, store_cost=cost)
        return self._products.SetStoreCost(request).uuid

    def set_product_amount(self, uuid: str, amount: float) -> str:
        request = self._message("SetProductAmountRequest", uuid=uuid, store_amount=amount)
        return self._products.SetStoreAmount(request).uuid

    def get_product_amount(self, uuid: str) -> float:
        return self._products.GetStoreAmount(self._message("UuidRequest", uuid=uuid)).store_amount

    def create_supply(
        self,
        supply_cost: float,
        desired_date: str,
        comment: str,
        responsible_user: str,
        products: Iterable[SupplyProduct],
    ) -> str:
        models = [
            self._message("SupplyProductModel", product_uuid=product.product_uuid, amount=product.amount)
            for product in products
        ]
        request = self._message(
            "CreateSupplyRequest",
            supply_cost=supply_cost,
            desired_date=desired_date,
            comment=comment,
            responsible_user=responsible_user,
            products=models,
        )
        return self._supplies.CreateSupply(request).uuid

    def delete_supply(self, uuid: str) -> str:
        return self._supplies.DeleteSupply(self._message("UuidRequest", uuid=uuid)).uuid

    def update_supply_info(
        self,
        uuid: str,
        comment: str,
        desired_date: str,
        status: str,
        responsible_user: str,
        cost: float,
    ) -> str:
        request = self._message(
            "UpdateSupplyInfoRequest",
            uuid=uuid,
            comment=comment,
            desired_date=desired_date,
            status=status,
            responsible_user=responsible_user,
            cost=cost,
        )
        return self._supplies.UpdateSupplyInfo(request).uuid

    def get_active_supplies(self) -> list[Any]:
        return list(self._supplies.GetActiveSupplies(self._message("Empty")).supplies)

    def get_supply_by_id(self, uuid: str) -> Any:
        return self._supplies.GetSupplyById(self._message("UuidRequest", uuid=uuid))