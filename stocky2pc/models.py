"""Order data exchanged between the HTTP layer, the services and the backends."""

from __future__ import annotations

import enum
import uuid as uuidlib
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


class OrderStatus(str, enum.Enum):
    """Lifecycle states of an order."""

    NEW = "new"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class OrderProduct:
    """A product line of an order as returned to HTTP callers."""

    uuid: str = ""
    name: str = ""
    description: str = ""
    price: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "uuid": self.uuid,
            "name": self.name,
            "description": self.description,
            "price": self.price,
        }


@dataclass
class Order:
    """An order created through the two-phase flow."""

    uuid: str = ""
    comment: str = ""
    user_id: str = ""
    staff_id: str = ""
    price: float = 0.0
    products: list[OrderProduct] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "uuid": self.uuid,
            "comment": self.comment,
            "userId": self.user_id,
            "staffId": self.staff_id,
            "price": self.price,
            "products": [product.to_dict() for product in self.products],
        }


@dataclass
class OrderFilter:
    """Paging and status filter for listing orders."""

    limit: int = 0
    offset: int = 0
    status: OrderStatus | None = None


@dataclass
class OrderProductInput:
    """A product and the amount of it wanted in a new order."""

    product_id: uuidlib.UUID = field(default_factory=lambda: uuidlib.UUID(int=0))
    amount: int = 0


@dataclass
class OrderCreateRequest:
    """Everything needed to create an order."""

    user_id: str = ""
    staff_id: str = ""
    comment: str = ""
    products: list[OrderProductInput] = field(default_factory=list)


@dataclass
class OrderUpdateRequest:
    """Fields of an order that may be changed; None leaves a field as it is."""

    comment: str | None = None
    status: OrderStatus | None = None


@dataclass
class ProductDetail:
    """A priced product line of an order response."""

    id: str = ""
    name: str = ""
    price: float = 0.0
    product_code: str = ""
    amount: int = 0
    total_price: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "product_code": self.product_code,
            "amount": self.amount,
            "total_price": self.total_price,
        }


@dataclass
class OrderResponse:
    """An order as reported after the try-confirm-cancel creation."""

    id: str = ""
    comment: str = ""
    user_id: str = ""
    staff_id: str = ""
    order_cost: float = 0.0
    status: OrderStatus | None = None
    creation_date: str = ""
    finish_date: str | None = None
    products: list[ProductDetail] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "comment": self.comment,
            "user_id": self.user_id,
            "staff_id": self.staff_id,
            "order_cost": self.order_cost,
            "status": self.status.value if self.status is not None else "",
            "creation_date": self.creation_date,
        }
        if self.finish_date is not None:
            result["finish_date"] = self.finish_date
        result["products"] = [product.to_dict() for product in self.products]
        return result


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    """Find a JSON field by exact name, falling back to a case-insensitive match."""
    if key in data:
        return data[key]
    wanted = key.casefold()
    return next(
        (value for name, value in data.items() if isinstance(name, str) and name.casefold() == wanted),
        None,
    )


def _as_string(value: Any, name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {name!r} must be a string")
    return value


def _as_number(value: Any, name: str) -> float:
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field {name!r} must be a number")
    return float(value)


def _as_object(value: Any, name: str) -> Mapping[str, Any] | None:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ValueError(f"{name} must be a JSON object")
    return value


@dataclass
class CreateOrderProduct:
    """A product line in an order creation request body."""

    uuid: str = ""
    amount: float = 0.0

    @classmethod
    def _from_json(cls, data: Any) -> CreateOrderProduct:
        body = _as_object(data, "product")
        if body is None:
            return cls()
        return cls(
            uuid=_as_string(_lookup(body, "uuid"), "uuid"),
            amount=_as_number(_lookup(body, "amount"), "amount"),
        )


@dataclass
class CreateOrder:
    """The body of an order creation request."""

    comment: str = ""
    products: list[CreateOrderProduct] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> CreateOrder:
        """Build a request from decoded JSON; raise ValueError on a type mismatch."""
        body = _as_object(data, "order body")
        if body is None:
            return cls()
        raw_products = _lookup(body, "products")
        if raw_products is None:
            products: list[CreateOrderProduct] = []
        elif isinstance(raw_products, list):
            products = [CreateOrderProduct._from_json(item) for item in raw_products]
        else:
            raise ValueError("field 'products' must be an array")
        return cls(
            comment=_as_string(_lookup(body, "comment"), "comment"),
            products=products,
        )