"""HTTP endpoints for creating orders."""

from __future__ import annotations

import abc
import json
import threading
import uuid as uuidlib
from typing import Any

import flask

from stocky2pc.clients.oms import OrderProductInput as ClientProductInput
from stocky2pc.models import CreateOrder, OrderCreateRequest, OrderProductInput

_PLACEHOLDER_ID = "000000000000000000000000"
_UUID_LENGTHS = (32, 36, 38, 45)


class Controller(abc.ABC):
    """Something that adds routes to a Flask application."""

    @abc.abstractmethod
    def register(self, app: flask.Flask) -> None:
        """Add this controller's routes to ``app``."""


def _parse_uuid(text: str) -> uuidlib.UUID:
    if len(text) not in _UUID_LENGTHS:
        raise ValueError(f"invalid UUID length: {len(text)}")
    try:
        return uuidlib.UUID(text)
    except ValueError:
        raise ValueError("invalid UUID format") from None


def _read_body() -> CreateOrder:
    try:
        return CreateOrder.from_dict(json.loads(flask.request.get_data()))
    except ValueError as exc:
        raise ValueError(f"{exc}\nfailed to parse body") from exc


def _error(message: str, status: int) -> tuple[flask.Response, int]:
    return flask.jsonify({"error": message}), status


class OrderController(Controller):
    """Order creation endpoints, plain and try-confirm-cancel."""

    def __init__(self, orders: Any) -> None:
        self.orders = orders
        self._lock = threading.Lock()

    def register(self, app: flask.Flask) -> None:
        app.add_url_rule("/api/order/create", endpoint="order_create", view_func=self.create, methods=["POST"])
        app.add_url_rule(
            "/api/TCC/order/create", endpoint="tcc_order_create", view_func=self.tcc_create, methods=["POST"]
        )

    def create(self) -> tuple[flask.Response, int]:
        with self._lock:
            try:
                body = _read_body()
            except ValueError as exc:
                return _error(str(exc), 400)
            products = [ClientProductInput(product.uuid, int(product.amount)) for product in body.products]
            try:
                order = self.orders.create_order(body.comment, _PLACEHOLDER_ID, _PLACEHOLDER_ID, products)
            except Exception as exc:
                return _error(str(exc), 500)
            return flask.jsonify({"order": order.to_dict()}), 200

    def tcc_create(self) -> tuple[flask.Response, int]:
        try:
            body = _read_body()
        except ValueError as exc:
            return _error(str(exc), 400)
        products = []
        for product in body.products:
            try:
                product_id = _parse_uuid(product.uuid)
            except ValueError as exc:
                return _error(str(exc), 400)
            products.append(OrderProductInput(product_id=product_id, amount=int(product.amount)))
        request = OrderCreateRequest(
            user_id=_PLACEHOLDER_ID,
            staff_id=_PLACEHOLDER_ID,
            comment=body.comment,
            products=products,
        )
        try:
            order = self.orders.tcc_create_order(request)
        except Exception as exc:
            return _error(str(exc), 500)
        return flask.jsonify({"order": order.to_dict()}), 200