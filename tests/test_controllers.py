import uuid

import flask
import pytest

from stocky2pc.controllers import OrderController
from stocky2pc.models import Order, OrderProduct, OrderResponse, OrderStatus

ZERO_ID = "000000000000000000000000"


class FakeOrders:
    def __init__(self, error=None):
        self.error = error
        self.created = []
        self.tcc_requests = []

    def create_order(self, comment, user_id, staff_id, products):
        self.created.append((comment, user_id, staff_id, products))
        if self.error:
            raise self.error
        return Order(uuid="o-1", comment=comment, user_id=user_id, staff_id=staff_id, price=3.0,
                     products=[OrderProduct(uuid="p", name="n", description="d", price="1")])

    def tcc_create_order(self, request):
        self.tcc_requests.append(request)
        if self.error:
            raise self.error
        return OrderResponse(id="o-2", comment=request.comment, status=OrderStatus.NEW)


def _client(orders):
    app = flask.Flask("test")
    OrderController(orders).register(app)
    return app.test_client()


def test_create_passes_products_and_returns_order():
    orders = FakeOrders()
    response = _client(orders).post(
        "/api/order/create", json={"comment": "c", "products": [{"uuid": "p", "amount": 2.7}]}
    )
    assert response.status_code == 200
    assert response.get_json()["order"]["uuid"] == "o-1"
    comment, user_id, staff_id, products = orders.created[0]
    assert (comment, user_id, staff_id) == ("c", ZERO_ID, ZERO_ID)
    assert [(p.product_uuid, p.amount) for p in products] == [("p", 2)]


@pytest.mark.parametrize("path", ["/api/order/create", "/api/TCC/order/create"])
@pytest.mark.parametrize("body", [b"{", b"", b'{"products": 5}'])
def test_bad_body_is_rejected(path, body):
    orders = FakeOrders()
    response = _client(orders).post(path, data=body, content_type="application/json")
    assert response.status_code == 400
    assert response.get_json()["error"].endswith("failed to parse body")
    assert orders.created == [] and orders.tcc_requests == []


def test_create_service_error_gives_500():
    response = _client(FakeOrders(error=RuntimeError("boom"))).post("/api/order/create", json={})
    assert response.status_code == 500
    assert response.get_json() == {"error": "boom"}


def test_tcc_create_with_invalid_uuid():
    response = _client(FakeOrders()).post(
        "/api/TCC/order/create", json={"products": [{"uuid": "not-a-uuid", "amount": 1}]}
    )
    assert response.status_code == 400
    assert response.get_json() == {"error": "invalid UUID length: 10"}


def test_tcc_create_builds_request():
    orders = FakeOrders()
    product_id = uuid.uuid4()
    response = _client(orders).post(
        "/api/TCC/order/create", json={"comment": "x", "products": [{"uuid": str(product_id), "amount": 3}]}
    )
    assert response.status_code == 200
    assert response.get_json()["order"]["id"] == "o-2"
    request = orders.tcc_requests[0]
    assert (request.user_id, request.staff_id, request.comment) == (ZERO_ID, ZERO_ID, "x")
    assert request.products[0].product_id == product_id
    assert request.products[0].amount == 3


def test_tcc_service_error_gives_500():
    response = _client(FakeOrders(error=RuntimeError("stream closed"))).post("/api/TCC/order/create", json={})
    assert response.status_code == 500
    assert response.get_json() == {"error": "stream closed"}