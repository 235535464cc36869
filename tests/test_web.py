import threading
import time
import urllib.error
import urllib.request

import flask
import pytest

from stocky2pc.controllers import Controller
from stocky2pc.web import HttpServer, create_app


class PingController(Controller):
    def __init__(self, reply):
        self.reply = reply

    def register(self, app):
        app.add_url_rule(f"/{self.reply}", endpoint=self.reply, view_func=lambda: flask.jsonify({"reply": self.reply}))


def test_create_app_registers_every_controller():
    client = create_app(PingController("one"), PingController("two")).test_client()
    assert client.get("/one").get_json() == {"reply": "one"}
    assert client.get("/two").get_json() == {"reply": "two"}
    assert client.get("/three").status_code == 404


def test_server_serves_until_shutdown():
    server = HttpServer("0", PingController("ping"))
    thread = threading.Thread(target=server.listen_and_serve, daemon=True)
    thread.start()
    deadline = time.monotonic() + 5
    while server.bound_port is None and time.monotonic() < deadline:
        time.sleep(0.01)
    port = server.bound_port
    with urllib.request.urlopen(f"http://127.0.0.1:{port}/ping", timeout=5) as response:
        assert response.status == 200
        assert b"ping" in response.read()
    with pytest.raises(urllib.error.HTTPError) as excinfo:
        urllib.request.urlopen(f"http://127.0.0.1:{port}/missing", timeout=5)
    assert excinfo.value.code == 404
    server.shutdown()
    thread.join(5)
    assert not thread.is_alive()


def test_listen_after_shutdown_fails():
    server = HttpServer("0")
    assert server.bound_port is None
    server.shutdown()
    with pytest.raises(RuntimeError, match="Server closed"):
        server.listen_and_serve()