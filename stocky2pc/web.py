"""The HTTP server that exposes the controllers."""

from __future__ import annotations

import logging
import threading
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

import flask

from stocky2pc.controllers import Controller

_log = logging.getLogger("stocky2pc.web")


class _LoggingHandler(WSGIRequestHandler):
    def log_message(self, format: str, *args: object) -> None:
        _log.debug("%s - %s", self.address_string(), format % args)


def create_app(*args: Controller) -> flask.Flask:
    """Build a Flask application with every given controller registered."""
    app = flask.Flask("stocky2pc")
    for controller in args:
        controller.register(app)
    return app


class HttpServer:
    """Serves the controllers on ``port`` on all interfaces."""

    def __init__(self, port: str, *controllers: Controller, logger: logging.Logger | None = None) -> None:
        self.port = port
        self.app = create_app(*controllers)
        self.logger = logger or _log
        self._lock = threading.Lock()
        self._closed = False
        self._server: WSGIServer | None = None

    @property
    def bound_port(self) -> int | None:
        """The port actually listened on, or None before the server is bound."""
        server = self._server
        return None if server is None else server.server_port

    def listen_and_serve(self) -> None:
        """Serve requests until shutdown() is called; raise RuntimeError if already shut down."""
        with self._lock:
            if self._closed:
                raise RuntimeError("http: Server closed")
            self._server = make_server("", int(self.port), self.app, handler_class=_LoggingHandler)
        server = self._server
        self.logger.info("HTTP server listening on port %s", server.server_port)
        try:
            server.serve_forever()
        finally:
            server.server_close()

    def shutdown(self) -> None:
        """Stop serving and wait for the serving loop to finish."""
        with self._lock:
            self._closed = True
            server = self._server
        if server is not None:
            server.shutdown()