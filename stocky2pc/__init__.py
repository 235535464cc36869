"""Order coordinator: HTTP endpoints that create orders across stock, order and inventory services."""

__version__ = "0.1.0"