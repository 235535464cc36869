"""Opening gRPC channels to the backend services."""

from __future__ import annotations

import time
from datetime import timedelta

import grpc


def new_grpc_channel(address: str, timeout: float | timedelta, tries: int, insecure: bool) -> grpc.Channel:
    """Open a channel, retrying up to ``tries`` more times with ``timeout`` seconds between attempts."""
    if tries < 0:
        raise ValueError("tries must not be negative")
    delay = timeout.total_seconds() if isinstance(timeout, timedelta) else float(timeout)
    for attempt in range(tries + 1):
        try:
            if insecure:
                return grpc.insecure_channel(address)
            return grpc.secure_channel(address, grpc.ssl_channel_credentials())
        except Exception:
            if attempt == tries:
                raise
            time.sleep(delay)
    raise AssertionError("unreachable")