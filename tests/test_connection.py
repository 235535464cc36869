from datetime import timedelta
from unittest import mock

import pytest

from stocky2pc.connection import new_grpc_channel


def test_insecure_channel_is_returned():
    channel = object()
    with mock.patch("grpc.insecure_channel", return_value=channel) as opener:
        assert new_grpc_channel("host:1", 0, 0, True) is channel
    opener.assert_called_once_with("host:1")


def test_secure_channel_uses_tls_credentials():
    channel = object()
    credentials = object()
    with mock.patch("grpc.ssl_channel_credentials", return_value=credentials), mock.patch(
        "grpc.secure_channel", return_value=channel
    ) as opener:
        assert new_grpc_channel("host:2", 0, 0, False) is channel
    opener.assert_called_once_with("host:2", credentials)


def test_retries_until_success():
    channel = object()
    failures = [RuntimeError("a"), RuntimeError("b"), channel]
    with mock.patch("grpc.insecure_channel", side_effect=failures) as opener, mock.patch(
        "time.sleep"
    ) as sleep:
        assert new_grpc_channel("host:3", timedelta(seconds=2), 2, True) is channel
    assert opener.call_count == 3
    assert sleep.call_args_list == [mock.call(2.0), mock.call(2.0)]


def test_gives_up_after_all_tries():
    with mock.patch("grpc.insecure_channel", side_effect=RuntimeError("down")) as opener, mock.patch(
        "time.sleep"
    ):
        with pytest.raises(RuntimeError, match="down"):
            new_grpc_channel("host:4", 1, 2, True)
    assert opener.call_count == 3


def test_negative_tries_rejected():
    with pytest.raises(ValueError):
        new_grpc_channel("host:5", 0, -1, True)