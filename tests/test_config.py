import pytest

from stocky2pc.config import (
    Config,
    ConfigError,
    GRPCClientConfig,
    RestServerConfig,
    load_config,
    parse_duration,
)

SAMPLE = """
rest_server:
  port: 9090
scs:
  address: scs:50051
  insecure: true
  timeout: 2s
  tries: 3
oms:
  address: ${OMS_HOST}:50052
  insecure: false
  timeout: 500ms
  tries: 1
"""


def write(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_sample(tmp_path):
    config = load_config(write(tmp_path, SAMPLE), {"OMS_HOST": "orders"})
    assert config.rest_server == RestServerConfig(port="9090")
    assert config.scs == GRPCClientConfig(address="scs:50051", insecure=True, timeout=2.0, tries=3)
    assert config.oms.address == "orders:50052"
    assert config.oms.timeout == parse_duration("500ms")
    assert config.sms == GRPCClientConfig()
    assert config.iims == GRPCClientConfig()


def test_default_port(tmp_path):
    config = load_config(write(tmp_path, "scs:\n  address: a\n"), {})
    assert config.rest_server.port == "8080"


def test_empty_file_gives_defaults(tmp_path):
    assert load_config(write(tmp_path, ""), {}) == Config()


def test_environment_overrides_known_keys(tmp_path):
    environ = {"2PC_SCS_ADDRESS": "override:1", "2PC_REST_SERVER_PORT": "7000", "2PC_SMS_ADDRESS": "ignored"}
    config = load_config(write(tmp_path, SAMPLE), environ)
    assert config.scs.address == "override:1"
    assert config.rest_server.port == "7000"
    assert config.sms.address == ""


def test_empty_environment_value_is_ignored(tmp_path):
    config = load_config(write(tmp_path, SAMPLE), {"2PC_SCS_ADDRESS": ""})
    assert config.scs.address == "scs:50051"


def test_unset_variable_expands_to_empty(tmp_path):
    config = load_config(write(tmp_path, SAMPLE), {})
    assert config.oms.address == ":50052"


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "absent.yaml", {})


@pytest.mark.parametrize(
    "text",
    [
        "scs:\n  timeout: 5000\n",
        "scs:\n  timeout: ''\n",
        "scs:\n  insecure: maybe\n",
        "scs:\n  tries: many\n",
        "scs: plain\n",
        "- a\n- b\n",
    ],
)
def test_invalid_values(tmp_path, text):
    with pytest.raises(ConfigError):
        load_config(write(tmp_path, text), {})


def test_parse_duration_units_agree():
    assert parse_duration("1h") == parse_duration("60m") == parse_duration("3600s")
    assert parse_duration("1s") == parse_duration("1000ms")
    assert parse_duration("1h30m") == parse_duration("90m")


def test_parse_duration_signs_and_zero():
    assert parse_duration("0") == 0.0
    assert parse_duration("-1.5s") == -1.5
    assert parse_duration("+2s") == parse_duration("2s")


@pytest.mark.parametrize("text", ["", "5", "s", ".s", "1x", "-", "1s2"])
def test_parse_duration_rejects(text):
    with pytest.raises(ConfigError):
        parse_duration(text)