"""Service configuration read from a YAML file with environment overrides."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

ENV_PREFIX = "2PC"
DEFAULT_CONFIG_PATH = Path("config") / "config.yaml"
DEFAULT_PORT = "8080"

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d*)(?:\.(\d*))?(ns|us|µs|μs|ms|s|m|h)")
_ENV_REFERENCE = re.compile(r"\$(?:\{([^}]*)\}|([*#$@!?\-0-9])|([A-Za-z_][A-Za-z0-9_]*))")
_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}
_CLIENT_SECTIONS = ("scs", "sms", "oms", "iims")


class ConfigError(Exception):
    """The configuration could not be read or holds an invalid value."""


@dataclass(frozen=True)
class GRPCClientConfig:
    """Where and how to reach one backend; timeout is in seconds."""

    address: str = ""
    insecure: bool = False
    timeout: float = 0.0
    tries: int = 0


@dataclass(frozen=True)
class RestServerConfig:
    """Settings of the HTTP server."""

    port: str = DEFAULT_PORT


@dataclass(frozen=True)
class Config:
    """The whole controller configuration."""

    rest_server: RestServerConfig = field(default_factory=RestServerConfig)
    scs: GRPCClientConfig = field(default_factory=GRPCClientConfig)
    sms: GRPCClientConfig = field(default_factory=GRPCClientConfig)
    oms: GRPCClientConfig = field(default_factory=GRPCClientConfig)
    iims: GRPCClientConfig = field(default_factory=GRPCClientConfig)


def parse_duration(text: str) -> float:
    """Parse a duration such as "300ms" or "1h30m" into seconds."""
    rest = text
    sign = 1.0
    if rest and rest[0] in "+-":
        sign = -1.0 if rest[0] == "-" else 1.0
        rest = rest[1:]
    if rest == "0":
        return 0.0
    if not rest:
        raise ConfigError(f"invalid duration {text!r}")
    total = 0.0
    pos = 0
    while pos < len(rest):
        match = _DURATION_PART.match(rest, pos)
        if match is None or not (match.group(1) or match.group(2)):
            raise ConfigError(f"invalid duration {text!r}")
        whole, fraction, unit = match.groups()
        total += float(f"{whole or '0'}.{fraction or '0'}") * _UNIT_SECONDS[unit]
        pos = match.end()
    return sign * total


def _expand_env(text: str, environ: Mapping[str, str]) -> str:
    def replace(match: re.Match[str]) -> str:
        name = next(group for group in match.groups() if group is not None)
        return environ.get(name, "")

    return _ENV_REFERENCE.sub(replace, text)


def _to_string(value: Any) -> str:
    if value is None or isinstance(value, (list, dict)):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _flatten(data: Mapping[Any, Any], prefix: str = "") -> dict[str, Any]:
    leaves: dict[str, Any] = {}
    for key, value in data.items():
        name = f"{prefix}{str(key).lower()}"
        if isinstance(value, Mapping):
            leaves.update(_flatten(value, f"{name}."))
        else:
            leaves[name] = value
    return leaves


def _env_key(key: str) -> str:
    return f"{ENV_PREFIX}_{key.replace('.', '_')}".upper()


def _parse_bool(text: str, key: str) -> bool:
    if text == "" or text in _FALSE:
        return False
    if text in _TRUE:
        return True
    raise ConfigError(f"{key}: cannot parse {text!r} as a boolean")


def _parse_int(text: str, key: str) -> int:
    if text == "":
        return 0
    try:
        return int(text, 0)
    except ValueError:
        if re.fullmatch(r"[+-]?0[0-7]+", text):
            return int(text, 8)
        raise ConfigError(f"{key}: cannot parse {text!r} as an integer") from None


def _check_section(settings: Mapping[str, str], name: str) -> None:
    if name in settings:
        raise ConfigError(f"section {name!r} must be a mapping")


def _client_config(settings: Mapping[str, str], name: str) -> GRPCClientConfig:
    _check_section(settings, name)
    keys = {part: f"{name}.{part}" for part in ("address", "insecure", "timeout", "tries")}
    return GRPCClientConfig(
        address=settings.get(keys["address"], ""),
        insecure=_parse_bool(settings[keys["insecure"]], keys["insecure"])
        if keys["insecure"] in settings
        else False,
        timeout=parse_duration(settings[keys["timeout"]]) if keys["timeout"] in settings else 0.0,
        tries=_parse_int(settings[keys["tries"]], keys["tries"]) if keys["tries"] in settings else 0,
    )


def load_config(path: str | os.PathLike[str] | None = None, environ: Mapping[str, str] | None = None) -> Config:
    """Read the YAML configuration, apply 2PC_* overrides and expand $VARIABLES."""
    env = os.environ if environ is None else environ
    config_path = DEFAULT_CONFIG_PATH if path is None else Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read config file {config_path}: {exc}") from exc
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"cannot parse config file {config_path}: {exc}") from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise ConfigError("the configuration must be a mapping")

    settings: dict[str, str] = {}
    for key, value in _flatten(raw).items():
        override = env.get(_env_key(key), "")
        settings[key] = _expand_env(override or _to_string(value), env)

    _check_section(settings, "rest_server")
    port = settings.get("rest_server.port", "") or DEFAULT_PORT
    clients = {name: _client_config(settings, name) for name in _CLIENT_SECTIONS}
    return Config(rest_server=RestServerConfig(port=port), **clients)