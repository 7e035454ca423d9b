from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, time
from pathlib import Path
from typing import Mapping, TypeAlias
import os
import tomllib

from trellis.exceptions import ConfigError

DEFAULT_CONFIG_NAME = "trellis.toml"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]

TRANSPORTS = frozenset({"stdio", "tcp", "ws"})
LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

_ENV_KEYS = {
    "transport": "TRELLIS_TRANSPORT",
    "host": "TRELLIS_HOST",
    "port": "TRELLIS_PORT",
    "workers": "TRELLIS_WORKERS",
    "log_level": "TRELLIS_LOG_LEVEL",
    "debug_messages": "TRELLIS_DEBUG_MESSAGES",
    "request_timeout_ms": "TRELLIS_REQUEST_TIMEOUT_MS",
    "call_timeout_ms": "TRELLIS_CALL_TIMEOUT_MS",
}


@dataclass(frozen=True)
class ServerConfig:
    """Transport settings.

    ``request_timeout_ms`` of ``0`` leaves inbound requests without a
    deadline; ``call_timeout_ms`` bounds how long an outbound request waits
    for the client's reply.
    """

    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = 2087
    workers: int = 4
    log_level: str = "WARNING"
    debug_messages: bool = False
    request_timeout_ms: int = 0
    call_timeout_ms: int = 30_000


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def server_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get("server", {})
    return section if isinstance(section, dict) else {}


def _as_bool(value: TomlValue) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return False


def _as_int(key: str, value: TomlValue, *, minimum: int, maximum: int | None = None) -> int:
    if isinstance(value, bool):
        raise ConfigError("invalid config integer", key=key, value=value)
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            raise ConfigError("invalid config integer", key=key, value=value) from None
    else:
        raise ConfigError("invalid config integer", key=key, value=value)
    if number < minimum or (maximum is not None and number > maximum):
        raise ConfigError("config integer out of range", key=key, value=number)
    return number


def _as_choice(key: str, value: TomlValue, choices: frozenset[str], *, upper: bool) -> str:
    text = str(value).strip()
    text = text.upper() if upper else text.lower()
    if text not in choices:
        raise ConfigError(
            f"expected one of {', '.join(sorted(choices))}", key=key, value=value
        )
    return text


def _env_section(environ: Mapping[str, str]) -> TomlTable:
    section: TomlTable = {}
    for key, env_key in _ENV_KEYS.items():
        raw = environ.get(env_key, "").strip()
        if raw:
            section[key] = raw
    return section


def build_server_config(section: Mapping[str, TomlValue]) -> ServerConfig:
    config = ServerConfig()
    updates: dict[str, object] = {}
    if "transport" in section:
        updates["transport"] = _as_choice(
            "transport", section["transport"], TRANSPORTS, upper=False
        )
    if "host" in section:
        updates["host"] = str(section["host"]).strip()
    if "port" in section:
        updates["port"] = _as_int("port", section["port"], minimum=0, maximum=65535)
    if "workers" in section:
        updates["workers"] = _as_int("workers", section["workers"], minimum=1)
    if "log_level" in section:
        updates["log_level"] = _as_choice(
            "log_level", section["log_level"], LOG_LEVELS, upper=True
        )
    if "debug_messages" in section:
        updates["debug_messages"] = _as_bool(section["debug_messages"])
    for key in ("request_timeout_ms", "call_timeout_ms"):
        if key in section:
            updates[key] = _as_int(key, section[key], minimum=0)
    return replace(config, **updates)


def load_server_config(
    root: Path | None = None,
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ServerConfig:
    """``[server]`` from ``trellis.toml`` with ``TRELLIS_*`` variables on top."""
    section = dict(server_defaults(root=root, config_path=config_path))
    section.update(_env_section(os.environ if environ is None else environ))
    return build_server_config(section)
