from __future__ import annotations

from pathlib import Path

import pytest

from trellis.config import (
    DEFAULT_CONFIG_NAME,
    ServerConfig,
    build_server_config,
    load_config,
    load_server_config,
    server_defaults,
)
from trellis.exceptions import ConfigError
from tests.lsp_helpers import trellis_env


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_missing_file_yields_defaults(tmp_path: Path) -> None:
    assert load_config(root=tmp_path) == {}
    assert load_server_config(root=tmp_path, environ={}) == ServerConfig()


def test_invalid_toml_is_ignored(tmp_path: Path) -> None:
    path = _write(tmp_path / DEFAULT_CONFIG_NAME, "[server\nport = ")
    assert load_config(config_path=path) == {}


def test_server_section_is_read(tmp_path: Path) -> None:
    _write(
        tmp_path / DEFAULT_CONFIG_NAME,
        "[server]\n"
        'transport = "TCP"\n'
        "port = 9000\n"
        "workers = 2\n"
        'log_level = "debug"\n'
        "debug_messages = true\n"
        "request_timeout_ms = 500\n",
    )
    config = load_server_config(root=tmp_path, environ={})
    assert config.transport == "tcp"
    assert config.port == 9000
    assert config.workers == 2
    assert config.log_level == "DEBUG"
    assert config.debug_messages is True
    assert config.request_timeout_ms == 500
    assert config.call_timeout_ms == ServerConfig().call_timeout_ms


def test_non_table_server_section_is_ignored(tmp_path: Path) -> None:
    _write(tmp_path / DEFAULT_CONFIG_NAME, 'server = "tcp"\n')
    assert server_defaults(root=tmp_path) == {}


def test_environment_overrides_file(tmp_path: Path) -> None:
    path = _write(tmp_path / "custom.toml", "[server]\nport = 9000\nworkers = 8\n")
    config = load_server_config(
        config_path=path,
        environ={"TRELLIS_PORT": "9100", "TRELLIS_DEBUG_MESSAGES": "yes", "TRELLIS_HOST": " "},
    )
    assert config.port == 9100
    assert config.workers == 8
    assert config.debug_messages is True
    assert config.host == ServerConfig().host


@pytest.mark.parametrize(
    "section",
    [
        {"transport": "pipe"},
        {"port": 70000},
        {"port": "eighty"},
        {"workers": 0},
        {"workers": True},
        {"call_timeout_ms": -5},
        {"log_level": "chatty"},
    ],
)
def test_invalid_values_are_rejected(section: dict) -> None:
    with pytest.raises(ConfigError) as excinfo:
        build_server_config(section)
    (key,) = section
    assert excinfo.value.key == key
    assert isinstance(excinfo.value, ValueError)


def test_config_is_frozen() -> None:
    config = build_server_config({})
    with pytest.raises(AttributeError):
        config.port = 1  # type: ignore[misc]


def test_process_environment_is_read_by_default(tmp_path: Path) -> None:
    with trellis_env(transport="tcp", workers="3"):
        config = load_server_config(root=tmp_path)
    assert config.transport == "tcp"
    assert config.workers == 3
