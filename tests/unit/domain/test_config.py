from __future__ import annotations

"""
Unit tests for Client Configuration.

Verifies default routing, JSON loading and validation/coercion rules.
"""

import json
from pathlib import Path

import pytest

from subdb.domain.config import ClientConfig, get_default_config, load_config, validate_config
from subdb.domain.constants import PRODUCTION_ENDPOINT, SANDBOX_ENDPOINT
from subdb.domain.errors import ConfigError


def test_default_routing() -> None:
    """Reads go to the sandbox, uploads to production, GET timeout 5s, no upload timeout."""
    cfg = ClientConfig()
    assert cfg.read_endpoint == SANDBOX_ENDPOINT
    assert cfg.upload_endpoint == PRODUCTION_ENDPOINT
    assert cfg.read_timeout == 5.0
    assert cfg.upload_timeout is None


def test_from_dict_of_defaults_matches_dataclass_defaults() -> None:
    conf, warnings = validate_config(get_default_config())
    assert warnings == []
    assert ClientConfig.from_dict(conf) == ClientConfig()


def test_load_config_from_file(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "read_endpoint": "http://api.thesubdb.com",
        "client_name": "MyApp",
        "bogus": 1,
    }), encoding="utf-8")

    conf = load_config(str(path))

    assert conf["read_endpoint"] == "http://api.thesubdb.com"
    assert conf["client_name"] == "MyApp"
    assert "bogus" not in conf
    assert conf["upload_endpoint"] == PRODUCTION_ENDPOINT


def test_load_config_explicit_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "missing.json"))


def test_load_config_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError) as exc_info:
        load_config(str(path))
    assert exc_info.value.config_path == str(path)


def test_load_config_rejects_non_object(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(str(path))


def test_load_config_default_location_absent(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("LOCALAPPDATA", str(tmp_path))
    assert load_config() == get_default_config()


def test_validate_coerces_and_warns() -> None:
    conf, warnings = validate_config({
        "read_endpoint": "http://sandbox.local/",
        "upload_endpoint": "ftp://nope",
        "read_timeout": "2.5",
        "upload_timeout": -1,
        "client_name": "  ",
    })

    assert conf["read_endpoint"] == "http://sandbox.local"
    assert conf["upload_endpoint"] == PRODUCTION_ENDPOINT
    assert conf["read_timeout"] == 2.5
    assert conf["upload_timeout"] is None
    assert conf["client_name"] is None
    assert len(warnings) == 2


def test_validate_strict_raises() -> None:
    with pytest.raises(ValueError):
        validate_config({"read_timeout": 0}, strict=True)


def test_validate_non_dict() -> None:
    conf, warnings = validate_config(["x"])
    assert conf == get_default_config()
    assert warnings
