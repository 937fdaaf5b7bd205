"""Unit tests for environment-driven settings."""

from __future__ import annotations

import pytest

from pokecollection import Settings

pytestmark = pytest.mark.unit


def test_defaults_with_empty_environment() -> None:
    s = Settings.from_env({})

    assert s.api_base == "https://pokeapi.co/api/v2"
    assert s.timeout == 60.0
    assert s.storage_key == "pokemons"
    assert s.persist_to_disk is False
    assert s.backup_path == "state.backup.json"


def test_environment_overrides() -> None:
    s = Settings.from_env(
        {
            "POKEDEX_API_BASE": "http://localhost:8000/api/v2/",
            "POKEDEX_HTTP_TIMEOUT": "2.5",
            "POKEDEX_STORAGE_KEY": "team",
            "POKEDEX_PERSIST_TO_DISK": "1",
            "POKEDEX_STATE_PATH": "/tmp/poke/save.json",
            "POKEDEX_LOG_LEVEL": "debug",
        }
    )

    assert s.api_base == "http://localhost:8000/api/v2"
    assert s.timeout == 2.5
    assert s.storage_key == "team"
    assert s.persist_to_disk is True
    assert s.backup_path == "/tmp/poke/save.backup.json"
    assert s.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["soon", "-3", "0"])
def test_bad_timeout_falls_back_to_default(raw: str) -> None:
    assert Settings.from_env({"POKEDEX_HTTP_TIMEOUT": raw}).timeout == 60.0


@pytest.mark.parametrize("raw,expected", [("0", False), ("yes", True), ("off", False), ("", False)])
def test_persist_flag_parsing(raw: str, expected: bool) -> None:
    assert Settings.from_env({"POKEDEX_PERSIST_TO_DISK": raw}).persist_to_disk is expected
