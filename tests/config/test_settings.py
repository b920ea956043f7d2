from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from dotsketch.config.settings import Settings, get_settings


def test_defaults(monkeypatch) -> None:
    monkeypatch.chdir(Path(__file__).parent)
    settings = Settings()
    assert settings.dimensions == (2048, 2048)
    assert settings.grain == "parallel"
    assert settings.footer is True
    assert settings.palette == "riso"
    assert settings.seed == ""


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("DOTSKETCH_WIDTH", "640")
    monkeypatch.setenv("DOTSKETCH_HEIGHT", "480")
    monkeypatch.setenv("DOTSKETCH_GRAIN", "invert")
    monkeypatch.setenv("DOTSKETCH_FOOTER", "false")
    settings = get_settings()
    assert settings.dimensions == (640, 480)
    assert settings.grain == "invert"
    assert settings.footer is False


def test_settings_are_cached() -> None:
    assert get_settings() is get_settings()


def test_size_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(width=0)
