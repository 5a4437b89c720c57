"""
Tests for environment and thread-local configuration.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator

import pytest

from mstair.emailparts import config as cfg
from mstair.emailparts.config import SetterValidation


@pytest.fixture(autouse=True)
def clean_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear relevant env vars and thread overrides; do not read .env during tests."""
    monkeypatch.setattr(cfg, "load_dotenv_once", lambda: False)
    monkeypatch.delenv(cfg.ENV_SETTER_VALIDATION, raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    cfg.setter_validation(unset_override=True)
    cfg.in_desktop_mode(unset_override=True)
    cfg.in_test_mode(unset_override=True)
    yield
    cfg.setter_validation(unset_override=True)
    cfg.in_desktop_mode(unset_override=True)
    cfg.in_test_mode(unset_override=True)


def test_setter_validation_defaults_to_strict() -> None:
    assert cfg.setter_validation() is SetterValidation.STRICT


@pytest.mark.parametrize("raw", ["prefix", "PREFIX", " prefix "])
def test_setter_validation_from_environment(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv(cfg.ENV_SETTER_VALIDATION, raw)
    assert cfg.setter_validation() is SetterValidation.PREFIX


def test_unknown_environment_value_falls_back_to_strict(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    monkeypatch.setenv(cfg.ENV_SETTER_VALIDATION, "sloppy")
    with caplog.at_level(logging.WARNING, logger="mstair.emailparts.config"):
        assert cfg.setter_validation() is SetterValidation.STRICT
    assert any("sloppy" in m for m in caplog.messages), f"{caplog.messages=}"


def test_override_beats_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(cfg.ENV_SETTER_VALIDATION, "prefix")
    assert cfg.setter_validation(override="strict") is SetterValidation.STRICT
    assert cfg.setter_validation() is SetterValidation.STRICT
    assert cfg.setter_validation(unset_override=True) is SetterValidation.PREFIX


def test_invalid_override_raises() -> None:
    with pytest.raises(ValueError):
        cfg.setter_validation(override="sloppy")


def test_context_nests_and_restores() -> None:
    with cfg.setter_validation_context("prefix") as outer:
        assert outer is SetterValidation.PREFIX
        with cfg.setter_validation_context(SetterValidation.STRICT):
            assert cfg.setter_validation() is SetterValidation.STRICT
        assert cfg.setter_validation() is SetterValidation.PREFIX
    assert cfg.setter_validation() is SetterValidation.STRICT


def test_context_restores_after_exception() -> None:
    with pytest.raises(RuntimeError):
        with cfg.setter_validation_context("prefix"):
            raise RuntimeError("boom")
    assert cfg.setter_validation() is SetterValidation.STRICT


def test_override_is_thread_local() -> None:
    seen: list[SetterValidation] = []

    def worker() -> None:
        seen.append(cfg.setter_validation())

    with cfg.setter_validation_context("prefix"):
        t = threading.Thread(target=worker)
        t.start()
        t.join()
        assert cfg.setter_validation() is SetterValidation.PREFIX

    assert seen == [SetterValidation.STRICT]


def test_in_test_mode_detects_pytest() -> None:
    assert cfg.in_test_mode()
    assert cfg.in_test_mode(override=False) is False
    assert cfg.in_test_mode() is False


def test_in_desktop_mode_rules(monkeypatch: pytest.MonkeyPatch) -> None:
    assert cfg.in_desktop_mode()  # pytest is loaded
    monkeypatch.setenv("NO_COLOR", "1")
    assert not cfg.in_desktop_mode()
    assert cfg.in_desktop_mode(override=True)
