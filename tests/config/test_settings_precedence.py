from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from pages.config import PagesSettings

_ENV_KEYS = ["PAGES_VERBOSE", "PAGES_LOG_JSON"]


def _write(tmp: Path, name: str, content: str) -> Path:
    p = tmp / name
    p.write_text(content)
    return p


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write(
        tmp_path,
        "pages.toml",
        """
        [logging]
        verbose = true
        log_json = true
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PAGES_LOG_JSON", "off")

    s = PagesSettings.load()

    assert s.verbose is True  # from TOML
    assert s.log_json is False  # env override


def test_settings_from_toml_top_level_keys(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write(tmp_path, "pages.toml", "verbose = true\n")
    monkeypatch.chdir(tmp_path)

    s = PagesSettings.load()

    assert s.verbose is True
    assert s.log_json is False


def test_settings_from_pyproject(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write(
        tmp_path,
        "pyproject.toml",
        """
        [project]
        name = "demo"

        [tool.pages]
        log_json = true
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)

    assert PagesSettings.load().log_json is True


def test_settings_explicit_path(tmp_path: Path) -> None:
    p = _write(tmp_path, "custom.toml", "[logging]\nverbose = true\n")
    assert PagesSettings.from_toml(p).verbose is True


def test_settings_defaults_when_no_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    s = PagesSettings.load()

    assert s == PagesSettings()
    assert s.verbose is False
    assert s.log_json is False


def test_settings_ignore_unknown_toml_keys(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write(tmp_path, "pages.toml", "colour = 'blue'\nverbose = 'yes'\n")
    monkeypatch.chdir(tmp_path)

    assert PagesSettings.load().verbose is True


def test_settings_model_is_strict() -> None:
    with pytest.raises(ValidationError):
        PagesSettings(colour="blue")  # type: ignore[call-arg]
    s = PagesSettings()
    with pytest.raises(ValidationError):
        s.verbose = True  # type: ignore[misc]


def test_configure_applies_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, bool]] = []
    monkeypatch.setattr(
        "pages.config.logging.configure_logging",
        lambda **kwargs: calls.append(kwargs),
    )

    PagesSettings(verbose=True).configure()

    assert calls == [{"verbose": True, "log_json": False}]
