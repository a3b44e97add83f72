"""
Runtime settings for the pages package.

Defines PagesSettings, a frozen pydantic model carrying the process-level
configuration (currently logging behavior). Settings are loaded with the
precedence env > TOML > defaults.

Source of truth
- Environment variables prefixed ``PAGES_`` (e.g. ``PAGES_VERBOSE``).
- ``./pages.toml`` with either a ``[logging]`` table or top-level keys.
- ``./pyproject.toml`` under ``[tool.pages]``.

Notes
- The mapping engine itself reads no settings; its registries are configured in code.
- Unknown keys in TOML are ignored; unknown keyword arguments to the model are rejected.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

__all__ = [
    "PagesSettings",
]

_TRUTHY = {"1", "true", "t", "yes", "y", "on"}
_FALSY = {"0", "false", "f", "no", "n", "off"}


class PagesSettings(BaseModel):
    """
    Process-level settings.

    Attributes:
        verbose (bool): Emit DEBUG logs from ``pages`` loggers (WARNING otherwise).
        log_json (bool): Render logs as JSON lines instead of console output.

    Examples:
        >>> from pages.config import PagesSettings
        >>> PagesSettings(verbose="yes").verbose
        True
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    verbose: bool = False
    log_json: bool = False

    @field_validator("verbose", "log_json", mode="before")
    @classmethod
    def _normalize_bool(cls, v: Any) -> Any:
        if isinstance(v, str):
            lo = v.strip().lower()
            if lo in _TRUTHY:
                return True
            if lo in _FALSY:
                return False
        return v

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: PagesSettings, cfg: dict[str, Any] | None) -> PagesSettings:
        """Apply a loose config mapping onto ``base``, returning a new instance."""
        if not isinstance(cfg, dict):
            return base
        known = {k: v for k, v in cfg.items() if k in cls.model_fields}
        if not known:
            return base
        return cls.model_validate({**base.model_dump(), **known})

    @classmethod
    def from_env(cls, base: PagesSettings | None = None, prefix: str = "PAGES_") -> PagesSettings:
        """
        Build settings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - PAGES_VERBOSE (1/0/true/false/yes/no/on/off)
            - PAGES_LOG_JSON (1/0/true/false/yes/no/on/off)
        """
        s = base or cls()
        mapping: dict[str, Any] = {}
        for name in cls.model_fields:
            v = os.getenv(prefix + name.upper())
            if v:
                mapping[name] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> PagesSettings:
        """
        Build settings from a TOML file.

        Search order when ``path`` is None:
            1) ./pages.toml (with either a [logging] table or top-level keys)
            2) ./pyproject.toml under [tool.pages]

        Returns defaults if no candidate file exists.
        """
        s = cls()
        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "pages.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.is_file():
                continue
            with p.open("rb") as fh:
                data = tomllib.load(fh)
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("pages") if isinstance(tool, dict) else None
            elif isinstance(data.get("logging"), dict):
                cfg = data["logging"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> PagesSettings:
        """
        Load settings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (pages.toml, pyproject.toml).
        """
        s = cls.from_toml(path)
        return cls.from_env(base=s)

    def configure(self) -> None:
        """Apply these settings to the logging stack."""
        from .logging import configure_logging

        configure_logging(verbose=self.verbose, log_json=self.log_json)
