"""
pages.config: settings and logging setup.

## Public API
- PagesSettings: process-level settings (env > TOML > defaults).
- configure_logging: structlog + stdlib logging routing to stderr.

## Import DAG discipline
- Depends only on stdlib, pydantic and structlog.
- MUST NOT import ``pages.mapping``; the engine is usable without configuration.
"""

from __future__ import annotations

from .logging import configure_logging
from .settings import PagesSettings

__all__ = [
    "PagesSettings",
    "configure_logging",
]
