"""
Logging setup for pages: stdlib loggers rendered through structlog.

Engine modules log through ``logging.getLogger(__name__)`` and stay silent until
``configure_logging`` installs the pages handler on the root logger. Records from
stdlib and structlog loggers share one processor chain, rendered either for a
terminal or as JSON lines on stderr.

Notes
- Only the handler installed here is replaced on repeat calls; handlers owned by
  the host application stay attached.
- The ``pages`` logger level gates engine output (DEBUG when verbose, WARNING
  otherwise); the root logger stays at WARNING.
"""

from __future__ import annotations

import logging
import sys

import structlog

__all__ = [
    "PACKAGE_LOGGER",
    "configure_logging",
]

PACKAGE_LOGGER = "pages"

# Name given to the installed handler so repeat calls can find and replace it.
_HANDLER_NAME = "pages.stderr"


def _processor_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _stderr_handler(chain: list[structlog.types.Processor], log_json: bool) -> logging.Handler:
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    return handler


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """
    Route pages (and any structlog) records to stderr.

    Args:
        verbose (bool): Let DEBUG records from ``pages.*`` loggers through.
        log_json (bool): Render JSON lines instead of console output.
    """
    chain = _processor_chain()
    structlog.configure(
        processors=[*chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for handler in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(handler)
        handler.close()
    root.addHandler(_stderr_handler(chain, log_json))
    root.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
