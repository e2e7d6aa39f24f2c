"""Structured logging for ledgerview.

Projectors report what they wrote as structlog events named after the
change (``proposal_submitted``, ``proposal_vote``, ``validator_created``)
with the identifying fields as keywords:

    logger = projector_logger("gov")
    logger.info("proposal_vote", proposal_id=7, voter="like1...")

The dispatcher wraps each transaction in tx_context(), so every event
logged while it is projected also carries ``height`` and ``tx_hash``.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.types import Processor

_configured = False


def configure_logging(
    json_format: bool = False,
    level: int = logging.INFO,
    logger_factory: Any = None,
) -> None:
    """Configure structlog for ledgerview.

    Called lazily by the first get_logger(); call it explicitly at startup
    to choose the format or level.

    Args:
        json_format: One JSON object per line instead of console output
        level: Minimum level that is emitted
        logger_factory: Replacement for the stdout print logger
    """
    global _configured

    logging.basicConfig(level=level, format="%(message)s", stream=sys.stdout)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if json_format:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(exception_formatter=structlog.dev.plain_traceback))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=logger_factory or structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str) -> Any:
    if not _configured:
        configure_logging()
    return structlog.get_logger(name)


def projector_logger(module: str) -> Any:
    """Logger for a projector, with ``module`` bound (e.g. "gov", "staking")."""
    return get_logger(f"ledgerview.{module}").bind(module=module)


@contextmanager
def tx_context(height: int, tx_hash: str) -> Iterator[None]:
    """
    Bind the transaction's height and hash to every event logged inside.

    Previous values of the two keys are restored on exit, including when
    the block raises.
    """
    tokens = structlog.contextvars.bind_contextvars(height=height, tx_hash=tx_hash)
    try:
        yield
    finally:
        structlog.contextvars.reset_contextvars(**tokens)
