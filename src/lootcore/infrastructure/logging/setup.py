"""
Logging setup for lootcore.

Registry and event bus diagnostics go through loguru; this module installs a
single sink configured from ``LoggingConfig``.
"""

from __future__ import annotations

import sys
from typing import Optional

from loguru import logger

from lootcore.config.models import LoggingConfig

_handler_id: Optional[int] = None


def setup_logging(config: Optional[LoggingConfig] = None) -> int:
    """
    Install (or replace) the lootcore loguru sink.

    Only the handler added by a previous call is removed, so sinks configured by
    the host application are left alone.
    """
    global _handler_id
    cfg = config or LoggingConfig()

    if _handler_id is not None:
        try:
            logger.remove(_handler_id)
        except ValueError:
            pass  # already removed by the host application

    stream = sys.stdout if cfg.sink == "stdout" else sys.stderr
    _handler_id = logger.add(stream, level=cfg.level, format=cfg.format)
    return _handler_id
