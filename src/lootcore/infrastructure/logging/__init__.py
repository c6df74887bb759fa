"""
Logging Infrastructure

Configures the loguru sink used by the registry and event bus.
"""

from .setup import setup_logging

__all__ = ["setup_logging"]
