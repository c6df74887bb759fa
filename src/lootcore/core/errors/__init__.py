"""
统一错误模块。
"""

from .errors import (
    ErrorSeverity,
    LootCoreError,
    CircularDependencyError,
    ComponentNotRegisteredError,
    RegistryAlreadyInitializedError,
    InvalidStateTransitionError,
    ListenerError,
    ListenerTimeoutError,
)

__all__ = [
    "ErrorSeverity",
    "LootCoreError",
    "CircularDependencyError",
    "ComponentNotRegisteredError",
    "RegistryAlreadyInitializedError",
    "InvalidStateTransitionError",
    "ListenerError",
    "ListenerTimeoutError",
]
