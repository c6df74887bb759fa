"""
统一错误定义，注册表与事件总线按严重级别区分可恢复与致命错误。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List


class ErrorSeverity(Enum):
    WARNING = "warning"      # 可继续
    ERROR = "error"          # 当前操作失败
    CRITICAL = "critical"    # 初始化流程终止


@dataclass(eq=False)
class LootCoreError(Exception):
    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    code: str = "UNKNOWN"
    context: Dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class CircularDependencyError(LootCoreError):
    code = "CIRCULAR_DEPENDENCY"
    severity = ErrorSeverity.CRITICAL

    def __init__(self, name: str, cycle: List[str]):
        path = " -> ".join(cycle)
        super().__init__(
            message=f"Circular dependency detected involving '{name}': {path}",
            severity=ErrorSeverity.CRITICAL,
            code="CIRCULAR_DEPENDENCY",
            context={"name": name, "cycle": list(cycle)},
        )

    @property
    def cycle(self) -> List[str]:
        return list((self.context or {}).get("cycle", []))


class ComponentNotRegisteredError(LootCoreError):
    code = "NOT_REGISTERED"

    def __init__(self, name: str):
        super().__init__(
            message=f"Component '{name}' not registered",
            code="NOT_REGISTERED",
            context={"name": name},
        )


class RegistryAlreadyInitializedError(LootCoreError):
    code = "ALREADY_INITIALIZED"

    def __init__(self) -> None:
        super().__init__(message="ComponentRegistry already initialized", code="ALREADY_INITIALIZED")


class InvalidStateTransitionError(LootCoreError):
    code = "INVALID_TRANSITION"

    def __init__(self, name: str, current: str, target: str):
        super().__init__(
            message=f"Component '{name}' cannot move from {current} to {target}",
            code="INVALID_TRANSITION",
            context={"name": name, "current": current, "target": target},
        )


class ListenerError(LootCoreError):
    code = "LISTENER_ERROR"

    def __init__(self, message: str, listener_id: str | None = None):
        super().__init__(
            message=message,
            code="LISTENER_ERROR",
            context={"listener_id": listener_id},
        )


class ListenerTimeoutError(LootCoreError):
    code = "LISTENER_TIMEOUT"

    def __init__(self, listener_id: str, timeout: float):
        super().__init__(
            message=f"Listener {listener_id} did not complete within {timeout}s",
            code="LISTENER_TIMEOUT",
            context={"listener_id": listener_id, "timeout": timeout},
        )
