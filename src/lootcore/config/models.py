"""
Pydantic 配置模型，提供类型安全的配置与 YAML 加载。
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field

CONFIG_ENV_VAR = "LOOTCORE_CONFIG"


class EventBusConfig(BaseModel):
    history_size: int = Field(default=100, gt=0)
    debug: bool = False
    # 并发派发的默认超时（秒），None 表示不限时
    default_timeout: Optional[float] = Field(default=None, gt=0)


class RegistryConfig(BaseModel):
    emit_lifecycle_events: bool = True


class LoggingConfig(BaseModel):
    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"
    sink: Literal["stderr", "stdout"] = "stderr"


class CoreConfig(BaseModel):
    event_bus: EventBusConfig = EventBusConfig()
    registry: RegistryConfig = RegistryConfig()
    logging: LoggingConfig = LoggingConfig()

    @classmethod
    def from_yaml(cls, path: str | Path) -> "CoreConfig":
        file_path = Path(path).expanduser()
        if not file_path.exists():
            raise FileNotFoundError(f"Config file not found: {file_path}")
        data = yaml.safe_load(file_path.read_text(encoding="utf-8")) or {}
        return cls(**data)


def load_config(path: Optional[str | Path] = None) -> CoreConfig:
    """按 入参 > 环境变量 > 默认值 的顺序加载配置。"""
    cfg_path = path or os.getenv(CONFIG_ENV_VAR)
    if cfg_path:
        return CoreConfig.from_yaml(cfg_path)
    return CoreConfig()
