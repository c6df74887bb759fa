from .models import (
    CONFIG_ENV_VAR,
    CoreConfig,
    EventBusConfig,
    LoggingConfig,
    RegistryConfig,
    load_config,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "CoreConfig",
    "EventBusConfig",
    "LoggingConfig",
    "RegistryConfig",
    "load_config",
]
