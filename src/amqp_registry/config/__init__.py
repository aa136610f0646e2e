from .loader import DEFAULT_CONFIG_KEY, config_from_mapping, load_config
from .models import AmqpConfig, BindingConfig, ExchangeConfig, QueueConfig

__all__ = [
    "AmqpConfig",
    "BindingConfig",
    "DEFAULT_CONFIG_KEY",
    "ExchangeConfig",
    "QueueConfig",
    "config_from_mapping",
    "load_config",
]
