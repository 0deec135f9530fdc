"""Configuration models and loaders for chop-csv."""

from .loader import ConfigError, DEFAULT_CONFIG_PATH, dump_example_config, load_config
from .models import ChopConfig, InputConfig, OutputConfig

__all__ = [
    "ChopConfig",
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "InputConfig",
    "OutputConfig",
    "dump_example_config",
    "load_config",
]
