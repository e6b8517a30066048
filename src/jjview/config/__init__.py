"""Configuration loading, schema, and defaults."""

from jjview.config.loader import ConfigError, load_config
from jjview.config.schema import JjConfig, JjViewConfig, KeymapConfig, SummaryConfig

__all__ = [
    "ConfigError",
    "JjConfig",
    "JjViewConfig",
    "KeymapConfig",
    "SummaryConfig",
    "load_config",
]
