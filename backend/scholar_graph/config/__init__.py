"""Configuration package."""

from scholar_graph.config.settings import (
    Settings,
    get_analytics_config,
    get_settings,
    load_yaml_config,
    settings,
)

__all__ = [
    "Settings",
    "get_analytics_config",
    "get_settings",
    "load_yaml_config",
    "settings",
]
