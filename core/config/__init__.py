"""
Runtime Configuration Module

Provides configuration loading and the explorer network registry.
"""

from .networks import NetworkInfo, NetworkRegistry
from .runtime import (
    ExplorerConfig,
    HttpConfig,
    PollConfig,
    RuntimeConfig,
    get_default_config_template,
)

__all__ = [
    "ExplorerConfig",
    "HttpConfig",
    "NetworkInfo",
    "NetworkRegistry",
    "PollConfig",
    "RuntimeConfig",
    "get_default_config_template",
]
