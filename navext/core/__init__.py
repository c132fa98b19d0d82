"""
Core infrastructure: configuration, logging, container scopes and events.
"""
from navext.core.events import Signal
from navext.core.config import AppConfig, ConfigManager
from navext.core.container import ContainerProvider, get_container_provider
from navext.core.logging import LoggerFactory, setup_logging

__all__ = [
    "Signal",
    "AppConfig",
    "ConfigManager",
    "ContainerProvider",
    "get_container_provider",
    "LoggerFactory",
    "setup_logging",
]
