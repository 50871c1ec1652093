"""
Core infrastructure for shipit's dependency injection and plugin architecture.

This module provides:
- ServiceContainer: DI container using dependency-injector
- Plugin registry with auto-discovery
- Application bootstrap for initialization
- Interface definitions for all services
- Custom exception hierarchy
"""

from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container
from .exceptions import (
    ConfigFileError,
    ConfigValidationError,
    DeployCancelledError,
    DeployInProgressError,
    InvalidMessageError,
    PluginNotFoundError,
    ProjectRootNotFoundError,
    SecretStoreError,
    ShipitConfigError,
    ShipitDeployError,
    ShipitException,
    ShipitPluginError,
    ShipitSecretError,
    ShipitValidationError,
)
from .registry import discover_plugins, register_plugin

__all__ = [
    "ConfigFileError",
    "ConfigValidationError",
    "DeployCancelledError",
    "DeployInProgressError",
    "InvalidMessageError",
    "PluginNotFoundError",
    "ProjectRootNotFoundError",
    "SecretStoreError",
    "ServiceContainer",
    "ShipitConfigError",
    "ShipitDeployError",
    "ShipitException",
    "ShipitPluginError",
    "ShipitSecretError",
    "ShipitValidationError",
    "bootstrap",
    "discover_plugins",
    "get_container",
    "is_initialized",
    "register_plugin",
    "reset",
]
