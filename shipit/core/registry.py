"""
Plugin registry with auto-discovery.

Automatically discovers and registers plugins from:
1. Built-in plugins in shipit.plugins.*
2. Entry point plugins from external packages
"""

import importlib
import pkgutil

from .container import ServiceContainer, get_container
from .di import resolve_or_default
from .interfaces.deploy import IDeployProvider
from .interfaces.logger import ILogger
from .interfaces.vcs import IVCSProvider

ENTRY_POINT_GROUP = "shipit.plugins"


def _get_logger() -> ILogger:
    from ..services.logging import NullLogger

    return resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]


def discover_plugins(package_name: str = "shipit.plugins") -> None:
    """
    Auto-discover and register plugins.

    Scans shipit.plugins.vcs and shipit.plugins.deploy for classes
    implementing provider interfaces, then loads entry point plugins.

    Args:
        package_name: Base package to scan for plugins
    """
    container = get_container()

    _discover_builtin_plugins(container, package_name)
    _discover_entrypoint_plugins(container)


def _discover_builtin_plugins(container: ServiceContainer, package_name: str) -> None:
    """Discover plugins from the built-in plugins package."""
    for subpackage in ("vcs", "deploy"):
        try:
            subpkg = importlib.import_module(f"{package_name}.{subpackage}")
        except ImportError:
            continue
        _scan_package_for_plugins(container, subpkg)


def _scan_package_for_plugins(container: ServiceContainer, package) -> None:
    """Scan a package for plugin classes and register them."""
    package_path = getattr(package, "__path__", None)
    if not package_path:
        return

    for _importer, modname, _ispkg in pkgutil.iter_modules(package_path):
        # Skip private modules and base classes
        if modname.startswith("_") or modname == "base":
            continue

        try:
            module = importlib.import_module(f"{package.__name__}.{modname}")
        except ImportError as e:
            _get_logger().debug("Failed to import plugin module %s: %s", modname, e)
            continue

        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, type):
                _try_register_plugin(container, attr)


def _try_register_plugin(container: ServiceContainer, cls: type) -> bool:
    """Register cls if it implements a provider interface."""
    try:
        if _implements(cls, IVCSProvider):
            container.register_vcs_provider(cls().name, cls)
            return True
        if _implements(cls, IDeployProvider):
            container.register_deploy_provider(cls().name, cls)
            return True
    except Exception as e:
        _get_logger().debug("Failed to load plugin %s.%s: %s", cls.__module__, cls.__name__, e)
    return False


def _implements(cls: type, interface: type) -> bool:
    """
    Check if a class implements an interface.

    Returns True if cls is a concrete subclass of interface
    (not the interface itself and not abstract).
    """
    try:
        return (
            isinstance(cls, type)
            and issubclass(cls, interface)
            and cls is not interface
            and not getattr(cls, "__abstractmethods__", set())
        )
    except TypeError:
        return False


def _discover_entrypoint_plugins(container: ServiceContainer) -> None:
    """
    Discover plugins registered via entry points.

    External packages can register plugins in their packaging metadata:

        [project.entry-points."shipit.plugins"]
        netlify = "my_package.netlify:NetlifyDeployProvider"
    """
    from importlib.metadata import entry_points

    for ep in entry_points(group=ENTRY_POINT_GROUP):
        try:
            plugin_cls = ep.load()
        except Exception as e:
            # Don't fail startup due to broken external plugins
            _get_logger().debug("Failed to load entry point plugin %s: %s", ep.name, e)
            continue
        if not _try_register_plugin(container, plugin_cls):
            _get_logger().debug("Entry point %s is not a provider class", ep.name)


def register_plugin(cls: type) -> type:
    """
    Decorator to manually register a plugin class.

    Usage:
        @register_plugin
        class NetlifyDeployProvider(BaseDeployProvider):
            ...
    """
    _try_register_plugin(get_container(), cls)
    return cls
