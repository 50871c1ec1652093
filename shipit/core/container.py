"""
Dependency injection container for shipit.

Uses dependency-injector for DI with support for:
- Singleton lifetimes (instances or lazy factories)
- Factory registration
- Interface-based resolution
- Plugin registries for VCS and deploy providers
"""

from collections.abc import Callable
from typing import Optional, TypeVar

from dependency_injector import providers

from .exceptions import PluginNotFoundError
from .interfaces.deploy import IDeployProvider
from .interfaces.vcs import IVCSProvider

T = TypeVar("T")


class ServiceContainer:
    """
    Dependency injection container for shipit.

    Combines dependency-injector's DI capabilities with plugin registries
    for VCS and deploy providers.
    """

    _instance: Optional["ServiceContainer"] = None

    def __init__(self) -> None:
        """Initialize the container with empty registries."""
        self._providers: dict[type, providers.Provider] = {}

        self._vcs_providers: dict[str, type[IVCSProvider]] = {}
        self._deploy_providers: dict[str, type[IDeployProvider]] = {}

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        """Get the global container instance (singleton)."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the global container (for testing)."""
        cls._instance = None

    # -------------------------------------------------------------------------
    # Core service registration (uses dependency-injector providers)
    # -------------------------------------------------------------------------

    def register_singleton(
        self,
        interface: type[T],
        implementation: T | None = None,
        factory: Callable[[], T] | None = None,
    ) -> None:
        """
        Register a singleton service.

        Args:
            interface: The interface type
            implementation: Optional concrete instance
            factory: Optional factory function (for lazy init)
        """
        if implementation is not None:
            self._providers[interface] = providers.Object(implementation)
        elif factory is not None:
            self._providers[interface] = providers.Singleton(factory)
        else:
            raise ValueError("Must provide either implementation or factory")

    def resolve(self, interface: type[T]) -> T:
        """
        Resolve a service by interface.

        Raises:
            KeyError: If no registration found
        """
        if interface not in self._providers:
            raise KeyError(f"No provider registered for: {interface}")
        return self._providers[interface]()

    def try_resolve(self, interface: type[T]) -> T | None:
        """
        Try to resolve a service, returning None if not registered.
        """
        if interface not in self._providers:
            return None
        return self._providers[interface]()

    # -------------------------------------------------------------------------
    # VCS provider registry
    # -------------------------------------------------------------------------

    def register_vcs_provider(
        self,
        name: str,
        provider_class: type[IVCSProvider],
    ) -> None:
        """
        Register a VCS provider.

        Args:
            name: Provider name (e.g., 'git')
            provider_class: Provider class implementing IVCSProvider
        """
        self._vcs_providers[name] = provider_class

    def get_vcs_provider(self, name: str = "git") -> IVCSProvider:
        """
        Get a VCS provider instance.

        Raises:
            PluginNotFoundError: If no provider registered
        """
        if name not in self._vcs_providers:
            raise PluginNotFoundError(f"No VCS provider registered: {name}", plugin_name=name)
        return self._vcs_providers[name]()

    def list_vcs_providers(self) -> list[str]:
        """List registered VCS provider names."""
        return list(self._vcs_providers.keys())

    # -------------------------------------------------------------------------
    # Deploy provider registry
    # -------------------------------------------------------------------------

    def register_deploy_provider(
        self,
        name: str,
        provider_class: type[IDeployProvider],
    ) -> None:
        """
        Register a deploy provider.

        Args:
            name: Provider name (e.g., 'vercel')
            provider_class: Provider class implementing IDeployProvider
        """
        self._deploy_providers[name] = provider_class

    def get_deploy_provider(self, name: str = "vercel") -> IDeployProvider:
        """
        Get a deploy provider instance.

        Raises:
            PluginNotFoundError: If no provider registered
        """
        if name not in self._deploy_providers:
            raise PluginNotFoundError(f"No deploy provider registered: {name}", plugin_name=name)
        return self._deploy_providers[name]()

    def list_deploy_providers(self) -> list[str]:
        """List registered deploy provider names."""
        return list(self._deploy_providers.keys())


# -------------------------------------------------------------------------
# Module-level convenience functions
# -------------------------------------------------------------------------


def get_container() -> ServiceContainer:
    """Get the global service container instance."""
    return ServiceContainer.get_instance()
