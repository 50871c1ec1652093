"""
Application bootstrap for shipit.

Initializes the DI container with all services and plugins.
This module should be called once at application startup.
"""

from .container import ServiceContainer, get_container
from .interfaces.logger import ILogger
from .interfaces.presenter import IPresenter
from .interfaces.runner import ICommandRunner
from .interfaces.secrets import ISecretStore
from .registry import discover_plugins
from .settings import ShipitSettings, load_settings

_initialized = False


def bootstrap(start_dir: str | None = None) -> ServiceContainer:
    """
    Bootstrap the shipit application.

    Initializes the DI container with:
    - Core services (settings, presenter, logger, secret store, runner)
    - Plugins (VCS and deploy providers)

    Args:
        start_dir: Directory to search for configuration from (default: cwd)

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    container = get_container()

    if _initialized:
        return container

    _register_core_services(container, start_dir)
    discover_plugins()

    _initialized = True
    return container


def _register_core_services(container: ServiceContainer, start_dir: str | None) -> None:
    """Register core application services."""
    from ..presenters.console import ConsolePresenter
    from ..services.execution.runner import CommandRunner
    from ..services.logging import ShipitLogger
    from ..services.secrets.store import FileSecretStore

    settings = load_settings(start_dir=start_dir)
    container.register_singleton(ShipitSettings, implementation=settings)
    container.register_singleton(IPresenter, implementation=ConsolePresenter())  # type: ignore[type-abstract]

    def create_logger() -> ILogger:
        return ShipitLogger(
            level=settings.logging.level,
            console_enabled=settings.logging.console,
            file_enabled=settings.logging.file,
        )

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]
    container.register_singleton(
        ISecretStore,  # type: ignore[type-abstract]
        factory=lambda: FileSecretStore.from_settings(settings),
    )
    container.register_singleton(
        ICommandRunner,  # type: ignore[type-abstract]
        factory=lambda: CommandRunner.from_settings(settings, container.resolve(ILogger)),  # type: ignore[type-abstract]
    )


def reset() -> None:
    """
    Reset the application state.

    Useful for testing to ensure clean state between tests.
    """
    global _initialized
    ServiceContainer.reset()
    _initialized = False


def is_initialized() -> bool:
    """Check if the application has been bootstrapped."""
    return _initialized
