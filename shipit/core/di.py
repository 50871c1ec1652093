"""
Dependency injection helpers for shipit.

Lazy resolution patterns that fall back to default implementations when the
container has not been bootstrapped (library use, unit tests).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


def resolve_or_default(
    interface: type[T],
    default_factory: Callable[[], T],
) -> T:
    """Resolve a service from the container or create a default.

    Args:
        interface: The interface type to resolve
        default_factory: Callable that creates the default implementation

    Returns:
        Resolved service instance or default

    Example:
        >>> from shipit.core.interfaces.logger import ILogger
        >>> from shipit.services.logging import NullLogger
        >>> logger = resolve_or_default(ILogger, NullLogger)
    """
    try:
        from .container import get_container

        container = get_container()
        instance = container.try_resolve(interface)
        if instance is not None:
            return instance
    except Exception:
        # Container not bootstrapped or resolution failed
        pass

    return default_factory()
