"""
Click decorators for shipit CLI commands.

Provides requirement decorators that validate preconditions before
command execution:
- require_project_root: Ensures the project directory exists
- require_git: Ensures we're in a git repository
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

import click

if TYPE_CHECKING:
    from .context import ShipitContext

F = TypeVar("F", bound=Callable[..., Any])


def _context_from(args: tuple[Any, ...], kwargs: dict[str, Any], decorator: str) -> ShipitContext:
    ctx_maybe: Any = args[0] if args else kwargs.get("ctx")
    if ctx_maybe is None:
        raise click.ClickException(
            "Internal error: ShipitContext not available. "
            f"Ensure @click.pass_obj is applied before @{decorator}."
        )
    return ctx_maybe


def require_project_root(f: F) -> F:
    """Decorator to require an existing project directory.

    Usage:
        @cli.command()
        @click.pass_obj
        @require_project_root
        def status(ctx: ShipitContext):
            ...

    Note:
        This decorator should be applied AFTER @click.pass_obj so that
        the ShipitContext is available.
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        ctx = _context_from(args, kwargs, "require_project_root")
        if not ctx.project_root.is_dir():
            raise click.ClickException(
                f"Project root not found: {ctx.project_root}\n"
                "Open the project folder (not just a subfolder) or pass --project."
            )
        return f(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_git(f: F) -> F:
    """Decorator to require a git repository.

    Usage:
        @cli.command()
        @click.pass_obj
        @require_git
        def status(ctx: ShipitContext):
            ...

    Note:
        This decorator should be applied AFTER @click.pass_obj so that
        the ShipitContext is available.
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        ctx = _context_from(args, kwargs, "require_git")
        if not ctx.has_repo:
            raise click.ClickException(
                "Not in a git repository.\n"
                "shipit requires the project to be inside a git repository."
            )
        return f(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
