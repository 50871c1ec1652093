"""
Custom exception hierarchy for shipit.

Subprocess failures are never raised: the command runner reports them as
CommandResult values. These exceptions cover everything else (configuration,
missing prerequisites, overlapping deploys, malformed panel messages).
"""

from __future__ import annotations


class ShipitException(Exception):
    """
    Base exception for all shipit errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (paths, keys, etc.)
        exit_code: Suggested exit code for CLI (default: 1)
        recoverable: Whether retry/recovery may be possible
    """

    exit_code: int = 1
    recoverable: bool = True

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ShipitConfigError(ShipitException):
    """Base class for configuration-related errors."""

    pass


class ConfigFileError(ShipitConfigError):
    """
    Error reading or parsing a configuration file.

    Raised for TOML parsing errors, permission errors, etc.
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class ConfigValidationError(ShipitConfigError, ValueError):
    """
    Invalid or unknown configuration value.

    Inherits from ValueError so callers validating user input can catch
    either.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        value: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Plugin Errors
# =============================================================================


class ShipitPluginError(ShipitException):
    """Base class for plugin-related errors."""

    pass


class PluginNotFoundError(ShipitPluginError):
    """Requested plugin is not registered."""

    def __init__(
        self,
        message: str,
        *,
        plugin_name: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if plugin_name:
            ctx["plugin_name"] = plugin_name
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Deploy Errors
# =============================================================================


class ShipitDeployError(ShipitException):
    """Base class for deploy orchestration errors."""

    pass


class ProjectRootNotFoundError(ShipitDeployError):
    """
    The project root does not exist.

    Raised before any command is run, since every step uses the project
    root as its working directory.
    """

    recoverable: bool = False

    def __init__(
        self,
        message: str = "Project root not found",
        *,
        project_root: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if project_root:
            ctx["project_root"] = project_root
        super().__init__(message, context=ctx, cause=cause)


class DeployInProgressError(ShipitDeployError):
    """A deploy was requested while another one is still running."""

    pass


class DeployCancelledError(ShipitDeployError):
    """The in-flight deploy was cancelled before it finished."""

    exit_code: int = 130


# =============================================================================
# Secret Store Errors
# =============================================================================


class ShipitSecretError(ShipitException):
    """Base class for secret store errors."""

    pass


class SecretStoreError(ShipitSecretError):
    """
    Error reading or writing the secret store.

    Raised for unreadable or corrupt store files and permission errors.
    """

    def __init__(
        self,
        message: str,
        *,
        store_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if store_path:
            ctx["store_path"] = store_path
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Validation Errors
# =============================================================================


class ShipitValidationError(ShipitException, ValueError):
    """
    Base class for input validation errors.

    Inherits from ValueError for callers that validate generically.
    """

    pass


class InvalidMessageError(ShipitValidationError):
    """A panel message could not be parsed or has an unknown type."""

    def __init__(
        self,
        message: str,
        *,
        message_type: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if message_type:
            ctx["message_type"] = message_type
        super().__init__(message, context=ctx, cause=cause)
