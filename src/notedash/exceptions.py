"""notedash exceptions."""

from pathlib import Path
from typing import Any


class NotedashError(Exception):
    """Base exception for notedash errors."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(NotedashError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source


class ConfigurationMissingError(ConfigError):
    """Raised when no dashboard settings are available to build from."""


# =============================================================================
# Source Exceptions
# =============================================================================


class SourceUnavailableError(NotedashError):
    """Raised when a required external collaborator is absent.

    Attributes:
        source: Name of the missing collaborator.
    """

    def __init__(self, message: str, *, source: str) -> None:
        """Initialize with error message and source context.

        Args:
            message: Human-readable error message.
            source: Name of the missing collaborator.
        """
        super().__init__(message)
        self.source: str = source


# =============================================================================
# Persistence Exceptions
# =============================================================================


class PersistenceError(NotedashError):
    """Raised when a persisted blob cannot be read or written.

    Attributes:
        path: Path of the file involved, if file-backed.
        operation: The operation that failed (read, write, delete).
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        operation: str = "write",
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and I/O context.

        Args:
            message: Human-readable error message.
            path: Path of the file involved.
            operation: The operation that failed.
            cause: The underlying exception.
        """
        super().__init__(message)
        self.path: Path | None = path
        self.operation: str = operation
        self.cause: Exception | None = cause


class StaleWriteError(PersistenceError):
    """Raised when a compare-and-set write loses against a newer version.

    Attributes:
        key: The state key being written.
        expected: The version or generation the writer based its change on.
        actual: The version or generation actually found.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str,
        expected: int | None,
        actual: int | None,
    ) -> None:
        """Initialize with error message and version context.

        Args:
            message: Human-readable error message.
            key: The state key being written.
            expected: The version the writer expected.
            actual: The version found in the store.
        """
        super().__init__(message, operation="write")
        self.key: str = key
        self.expected: int | None = expected
        self.actual: int | None = actual


# =============================================================================
# Perspective Exceptions
# =============================================================================


class PerspectiveError(NotedashError):
    """Base exception for perspective operations.

    Attributes:
        name: The perspective name involved.
    """

    def __init__(self, message: str, *, name: str | None = None) -> None:
        """Initialize with error message and perspective context.

        Args:
            message: Human-readable error message.
            name: The perspective name involved.
        """
        super().__init__(message)
        self.name: str | None = name


class PerspectiveNameError(PerspectiveError, ValueError):
    """Raised when a perspective name is empty, reserved, or marked."""


class DuplicatePerspectiveError(PerspectiveError, ValueError):
    """Raised when adding a perspective whose name already exists."""


class PerspectiveNotFoundError(PerspectiveError, KeyError):
    """Raised when a named perspective does not exist."""


# =============================================================================
# Project Exceptions
# =============================================================================


class ProjectNotFoundError(NotedashError, KeyError):
    """Raised when a project record cannot be found.

    Attributes:
        filename: The filename that was looked up.
    """

    def __init__(self, message: str, *, filename: str | None = None) -> None:
        """Initialize with error message and project context.

        Args:
            message: Human-readable error message.
            filename: The filename that was looked up.
        """
        super().__init__(message)
        self.filename: str | None = filename
