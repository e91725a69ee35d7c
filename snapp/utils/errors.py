"""Custom exceptions and exit codes for SNAPP.

This module defines the exit codes and exception hierarchy used throughout
the application. Every failure that ends the provisioning pipeline maps to
a distinct exit code so calling scripts can tell them apart.
"""

from enum import IntEnum
from typing import ClassVar


class ExitCode(IntEnum):
    """Process exit codes.

    These codes are used for consistent error reporting and can be
    checked by calling scripts or CI systems.
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    DESTINATION_NOT_EMPTY = 2
    FETCH_ERROR = 3
    MISSING_DEPENDENCY = 4
    STEP_FAILED = 5
    USER_CANCELLED = 6


class SnappError(Exception):
    """Base exception for SNAPP errors.

    All custom exceptions in this application should inherit from this class.
    Each exception type has an associated exit code for proper error reporting.

    Attributes:
        exit_code: The exit code to use when this exception causes program termination
        message: The error message
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.GENERAL_ERROR

    def __init__(self, message: str, exit_code: ExitCode | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Error message describing what went wrong
            exit_code: Optional override for the default exit code
        """
        super().__init__(message)
        self._exit_code = exit_code

    @property
    def exit_code(self) -> ExitCode:
        """Get the exit code for this exception.

        Returns:
            The instance exit code if set, otherwise the class default exit code.
        """
        if self._exit_code is not None:
            return self._exit_code
        return self.__class__._default_exit_code


class TemplateFetchError(SnappError):
    """Template could not be fetched into the target directory.

    Raised when:
    - The template source identifier cannot be parsed (BAD_SRC)
    - The archive download fails (COULD_NOT_DOWNLOAD)
    - The archive is corrupt (BAD_ARCHIVE)
    - The template subdirectory is missing from the archive (MISSING_SUBDIR)
    - The target is a file (DEST_NOT_DIR)
    - The target cannot be created or written (DEST_NOT_WRITABLE)

    Attributes:
        code: Machine readable error code
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.FETCH_ERROR

    def __init__(
        self,
        message: str,
        code: str = "FETCH_ERROR",
        exit_code: ExitCode | None = None,
    ) -> None:
        self.code = code
        super().__init__(message, exit_code)


class DestinationNotEmptyError(TemplateFetchError):
    """Target directory already contains files.

    Attributes:
        path: The directory that was found non-empty
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.DESTINATION_NOT_EMPTY

    def __init__(self, path: str, exit_code: ExitCode | None = None) -> None:
        self.path = path
        super().__init__(
            f"destination directory is not empty: {path}",
            code="DEST_NOT_EMPTY",
            exit_code=exit_code,
        )


class MissingDependencyError(SnappError):
    """A required executable is not available on PATH.

    Attributes:
        binary: Name of the missing executable
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.MISSING_DEPENDENCY

    def __init__(self, binary: str, exit_code: ExitCode | None = None) -> None:
        self.binary = binary
        super().__init__(f"{binary} is not installed or not in PATH", exit_code)


class StepFailedError(SnappError):
    """One or more provisioning steps exited with a non-zero status.

    Attributes:
        labels: Labels of the failed steps, in execution order
        returncode: Exit status of the last failed command
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.STEP_FAILED

    def __init__(
        self,
        labels: list[str],
        returncode: int,
        exit_code: ExitCode | None = None,
    ) -> None:
        self.labels = list(labels)
        self.returncode = returncode
        super().__init__(f"Step failed: {', '.join(self.labels)}", exit_code)


class UserCancelledError(SnappError):
    """User cancelled the operation (Ctrl+C)."""

    _default_exit_code: ClassVar[ExitCode] = ExitCode.USER_CANCELLED


class ConfigError(SnappError):
    """Configuration key or value is invalid."""


__all__ = [
    "ExitCode",
    "SnappError",
    "TemplateFetchError",
    "DestinationNotEmptyError",
    "MissingDependencyError",
    "StepFailedError",
    "UserCancelledError",
    "ConfigError",
]
