"""Custom exceptions for UPM Guard."""

from __future__ import annotations


class UpmGuardError(Exception):
    """Base exception for all UPM Guard errors."""


class ConfigurationError(UpmGuardError):
    """Raised for an invalid root path, a missing manifest or an empty allow-list."""


class ParseError(UpmGuardError):
    """Raised when a required field cannot be read from a document."""

    def __init__(self, message: str, *, path: str | None = None, field: str | None = None):
        self.path = path
        self.field = field
        super().__init__(message)


class VisibilityMismatch(UpmGuardError):
    """Raised when the host environment does not see an artifact where expected."""

    def __init__(self, message: str, *, expected: str):
        self.expected = expected
        super().__init__(message)


class SubprocessFailure(UpmGuardError):
    """Raised when an external command exits non-zero.

    The captured output streams are kept verbatim for diagnosis.
    """

    def __init__(self, argv: list[str], exit_code: int, stdout: str, stderr: str):
        self.argv = list(argv)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(
            f"Command failed (exit {exit_code}): {' '.join(self.argv)}\n\n{stderr}\n{stdout}"
        )


class UnknownError(UpmGuardError):
    """Wraps an unanticipated fault, keeping its original message."""
