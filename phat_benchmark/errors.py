from __future__ import annotations


class BenchmarkError(Exception):
    """Base class for every error that ends a benchmark sweep."""


class UsageError(BenchmarkError):
    """Missing or invalid arguments, an unknown flag, or an explicit --help."""


class LoadError(BenchmarkError):
    """An input file is missing, unreadable, or does not match the chosen format."""

    def __init__(self, path: str, reason: str | None = None):
        self.path = path
        self.reason = reason
        message = f"Error opening file {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class BackendUnavailableError(BenchmarkError):
    """The persistence backend could not be imported or set up."""
