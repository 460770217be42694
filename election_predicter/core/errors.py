from __future__ import annotations


class PredicterError(Exception):
    """Base exception for this project."""


class ConfigError(PredicterError):
    """Raised when configuration is invalid or incomplete."""

    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class NamingConventionError(PredicterError):
    """Raised when a prediction method cannot be resolved to a candidate.

    Either the method name lacks the required prefix, or no candidate record
    is registered for it.
    """

    def __init__(self, message: str, *, method_name: str):
        super().__init__(message)
        self.message = message
        self.method_name = method_name
