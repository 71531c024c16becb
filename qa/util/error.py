"""Utility layer errors."""


class DependencyInjectionError(Exception):
    """Raised when no provider implementation matches a component."""
