"""Errors raised by the menu query service."""


class MenuError(Exception):
    """Base class; `message` is safe to show to API clients."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(MenuError):
    """No record matches a targeted lookup or update."""


class ValidationError(MenuError):
    """A create/update payload is malformed."""


class StorageError(MenuError):
    """Connection or query failure in the persistence layer."""
