"""Errors raised by the flash message component."""

from __future__ import annotations


class FlashError(Exception):
    """Base class for flash message errors."""


class MissingFlashMessageError(FlashError, TypeError):
    """A severity shorthand was called without a message."""

    def __init__(self, message: str = "Flash message missing.") -> None:
        super().__init__(message)


class MalformedFlashSessionError(FlashError, ValueError):
    """The ``Flash`` session branch does not hold a mapping of lists."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key
