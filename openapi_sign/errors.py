"""
Errors raised while building a request signature
"""

from typing import Any, Iterable


class SigningError(Exception):
    """Base class for every signing failure."""


class InvalidArgumentError(SigningError, ValueError):
    """One or more required parameters is missing or blank."""

    def __init__(self, fields: Iterable[str]):
        self.fields = tuple(fields)
        super().__init__(
            f"{', '.join(self.fields)} cannot be null or empty"
        )


class SerializationError(SigningError, ValueError):
    """The request body cannot be turned into a JSON value tree."""

    def __init__(self, message: str, value: Any = None):
        self.value = value
        super().__init__(f"marshal body error: {message}")
