"""Exceptions raised while mapping between JSON trees and domain objects."""

from __future__ import annotations

from typing import Any, Optional


class MappingError(Exception):
    """Base class for all mapping failures.

    Every error carries the JSON path (``$.customer.email``) of the node
    that could not be mapped, so callers can report precisely what was
    wrong with the input document.
    """

    def __init__(self, message: str, path: str = "$") -> None:
        super().__init__(message)
        self.path = path


class MalformedJsonError(MappingError):
    """The input text is not valid JSON."""


class MissingFieldError(MappingError):
    """A required field is absent from an object node."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Missing required field '{path}'", path)


class TypeMismatchError(MappingError):
    """A node exists but cannot be read as the requested type."""

    def __init__(self, path: str, expected: str, actual: str, value: Any = None) -> None:
        detail = f" (got {value!r})" if value is not None else ""
        super().__init__(f"Expected {expected} at '{path}' but found {actual}{detail}", path)
        self.expected = expected
        self.actual = actual


class MalformedDateError(MappingError):
    """A date string does not match the ``YYYY-MM-DD`` pattern."""

    def __init__(self, path: str, value: str) -> None:
        super().__init__(f"Malformed date {value!r} at '{path}', expected YYYY-MM-DD", path)
        self.value = value


class UnknownCodecError(MappingError):
    """No codec is registered for a type tag or Python type."""

    def __init__(self, key: str, path: Optional[str] = None) -> None:
        super().__init__(f"No codec registered for '{key}'", path or "$")
        self.key = key
