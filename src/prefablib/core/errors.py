"""Exceptions raised while parsing, validating and instantiating nodes."""

from typing import Optional


class PrefabError(ValueError):
    """Base class for all node composition errors."""


class SchemaError(PrefabError):
    """
    Raised when node source text is malformed.

    Covers grammar errors, missing required fields, duplicate ids and unknown
    embedded component types. ``line`` and ``column`` are set when the error
    can be traced to a position in the source text.
    """

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)
        self.line = line
        self.column = column

    @classmethod
    def wrap(cls, prefix: str, error: "SchemaError") -> "SchemaError":
        """Prefix ``error``'s message, keeping its source position."""
        wrapped = cls(f"{prefix}: {error}")
        wrapped.line = error.line
        wrapped.column = error.column
        return wrapped


class InvalidPathError(PrefabError):
    """Raised when a resource path is not well formed."""


class InvalidNameError(PrefabError):
    """Raised when a node is instantiated with an empty name."""
