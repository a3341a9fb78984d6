"""Domain-specific errors for structbridge."""

from __future__ import annotations


class StructBridgeError(Exception):
    """Base error for structbridge."""


class SchemaError(StructBridgeError):
    """Raised when a struct schema document is malformed or cannot be decoded."""


class UnrecognizedTypeKindError(StructBridgeError):
    """Raised when a type annotation's kind is outside the set the generator supports."""
