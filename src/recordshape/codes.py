"""Error code constants for recordshape.

These constants prevent stringly-typed error codes and let client code
branch on the failure kind without matching message text.
"""

from enum import Enum


class ParseErrorCode(str, Enum):
    """Shape-string syntax errors raised by the parser."""

    EMPTY_SHAPE = "EMPTY_SHAPE"
    MISSING_FIELD_BEFORE_COMMA = "MISSING_FIELD_BEFORE_COMMA"
    TRAILING_COMMA = "TRAILING_COMMA"
    UNEXPECTED_CHARACTER = "UNEXPECTED_CHARACTER"
    WILDCARD_ALIAS = "WILDCARD_ALIAS"
    UNCLOSED_NESTED = "UNCLOSED_NESTED"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    UNEXPECTED_END = "UNEXPECTED_END"


class SchemaErrorCode(str, Enum):
    """Schema-validation errors raised by the registry and generator."""

    UNKNOWN_MODEL = "UNKNOWN_MODEL"
    UNKNOWN_FIELD = "UNKNOWN_FIELD"
    NOT_NESTABLE = "NOT_NESTABLE"
    INVALID_CATALOG = "INVALID_CATALOG"
    MAX_DEPTH_EXCEEDED = "MAX_DEPTH_EXCEEDED"
