"""Exception hierarchy for recordshape.

Three failure categories reach callers: syntax errors in a shape string
(ShapeParseError), shape/schema mismatches (ShapeValidationError) and
payloads that cannot be projected (ModelInstantiationError).
"""

from typing import Any, Optional

from recordshape.codes import ParseErrorCode, SchemaErrorCode


class ShapeError(Exception):
    """Base exception for all recordshape errors."""
    pass


class ShapeParseError(ShapeError):
    """Raised when a shape string does not match the shape grammar."""

    def __init__(self, message: str, code: ParseErrorCode, position: Optional[int] = None):
        self.code = code
        self.position = position
        super().__init__(message)


class ShapeValidationError(ShapeError):
    """Raised when a shape references unknown models or fields, or cannot nest."""

    def __init__(self, message: str, code: SchemaErrorCode):
        self.code = code
        super().__init__(message)


class ModelInstantiationError(ShapeError):
    """Raised when a raw payload cannot be projected onto a generated model.

    Carries the target model name and the context path (``root``,
    ``index 3.recipient``, ...) plus, for nested-field failures, the field
    name, the expected type and the offending value.
    """

    def __init__(
        self,
        message: str,
        model_name: Optional[str] = None,
        context: Optional[str] = None,
        field_name: Optional[str] = None,
        expected_type: Optional[str] = None,
        actual_value: Any = None,
    ):
        self.model_name = model_name
        self.context = context
        self.field_name = field_name
        self.expected_type = expected_type
        self.actual_value = actual_value
        super().__init__(message)
