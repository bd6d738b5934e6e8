"""recordshape: shape-string projections of structured records."""

import logging
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("recordshape")
except PackageNotFoundError:
    __version__ = "dev"

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Public API exports
from recordshape.api import ShapeEngine
from recordshape.codes import ParseErrorCode, SchemaErrorCode
from recordshape.config import EngineSettings, ShapeDefaults
from recordshape.errors import (
    ModelInstantiationError,
    ShapeError,
    ShapeParseError,
    ShapeValidationError,
)
from recordshape.kernel.catalog import RecordType
from recordshape.kernel.factory import ModelFactory
from recordshape.kernel.generator import GeneratedField, GeneratedModel, ModelDescriptorGenerator
from recordshape.kernel.parser import ShapeParser
from recordshape.kernel.schema import FieldSchema, LogicalType, ModelSchema, SchemaRegistry
from recordshape.kernel.shape import FieldSpec, ShapeSpec

__all__ = [
    "__version__",
    "ShapeEngine",
    "EngineSettings",
    "ShapeDefaults",
    "ShapeParser",
    "ShapeSpec",
    "FieldSpec",
    "SchemaRegistry",
    "ModelSchema",
    "FieldSchema",
    "LogicalType",
    "RecordType",
    "ModelDescriptorGenerator",
    "GeneratedModel",
    "GeneratedField",
    "ModelFactory",
    "ShapeError",
    "ShapeParseError",
    "ShapeValidationError",
    "ModelInstantiationError",
    "ParseErrorCode",
    "SchemaErrorCode",
]
