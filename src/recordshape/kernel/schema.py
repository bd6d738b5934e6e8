"""Schema registry: record-type schemas used to resolve and type shapes."""

import json
import logging
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from recordshape.codes import SchemaErrorCode
from recordshape.errors import ShapeValidationError

logger = logging.getLogger(__name__)

# Number of available field names listed in an unknown-field error
MAX_LISTED_FIELDS = 20


class LogicalType(str, Enum):
    """Fixed primitive field types. Any other type name refers to a record type."""

    STR = "str"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    DECIMAL = "Decimal"
    DATE = "date"
    DATETIME = "datetime"
    DICT = "dict"
    ANY = "Any"


PRIMITIVE_TYPES = frozenset(t.value for t in LogicalType)


def type_name(value: Union[str, Enum]) -> str:
    """Normalize a record-type name given as a plain string or a str enum."""
    if isinstance(value, Enum):
        return str(value.value)
    return value


class FieldSchema(BaseModel):
    """Static declaration of one field on a record type."""
    name: str
    type: str  # LogicalType value, or a record-type name for nested fields
    is_optional: bool = True
    is_list: bool = False
    nested_model: Optional[str] = None  # overrides type-based nested inference

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("type", "nested_model", mode="before")
    @classmethod
    def normalize_enum(cls, v: Any) -> Any:
        if isinstance(v, Enum):
            return v.value
        return v

    @field_validator("nested_model")
    @classmethod
    def validate_nested_model(cls, v: Optional[str]) -> Optional[str]:
        """Blank nested_model means "not set"."""
        if v is not None and not v.strip():
            return None
        return v

    @property
    def is_primitive(self) -> bool:
        return self.type in PRIMITIVE_TYPES


class ModelSchema(BaseModel):
    """A record type: its name and its fields in declaration order."""
    model_name: str
    fields: Dict[str, FieldSchema]

    model_config = ConfigDict(frozen=True, extra="forbid", protected_namespaces=())


FieldTable = Mapping[str, Mapping[str, Any]]
Catalog = Mapping[Any, FieldTable]


class SchemaRegistry:
    """Immutable catalog of record-type schemas.

    Loaded once at construction from an explicit catalog; nothing is inferred
    from payloads. The default catalog is ``recordshape.kernel.catalog.CATALOG``.
    """

    def __init__(self, catalog: Optional[Catalog] = None):
        if catalog is None:
            from recordshape.kernel.catalog import CATALOG
            catalog = CATALOG
        self._schemas: Dict[str, ModelSchema] = self._load(catalog)
        self._validate_nested_references()
        logger.debug("Loaded %d record-type schemas", len(self._schemas))

    @classmethod
    def from_json_bytes(cls, data: bytes) -> "SchemaRegistry":
        """Load a registry from JSON catalog bytes (pure, no I/O).

        Format: ``{type_name: {field_name: {type, is_optional, is_list, nested_model?}}}``
        """
        try:
            payload = json.loads(data)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ShapeValidationError(
                f"Schema catalog is not valid JSON: {e}",
                SchemaErrorCode.INVALID_CATALOG,
            ) from e
        if not isinstance(payload, dict):
            raise ShapeValidationError(
                "Schema catalog must be a JSON object of record types",
                SchemaErrorCode.INVALID_CATALOG,
            )
        return cls(catalog=payload)

    @staticmethod
    def _load(catalog: Catalog) -> Dict[str, ModelSchema]:
        schemas: Dict[str, ModelSchema] = {}
        for raw_name, field_table in catalog.items():
            model_name = type_name(raw_name)
            if model_name in PRIMITIVE_TYPES:
                raise ShapeValidationError(
                    f"Record type '{model_name}' collides with a primitive type name",
                    SchemaErrorCode.INVALID_CATALOG,
                )
            if not isinstance(field_table, Mapping):
                raise ShapeValidationError(
                    f"Invalid schema for record type '{model_name}': field table must be an object",
                    SchemaErrorCode.INVALID_CATALOG,
                )
            for field_name, decl in field_table.items():
                if not isinstance(decl, Mapping):
                    raise ShapeValidationError(
                        f"Invalid schema for record type '{model_name}': "
                        f"declaration of field '{field_name}' must be an object",
                        SchemaErrorCode.INVALID_CATALOG,
                    )
            try:
                fields = {
                    field_name: FieldSchema(name=field_name, **dict(decl))
                    for field_name, decl in field_table.items()
                }
                schemas[model_name] = ModelSchema(model_name=model_name, fields=fields)
            except (ValidationError, TypeError) as e:
                raise ShapeValidationError(
                    f"Invalid schema for record type '{model_name}': {e}",
                    SchemaErrorCode.INVALID_CATALOG,
                ) from e
        return schemas

    def _validate_nested_references(self) -> None:
        """Every nested_model and every non-primitive type must name a known record type."""
        for schema in self._schemas.values():
            for field in schema.fields.values():
                for ref in (field.nested_model, None if field.is_primitive else field.type):
                    if ref is not None and ref not in self._schemas:
                        raise ShapeValidationError(
                            f"Field '{field.name}' on model '{schema.model_name}' "
                            f"references unknown record type '{ref}'",
                            SchemaErrorCode.INVALID_CATALOG,
                        )

    def has_schema(self, model_name: Union[str, Enum]) -> bool:
        return type_name(model_name) in self._schemas

    def model_names(self) -> List[str]:
        """All known record-type names, sorted."""
        return sorted(self._schemas)

    def get_schema(self, model_name: Union[str, Enum]) -> ModelSchema:
        """Get the schema for a record type.

        Raises:
            ShapeValidationError: If the record type is unknown
        """
        name = type_name(model_name)
        schema = self._schemas.get(name)
        if schema is None:
            raise ShapeValidationError(f"Unknown model: {name}", SchemaErrorCode.UNKNOWN_MODEL)
        return schema

    def get_field(self, model_name: Union[str, Enum], field_name: str) -> FieldSchema:
        """Get the schema for one field of a record type.

        The error for an unknown field lists up to MAX_LISTED_FIELDS available
        names (sorted) followed by a count of the rest.

        Raises:
            ShapeValidationError: If the record type or the field is unknown
        """
        schema = self.get_schema(model_name)
        field = schema.fields.get(field_name)
        if field is None:
            available = sorted(schema.fields)
            msg = f"Field '{field_name}' does not exist on model '{schema.model_name}'."
            if available:
                shown = available[:MAX_LISTED_FIELDS]
                msg += f" Available fields: {', '.join(shown)}"
                if len(available) > len(shown):
                    msg += f", ... ({len(available) - len(shown)} more)"
            raise ShapeValidationError(msg, SchemaErrorCode.UNKNOWN_FIELD)
        return field

    def list_field_names(self, model_name: Union[str, Enum]) -> List[str]:
        """All field names of a record type, sorted."""
        return sorted(self.get_schema(model_name).fields)
