"""Materialize raw payloads into projected objects.

Projection is a synchronous recursive walk over a GeneratedModel. Output
objects are plain dicts keyed by alias, in descriptor order.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from recordshape._internal.coerce import parse_date, parse_datetime, parse_decimal
from recordshape._internal.unflatten import unflatten
from recordshape.errors import ModelInstantiationError
from recordshape.kernel.generator import GeneratedField, GeneratedModel, ModelDescriptorGenerator
from recordshape.kernel.schema import LogicalType
from recordshape.kernel.shape import ShapeSpec


# Logical types that need coercion; everything else passes through unchanged
SCALAR_PARSERS: Dict[str, Callable[[Any], Any]] = {
    LogicalType.DATE.value: parse_date,
    LogicalType.DATETIME.value: parse_datetime,
    LogicalType.DECIMAL.value: parse_decimal,
}


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, list):
        return "list"
    return type(value).__name__


class ModelFactory:
    """Create projected objects from raw API-style payloads.

    Missing keys are skipped silently, list fields with a non-list value
    become empty lists, and date/datetime/Decimal fields are coerced with
    the helpers in ``recordshape._internal.coerce``.
    """

    def __init__(
        self,
        type_generator: Optional[ModelDescriptorGenerator] = None,
        joiner: str = ".",
    ):
        self.type_generator = type_generator if type_generator is not None else ModelDescriptorGenerator()
        self.joiner = joiner

    def create_one(self, base_model_name: Union[str, Enum], shape_spec: ShapeSpec, raw_item: Any) -> Dict[str, Any]:
        """Project a single record (detail response).

        Raises:
            ShapeValidationError: If the shape does not resolve against the schema
            ModelInstantiationError: If the payload cannot be projected
        """
        descriptor = self.type_generator.generate_model_descriptor(base_model_name, shape_spec)
        return self.create_from_descriptor(descriptor, raw_item, "root")

    def create_list(
        self, base_model_name: Union[str, Enum], shape_spec: ShapeSpec, raw_items: Iterable[Any]
    ) -> List[Dict[str, Any]]:
        """Project every record of a list response.

        The descriptor is resolved once for the whole list. The first item
        that cannot be projected aborts the call; no partial list is returned.
        """
        descriptor = self.type_generator.generate_model_descriptor(base_model_name, shape_spec)
        return [
            self.create_from_descriptor(descriptor, item, f"index {index}")
            for index, item in enumerate(raw_items)
        ]

    def create_from_descriptor(self, model: GeneratedModel, raw: Any, context: str = "root") -> Dict[str, Any]:
        """Project one top-level raw item, unflattening it first for flat shapes."""
        if model.is_flat:
            raw = unflatten(raw, self.joiner)
        return self._project(model, raw, context)

    def _project(self, model: GeneratedModel, raw: Any, context: str) -> Dict[str, Any]:
        if not isinstance(raw, Mapping):
            raise ModelInstantiationError(
                f"Expected object for model '{model.model_name}' at {context}, got {_describe(raw)}",
                model_name=model.model_name,
                context=context,
                expected_type=model.model_name,
                actual_value=raw,
            )

        result: Dict[str, Any] = {}
        for field in model.fields:
            source_key = field.field.name
            if source_key not in raw:
                # Partial payloads are fine: the server may omit fields it could not compute
                continue
            result[field.alias] = self._parse_field_value(
                model, field, raw[source_key], f"{context}.{source_key}"
            )
        return result

    def _parse_field_value(self, model: GeneratedModel, field: GeneratedField, raw_value: Any, context: str) -> Any:
        schema = field.field
        nested = field.nested_model

        if nested is not None:
            if schema.is_list:
                if not isinstance(raw_value, list):
                    return []
                return [
                    self._project(nested, item, f"{context}[{index}]")
                    for index, item in enumerate(raw_value)
                ]

            if raw_value is None:
                return None
            if not isinstance(raw_value, Mapping):
                raise ModelInstantiationError(
                    f"Expected object for nested field '{schema.name}' at {context}, got {_describe(raw_value)}",
                    model_name=model.model_name,
                    context=context,
                    field_name=schema.name,
                    expected_type=nested.model_name,
                    actual_value=raw_value,
                )
            return self._project(nested, raw_value, context)

        if schema.is_list:
            if not isinstance(raw_value, list):
                return []
            return [self._parse_scalar(schema.type, item) for item in raw_value]

        return self._parse_scalar(schema.type, raw_value)

    @staticmethod
    def _parse_scalar(logical_type: str, value: Any) -> Any:
        if value is None:
            return None
        parser = SCALAR_PARSERS.get(logical_type)
        if parser is None:
            return value
        return parser(value)
