"""Resolve ShapeSpecs against the schema registry into model descriptors.

A GeneratedModel is the flattened, schema-bound form of a shape: for every
output key it records the source FieldSchema and, for projected nested
fields, the nested GeneratedModel. The ModelFactory walks payloads with it.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Union

from recordshape._internal.fifo_cache import FifoCache
from recordshape.codes import SchemaErrorCode
from recordshape.errors import ShapeValidationError
from recordshape.kernel.schema import FieldSchema, SchemaRegistry, type_name
from recordshape.kernel.shape import WILDCARD, FieldSpec, ShapeSpec

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 128
DEFAULT_MAX_DEPTH = 32


@dataclass(frozen=True)
class GeneratedField:
    """One resolved output field."""
    field: FieldSchema
    spec: FieldSpec
    alias: str  # output key; the source key is field.name
    nested_model: Optional["GeneratedModel"] = None


@dataclass(frozen=True)
class GeneratedModel:
    """Resolved projection descriptor for one record-type level.

    Only the top-level descriptor carries the spec's flattening flags; nested
    descriptors are always False/False.
    """
    model_name: str
    fields: Tuple[GeneratedField, ...]
    is_flat: bool = False
    is_flat_lists: bool = False

    def aliases(self) -> List[str]:
        return [f.alias for f in self.fields]

    def get(self, alias: str) -> Optional[GeneratedField]:
        for f in self.fields:
            if f.alias == alias:
                return f
        return None


class ModelDescriptorGenerator:
    """Build (and cache) GeneratedModel descriptors for (base type, shape) pairs.

    The cache is bounded and evicts in insertion order (FIFO, not LRU). A hit
    returns the very same GeneratedModel instance, so callers may compare
    descriptors by identity.
    """

    def __init__(
        self,
        schema_registry: Optional[SchemaRegistry] = None,
        cache_enabled: bool = True,
        cache_size: int = DEFAULT_CACHE_SIZE,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        if max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {max_depth}")
        self.schema_registry = schema_registry if schema_registry is not None else SchemaRegistry()
        self.cache_enabled = cache_enabled
        self.max_depth = max_depth
        self._cache: FifoCache[GeneratedModel] = FifoCache(max_size=cache_size)

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def cache_info(self) -> Dict[str, int]:
        return self._cache.info()

    def clear_cache(self) -> None:
        self._cache.clear()

    def generate_model_descriptor(
        self, base_model_name: Union[str, Enum], shape_spec: ShapeSpec
    ) -> GeneratedModel:
        """Generate, or fetch from cache, the descriptor for a base type and shape.

        Args:
            base_model_name: Record type the shape is applied to
            shape_spec: Parsed shape (with flags)

        Returns:
            GeneratedModel; the cached instance for a structurally identical
            (base type, shape) pair

        Raises:
            ShapeValidationError: If the shape references unknown fields, nests
                into a field that cannot nest, or nests deeper than max_depth
        """
        model_name = type_name(base_model_name)
        if not self.cache_enabled:
            return self._build(model_name, shape_spec)

        cache_key = shape_spec.cache_key(model_name)
        cached = self._cache.get(cache_key)
        if cached is not None:
            logger.debug("Descriptor cache hit for %s", model_name)
            return cached

        model = self._build(model_name, shape_spec)
        logger.debug("Built descriptor for %s (%d fields)", model_name, len(model.fields))
        return self._cache.put(cache_key, model)

    def _build(self, model_name: str, shape_spec: ShapeSpec) -> GeneratedModel:
        fields = self._build_fields(model_name, shape_spec.fields, path=(model_name,))
        return GeneratedModel(
            model_name=model_name,
            fields=fields,
            is_flat=shape_spec.is_flat,
            is_flat_lists=shape_spec.is_flat_lists,
        )

    def _build_fields(
        self, model_name: str, field_specs: Sequence[FieldSpec], path: Tuple[str, ...]
    ) -> Tuple[GeneratedField, ...]:
        schema = self.schema_registry.get_schema(model_name)
        fields: List[GeneratedField] = []

        for spec in field_specs:
            if spec.is_wildcard or spec.name == WILDCARD:
                # Wildcard: every field of this level, in declaration order
                for field_schema in schema.fields.values():
                    fields.append(self._build_field(model_name, spec, field_schema, path))
            else:
                field_schema = self.schema_registry.get_field(model_name, spec.name)
                fields.append(self._build_field(model_name, spec, field_schema, path))

        # Deduplicate by alias: the later entry's value replaces the earlier
        # one, which keeps the position of the alias's first occurrence.
        by_alias: Dict[str, GeneratedField] = {}
        for f in fields:
            by_alias[f.alias] = f
        return tuple(by_alias.values())

    def _build_field(
        self,
        model_name: str,
        spec: FieldSpec,
        field_schema: FieldSchema,
        path: Tuple[str, ...],
    ) -> GeneratedField:
        alias = spec.alias if spec.alias is not None else field_schema.name

        nested: Optional[GeneratedModel] = None
        if spec.nested_fields:
            nested_name = field_schema.nested_model or self._infer_nested_model_name(field_schema)
            if nested_name is None:
                raise ShapeValidationError(
                    f"Field '{field_schema.name}' on model '{model_name}' does not support nested fields.",
                    SchemaErrorCode.NOT_NESTABLE,
                )
            nested_path = path + (nested_name,)
            if len(nested_path) > self.max_depth:
                raise ShapeValidationError(
                    f"Shape nests deeper than {self.max_depth} levels: {' -> '.join(nested_path)}",
                    SchemaErrorCode.MAX_DEPTH_EXCEEDED,
                )
            nested = GeneratedModel(
                model_name=nested_name,
                fields=self._build_fields(
                    nested_name, self._normalize_nested_fields(spec.nested_fields), nested_path
                ),
            )

        return GeneratedField(field=field_schema, spec=spec, alias=alias, nested_model=nested)

    @staticmethod
    def _infer_nested_model_name(field_schema: FieldSchema) -> Optional[str]:
        """A non-primitive type names the nested record type."""
        if field_schema.is_primitive:
            return None
        return field_schema.type

    @staticmethod
    def _normalize_nested_fields(nested: Sequence[FieldSpec]) -> Sequence[FieldSpec]:
        """Treat a lone nested wildcard, as in ``recipient(*)``, as a pure wildcard node."""
        if len(nested) == 1 and (nested[0].is_wildcard or nested[0].name == WILDCARD):
            return (FieldSpec.wildcard(),)
        return nested
