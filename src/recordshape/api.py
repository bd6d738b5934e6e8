"""Public API for recordshape.

ShapeEngine wires one parser, one schema registry, one descriptor generator
and one model factory together. There is no module-level engine: callers
construct and own their instances.
"""

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union

from recordshape.config import EngineSettings
from recordshape.kernel.factory import ModelFactory
from recordshape.kernel.generator import GeneratedModel, ModelDescriptorGenerator
from recordshape.kernel.parser import ShapeParser
from recordshape.kernel.schema import SchemaRegistry
from recordshape.kernel.shape import ShapeSpec

ShapeInput = Union[str, ShapeSpec]
TypeInput = Union[str, Enum]


class ShapeEngine:
    """Parse shapes and project payloads against a schema registry."""

    def __init__(self, settings: Optional[EngineSettings] = None, registry: Optional[SchemaRegistry] = None):
        self.settings = settings if settings is not None else EngineSettings()
        self.registry = registry if registry is not None else SchemaRegistry()
        self.parser = ShapeParser(cache_enabled=self.settings.parser_cache_enabled)
        self.generator = ModelDescriptorGenerator(
            schema_registry=self.registry,
            cache_enabled=self.settings.descriptor_cache_enabled,
            cache_size=self.settings.descriptor_cache_size,
            max_depth=self.settings.max_depth,
        )
        self.factory = ModelFactory(type_generator=self.generator, joiner=self.settings.joiner)

    def parse(
        self, shape: ShapeInput, flat: Optional[bool] = None, flat_lists: Optional[bool] = None
    ) -> ShapeSpec:
        """Parse a shape string, or re-flag an existing ShapeSpec.

        Flags left as None keep the ShapeSpec's own values (False for strings).
        """
        if isinstance(shape, ShapeSpec):
            is_flat = shape.is_flat if flat is None else flat
            is_flat_lists = shape.is_flat_lists if flat_lists is None else flat_lists
            if shape.is_flat == is_flat and shape.is_flat_lists == is_flat_lists:
                return shape
            return shape.with_flags(is_flat, is_flat_lists)
        if flat or flat_lists:
            return self.parser.parse_with_flags(shape, bool(flat), bool(flat_lists))
        return self.parser.parse(shape)

    def describe(
        self,
        base_type: TypeInput,
        shape: ShapeInput,
        flat: Optional[bool] = None,
        flat_lists: Optional[bool] = None,
    ) -> GeneratedModel:
        """Resolve a shape against a record type without projecting anything."""
        return self.generator.generate_model_descriptor(base_type, self.parse(shape, flat, flat_lists))

    def shape_one(
        self,
        base_type: TypeInput,
        shape: ShapeInput,
        raw: Any,
        flat: Optional[bool] = None,
        flat_lists: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """Project one raw record."""
        return self.factory.create_one(base_type, self.parse(shape, flat, flat_lists), raw)

    def shape_list(
        self,
        base_type: TypeInput,
        shape: ShapeInput,
        raw_items: Iterable[Any],
        flat: Optional[bool] = None,
        flat_lists: Optional[bool] = None,
    ) -> List[Dict[str, Any]]:
        """Project a list of raw records (fail-fast on the first bad item)."""
        return self.factory.create_list(base_type, self.parse(shape, flat, flat_lists), raw_items)
