"""Pytest configuration and shared fixtures.

No sys.path hacks - tests import from the installed recordshape package.
"""

import pytest

from recordshape.kernel.factory import ModelFactory
from recordshape.kernel.generator import ModelDescriptorGenerator
from recordshape.kernel.parser import ShapeParser
from recordshape.kernel.schema import SchemaRegistry


@pytest.fixture
def parser():
    return ShapeParser()


@pytest.fixture(scope="session")
def registry():
    # Immutable after construction, safe to share across tests
    return SchemaRegistry()


@pytest.fixture
def generator(registry):
    return ModelDescriptorGenerator(schema_registry=registry)


@pytest.fixture
def factory(generator):
    return ModelFactory(type_generator=generator)


@pytest.fixture
def small_catalog():
    """A tiny catalog with a self-referencing type, for depth and dedup tests."""
    return {
        "Node": {
            "id": {"type": "int", "is_optional": False},
            "label": {"type": "str"},
            "parent": {"type": "Node"},
            "children": {"type": "Node", "is_list": True},
            "meta": {"type": "dict"},
        },
    }
