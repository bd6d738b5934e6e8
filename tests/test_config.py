"""Tests for engine settings and default shapes."""

import pytest
from pydantic import ValidationError

from recordshape.config import DEFAULT_SHAPES, EngineSettings, ShapeDefaults


def test_default_settings():
    settings = EngineSettings()
    assert settings.parser_cache_enabled is True
    assert settings.descriptor_cache_enabled is True
    assert settings.descriptor_cache_size == 128
    assert settings.max_depth == 32
    assert settings.joiner == "."


@pytest.mark.parametrize(
    "kwargs",
    [{"descriptor_cache_size": 0}, {"max_depth": 0}, {"joiner": ""}, {"unknown": 1}],
)
def test_invalid_settings_rejected(kwargs):
    with pytest.raises(ValidationError):
        EngineSettings(**kwargs)


def test_from_env():
    settings = EngineSettings.from_env({
        "RECORDSHAPE_DESCRIPTOR_CACHE_SIZE": "256",
        "RECORDSHAPE_PARSER_CACHE_ENABLED": "false",
        "RECORDSHAPE_JOINER": "__",
        "UNRELATED": "x",
    })
    assert settings.descriptor_cache_size == 256
    assert settings.parser_cache_enabled is False
    assert settings.joiner == "__"
    assert settings.max_depth == 32


def test_from_env_reads_process_environment(monkeypatch):
    monkeypatch.setenv("RECORDSHAPE_MAX_DEPTH", "4")
    assert EngineSettings.from_env().max_depth == 4


def test_from_env_invalid_value():
    with pytest.raises(ValidationError):
        EngineSettings.from_env({"RECORDSHAPE_DESCRIPTOR_CACHE_SIZE": "lots"})


@pytest.mark.parametrize("name", sorted(DEFAULT_SHAPES))
def test_default_shapes_resolve_against_catalog(name, parser, generator):
    base_type, shape = DEFAULT_SHAPES[name]
    assert getattr(ShapeDefaults, name) == shape
    model = generator.generate_model_descriptor(base_type, parser.parse(shape))
    assert len(model.fields) > 0


def test_grants_default_status_wildcard(parser, generator):
    model = generator.generate_model_descriptor("Grant", parser.parse(ShapeDefaults.GRANTS_MINIMAL))
    assert model.get("status").nested_model.aliases() == ["code", "description"]
