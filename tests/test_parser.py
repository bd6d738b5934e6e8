"""Tests for the shape-string parser."""

import pytest

from recordshape.codes import ParseErrorCode
from recordshape.errors import ShapeParseError
from recordshape.kernel.parser import ShapeParser
from recordshape.kernel.shape import FieldSpec, ShapeSpec


def test_parse_simple_fields(parser):
    spec = parser.parse("key,piid,award_date")
    assert [f.name for f in spec.fields] == ["key", "piid", "award_date"]
    assert all(f.alias is None for f in spec.fields)
    assert all(f.nested_fields is None for f in spec.fields)
    assert spec.is_flat is False
    assert spec.is_flat_lists is False


def test_parse_alias_and_nested(parser):
    spec = parser.parse("key::id,recipient(display_name::name,uei)")
    key, recipient = spec.fields
    assert key.name == "key"
    assert key.alias == "id"
    assert recipient.name == "recipient"
    assert [f.name for f in recipient.nested_fields] == ["display_name", "uei"]
    assert recipient.nested_fields[0].alias == "name"


def test_parse_deeply_nested(parser):
    spec = parser.parse("recipient(location(city,state))")
    location = spec.fields[0].nested_fields[0]
    assert location.name == "location"
    assert [f.name for f in location.nested_fields] == ["city", "state"]


def test_parse_wildcards(parser):
    spec = parser.parse("*,recipient(*)")
    top, recipient = spec.fields
    assert top.is_wildcard is True
    assert top.name == "*"
    assert recipient.nested_fields[0].is_wildcard is True


def test_whitespace_between_tokens(parser):
    spec = parser.parse("  key ,  recipient ( display_name , uei )  ")
    assert spec == parser.parse("key,recipient(display_name,uei)")


def test_fields_separated_by_whitespace_only():
    """Juxtaposed fields are accepted without a comma."""
    spec = ShapeParser().parse("key piid")
    assert [f.name for f in spec.fields] == ["key", "piid"]


def test_empty_nested_list_parses(parser):
    spec = parser.parse("recipient()")
    assert spec.fields[0].nested_fields == ()


def test_identifier_with_digits_and_underscores(parser):
    spec = parser.parse("_private,zip4,address_line1")
    assert [f.name for f in spec.fields] == ["_private", "zip4", "address_line1"]


class TestParseErrors:
    """Each malformed construct raises a distinct ShapeParseError code."""

    @pytest.mark.parametrize("shape", ["", "   ", "\n\t"])
    def test_empty(self, parser, shape):
        with pytest.raises(ShapeParseError) as excinfo:
            parser.parse(shape)
        assert excinfo.value.code == ParseErrorCode.EMPTY_SHAPE

    def test_trailing_comma(self, parser):
        with pytest.raises(ShapeParseError) as excinfo:
            parser.parse("key,")
        assert excinfo.value.code == ParseErrorCode.TRAILING_COMMA

    def test_trailing_comma_in_nested_list(self, parser):
        with pytest.raises(ShapeParseError) as excinfo:
            parser.parse("recipient(uei,)")
        assert excinfo.value.code == ParseErrorCode.TRAILING_COMMA

    def test_leading_empty_parens(self, parser):
        with pytest.raises(ShapeParseError) as excinfo:
            parser.parse("(),key")
        assert excinfo.value.code == ParseErrorCode.INVALID_IDENTIFIER
        assert excinfo.value.position == 0

    def test_comma_without_field(self, parser):
        with pytest.raises(ShapeParseError) as excinfo:
            parser.parse(",key")
        assert excinfo.value.code == ParseErrorCode.MISSING_FIELD_BEFORE_COMMA
        assert excinfo.value.position == 0

    def test_double_comma(self, parser):
        with pytest.raises(ShapeParseError) as excinfo:
            parser.parse("key,,piid")
        assert excinfo.value.code == ParseErrorCode.MISSING_FIELD_BEFORE_COMMA
        assert excinfo.value.position == 4

    def test_stray_closing_paren(self, parser):
        with pytest.raises(ShapeParseError) as excinfo:
            parser.parse("key)")
        assert excinfo.value.code == ParseErrorCode.UNEXPECTED_CHARACTER
        assert excinfo.value.position == 3
        assert "')'" in str(excinfo.value)

    def test_wildcard_alias(self, parser):
        with pytest.raises(ShapeParseError) as excinfo:
            parser.parse("*::everything")
        assert excinfo.value.code == ParseErrorCode.WILDCARD_ALIAS

    def test_unclosed_nested(self, parser):
        with pytest.raises(ShapeParseError) as excinfo:
            parser.parse("recipient(display_name")
        assert excinfo.value.code == ParseErrorCode.UNCLOSED_NESTED
        assert excinfo.value.position == 9

    def test_identifier_starting_with_digit(self, parser):
        with pytest.raises(ShapeParseError) as excinfo:
            parser.parse("1key")
        assert excinfo.value.code == ParseErrorCode.INVALID_IDENTIFIER

    def test_alias_missing_identifier(self, parser):
        with pytest.raises(ShapeParseError) as excinfo:
            parser.parse("key::")
        assert excinfo.value.code == ParseErrorCode.INVALID_IDENTIFIER

    def test_invalid_character(self, parser):
        with pytest.raises(ShapeParseError) as excinfo:
            parser.parse("key,pi-id")
        assert excinfo.value.code == ParseErrorCode.INVALID_IDENTIFIER
        assert excinfo.value.position == 6


class TestCaching:
    def test_same_string_returns_same_instance(self, parser):
        first = parser.parse("key,piid")
        second = parser.parse("key,piid")
        assert first is second
        assert parser.cache_size == 1

    def test_cache_key_is_trimmed_string(self, parser):
        assert parser.parse("key") is parser.parse("  key  ")

    def test_cache_disabled_returns_equal_instances(self):
        parser = ShapeParser(cache_enabled=False)
        first = parser.parse("key,recipient(uei)")
        second = parser.parse("key,recipient(uei)")
        assert first == second
        assert first is not second
        assert parser.cache_size == 0

    def test_clear_cache(self, parser):
        first = parser.parse("key")
        parser.clear_cache()
        assert parser.parse("key") is not first

    def test_failed_parse_not_cached(self, parser):
        with pytest.raises(ShapeParseError):
            parser.parse("key,")
        assert parser.cache_size == 0


def test_parse_with_flags_shares_field_tree(parser):
    plain = parser.parse("key,recipient(uei)")
    flagged = parser.parse_with_flags("key,recipient(uei)", True, False)
    assert flagged.is_flat is True
    assert flagged.is_flat_lists is False
    assert flagged.fields is plain.fields
    # The raw-string cache still holds the unflagged spec
    assert parser.parse("key,recipient(uei)") is plain
    assert flagged != plain


def test_validate_syntax(parser):
    parser.validate_syntax("key,recipient(*)")
    with pytest.raises(ShapeParseError):
        parser.validate_syntax("key,(")


class TestShapeSpec:
    def test_wildcard_alias_rejected_by_model(self):
        with pytest.raises(ValueError, match="Wildcard fields cannot have aliases"):
            FieldSpec(name="*", alias="x")

    def test_star_name_marks_wildcard(self):
        assert FieldSpec(name="*").is_wildcard is True

    def test_cache_key_includes_flags(self, parser):
        spec = parser.parse("key")
        assert spec.cache_key("Contract") != spec.with_flags(True, False).cache_key("Contract")
        assert spec.cache_key("Contract") != spec.cache_key("IDV")
        assert spec.cache_key("Contract").startswith("Contract:")

    def test_structurally_equal_specs_share_cache_key(self):
        a = ShapeParser(cache_enabled=False).parse("key, recipient( uei )")
        b = ShapeSpec(fields=(
            FieldSpec(name="key"),
            FieldSpec(name="recipient", nested_fields=(FieldSpec(name="uei"),)),
        ))
        assert a == b
        assert a.cache_key("Contract") == b.cache_key("Contract")
        assert a.fingerprint() == b.fingerprint()
        assert a.fingerprint().startswith("sha256:")

    def test_to_shape_string_round_trip(self, parser):
        text = "key::id,recipient(display_name,location(*)),*"
        spec = parser.parse(text)
        assert spec.to_shape_string() == text
        assert ShapeParser().parse(spec.to_shape_string()) == spec
