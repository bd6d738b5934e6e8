"""Recursive-descent parser for shape strings.

Grammar:

    shape       := field_list
    field_list  := field ("," field)*
    field       := field_name [alias] [nested]
    field_name  := identifier | "*"
    alias       := "::" identifier
    nested      := "(" field_list ")"
    identifier  := [a-zA-Z_][a-zA-Z0-9_]*

Whitespace is allowed between any two tokens. Positions reported in errors
are offsets into the trimmed shape string.
"""

import logging
from typing import Dict, List, Optional, Tuple

from recordshape.codes import ParseErrorCode
from recordshape.errors import ShapeParseError
from recordshape.kernel.shape import WILDCARD, FieldSpec, ShapeSpec

logger = logging.getLogger(__name__)


def _is_identifier_start(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_identifier_part(ch: str) -> bool:
    return _is_identifier_start(ch) or ("0" <= ch <= "9")


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


class ShapeParser:
    """Parse shape strings into ShapeSpec trees.

    Successful parses are cached by the trimmed shape string for the life of
    the parser (the cache is unbounded; shape strings come from code, not
    from end users, so the set of distinct strings stays small).
    """

    def __init__(self, cache_enabled: bool = True):
        self.cache_enabled = cache_enabled
        self._cache: Dict[str, ShapeSpec] = {}

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self) -> None:
        self._cache.clear()

    def parse(self, shape: str) -> ShapeSpec:
        """Parse a shape string into a ShapeSpec.

        Args:
            shape: Shape string, e.g. ``"key,piid,recipient(display_name)"``

        Returns:
            ShapeSpec with default (False) flattening flags. Repeated calls with
            the same string return the cached instance.

        Raises:
            ShapeParseError: If the string is empty or does not match the grammar
        """
        text = shape.strip()
        if not text:
            raise ShapeParseError("Shape string cannot be empty", ParseErrorCode.EMPTY_SHAPE, 0)

        if self.cache_enabled:
            cached = self._cache.get(text)
            if cached is not None:
                logger.debug("Shape cache hit for %r", text)
                return cached

        fields, pos = self._parse_field_list(text, 0)

        pos = _skip_whitespace(text, pos)
        if pos < len(text):
            raise ShapeParseError(
                f"Unexpected character {text[pos]!r} at position {pos}",
                ParseErrorCode.UNEXPECTED_CHARACTER,
                pos,
            )

        spec = ShapeSpec(fields=tuple(fields))
        if self.cache_enabled:
            self._cache[text] = spec
        return spec

    def parse_with_flags(self, shape: str, is_flat: bool, is_flat_lists: bool) -> ShapeSpec:
        """Parse a shape string (or reuse the cache) and attach flattening flags.

        The flags never take part in the raw-string cache; the returned spec is
        a new instance sharing the cached field tree.
        """
        return self.parse(shape).with_flags(is_flat, is_flat_lists)

    def validate_syntax(self, shape: str) -> None:
        """Raise ShapeParseError if ``shape`` is not valid shape syntax."""
        self.parse(shape)

    def _parse_field_list(self, text: str, start: int) -> Tuple[List[FieldSpec], int]:
        """Parse fields up to end of input or an unconsumed ")".

        The caller consumes the closing parenthesis.
        """
        fields: List[FieldSpec] = []
        pos = start
        expect_field = True

        while pos < len(text):
            pos = _skip_whitespace(text, pos)
            if pos >= len(text):
                break

            ch = text[pos]
            if ch == ",":
                if expect_field:
                    raise ShapeParseError(
                        f"Expected field before comma at position {pos}",
                        ParseErrorCode.MISSING_FIELD_BEFORE_COMMA,
                        pos,
                    )
                expect_field = True
                pos += 1
                continue

            if ch == ")":
                break

            # Fields separated only by whitespace ("key piid") are accepted
            field, pos = self._parse_field(text, pos)
            fields.append(field)
            expect_field = False

        if expect_field and fields:
            raise ShapeParseError(
                "Expected field after comma but reached end of field list",
                ParseErrorCode.TRAILING_COMMA,
                pos,
            )

        return fields, pos

    def _parse_field(self, text: str, start: int) -> Tuple[FieldSpec, int]:
        pos = _skip_whitespace(text, start)
        if pos >= len(text):
            raise ShapeParseError(
                "Unexpected end of shape while parsing field",
                ParseErrorCode.UNEXPECTED_END,
                pos,
            )

        is_wildcard = text[pos] == WILDCARD
        if is_wildcard:
            name = WILDCARD
            pos += 1
        else:
            name, pos = self._parse_identifier(text, pos)

        alias: Optional[str] = None
        if text.startswith("::", pos):
            if is_wildcard:
                raise ShapeParseError(
                    'Wildcard fields cannot have aliases ("*::alias" is invalid)',
                    ParseErrorCode.WILDCARD_ALIAS,
                    pos,
                )
            alias, pos = self._parse_identifier(text, pos + 2)

        nested_fields: Optional[Tuple[FieldSpec, ...]] = None
        pos = _skip_whitespace(text, pos)
        if pos < len(text) and text[pos] == "(":
            open_pos = pos
            nested, pos = self._parse_field_list(text, pos + 1)
            pos = _skip_whitespace(text, pos)
            if pos >= len(text) or text[pos] != ")":
                raise ShapeParseError(
                    f"Expected ')' to close nested field list for {name!r} opened at position {open_pos}",
                    ParseErrorCode.UNCLOSED_NESTED,
                    open_pos,
                )
            pos += 1
            nested_fields = tuple(nested)

        field = FieldSpec(
            name=name,
            alias=alias,
            nested_fields=nested_fields,
            is_wildcard=is_wildcard,
        )
        return field, pos

    def _parse_identifier(self, text: str, start: int) -> Tuple[str, int]:
        if start >= len(text):
            raise ShapeParseError(
                f"Expected identifier at position {start} but reached end of shape",
                ParseErrorCode.INVALID_IDENTIFIER,
                start,
            )
        first = text[start]
        if not _is_identifier_start(first):
            raise ShapeParseError(
                f"Invalid identifier start {first!r} at position {start}",
                ParseErrorCode.INVALID_IDENTIFIER,
                start,
            )

        pos = start + 1
        while pos < len(text) and _is_identifier_part(text[pos]):
            pos += 1
        return text[start:pos], pos
