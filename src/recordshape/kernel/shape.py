"""Pydantic models for parsed shape strings."""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from recordshape._internal.canonical_json import canonical_dumps, canonical_sha256

WILDCARD = "*"


class FieldSpec(BaseModel):
    """One requested field in a shape string.

    ``nested_fields`` is set when the field is followed by a parenthesized
    sub-list (possibly empty, as in ``recipient()``).
    """
    name: str  # identifier, or "*" for a wildcard
    alias: Optional[str] = None
    nested_fields: Optional[Tuple[FieldSpec, ...]] = None
    is_wildcard: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def mark_wildcard(cls, data: Any) -> Any:
        """A field named "*" is always a wildcard."""
        if isinstance(data, dict) and data.get("name") == WILDCARD:
            data = {**data, "is_wildcard": True}
        return data

    @model_validator(mode="after")
    def validate_wildcard_alias(self) -> FieldSpec:
        if self.is_wildcard and self.alias is not None:
            raise ValueError("Wildcard fields cannot have aliases")
        return self

    @classmethod
    def wildcard(cls) -> FieldSpec:
        return cls(name=WILDCARD, is_wildcard=True)

    def to_shape_string(self) -> str:
        text = self.name
        if self.alias is not None:
            text += f"::{self.alias}"
        if self.nested_fields is not None:
            text += "(" + ",".join(f.to_shape_string() for f in self.nested_fields) + ")"
        return text


class ShapeSpec(BaseModel):
    """Parsed shape string plus the flattening flags of the source payload.

    The flags are metadata attached after parsing (``parse_with_flags``);
    they are not part of the grammar. Two specs with the same field tree and
    flags compare equal and produce the same cache key.
    """
    fields: Tuple[FieldSpec, ...] = Field(default_factory=tuple)
    is_flat: bool = False
    is_flat_lists: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    def with_flags(self, is_flat: bool, is_flat_lists: bool) -> ShapeSpec:
        """Return a new spec sharing this field tree with the given flags."""
        return self.model_copy(update={"is_flat": is_flat, "is_flat_lists": is_flat_lists})

    def canonical_payload(self) -> Dict[str, Any]:
        """JSON-ready view of the spec with unset optional members dropped."""
        return self.model_dump(mode="json", exclude_none=True)

    def cache_key(self, base_model_name: str) -> str:
        """Stable cache key for this shape when resolved against ``base_model_name``."""
        return f"{base_model_name}:{canonical_dumps(self.canonical_payload())}"

    def fingerprint(self) -> str:
        """SHA256 fingerprint of the canonical payload (prefixed with 'sha256:')."""
        return canonical_sha256(self.canonical_payload())

    def to_shape_string(self) -> str:
        """Render the field tree back into shape syntax (flags are not rendered)."""
        return ",".join(f.to_shape_string() for f in self.fields)


FieldSpec.model_rebuild()
