"""Convert flat, joiner-keyed payloads back into nested mappings."""

from collections.abc import Mapping
from typing import Any, Dict


def unflatten(data: Any, joiner: str = ".") -> Any:
    """Unflatten a mapping with joined keys into nested dicts.

    Example:
        >>> unflatten({"recipient.display_name": "Acme", "piid": "P-1"})
        {'recipient': {'display_name': 'Acme'}, 'piid': 'P-1'}

    Rules:
    - Non-mapping input is returned unchanged.
    - A mapping with no joined keys is returned as a shallow copy.
    - When a longer key has to descend through a prefix that already holds a
      non-mapping value, that value is replaced by a new dict.

    Args:
        data: Flat payload (usually one API record)
        joiner: Separator between path segments

    Returns:
        Nested payload
    """
    if not isinstance(data, Mapping):
        return data
    if not joiner:
        raise ValueError("joiner must be a non-empty string")

    if not any(isinstance(key, str) and joiner in key for key in data):
        return dict(data)

    result: Dict[str, Any] = {}
    # ids of the dicts built here; any other mapping came from the input
    owned = {id(result)}
    for flat_key, value in data.items():
        if not isinstance(flat_key, str) or joiner not in flat_key:
            result[flat_key] = value
            continue

        parts = flat_key.split(joiner)
        current = result
        for part in parts[:-1]:
            existing = current.get(part)
            if isinstance(existing, Mapping):
                if id(existing) not in owned:
                    existing = dict(existing)
                    owned.add(id(existing))
                    current[part] = existing
                current = existing
                continue
            # Missing, or a primitive in the way: replace with a fresh level
            nested: Dict[str, Any] = {}
            owned.add(id(nested))
            current[part] = nested
            current = nested
        current[parts[-1]] = value

    return result
