"""
Common utility functions for samplize.
"""

# pylint: disable=line-too-long

import json
import math
from typing import Any, Callable, Optional
from urllib.parse import urlparse


class _Missing:
    """Marker for an argument that was not supplied."""

    def __repr__(self) -> str:
        return 'MISSING'

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def is_number(value: Any) -> bool:
    """Check if the value is a real number. Booleans are not numbers here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_integral(value: Any) -> bool:
    """Check if a number has no fractional part."""
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value) and value.is_integer()


def is_present(value: Any) -> bool:
    """
    Check if a schema keyword value counts as set.

    Mappings and lists count as set even when empty; ``None`` and ``False`` do not.
    """
    return value is not None and value is not False


def has_type(schema_type: Any, name: str) -> bool:
    """
    Check if a ``type`` keyword mentions the given type name.

    Args:
        schema_type: A type name, a list of type names or anything else.
        name: The type name to look for, e.g. ``'array'``.

    Returns:
        bool: True if the type name is contained in the keyword value.
    """
    if isinstance(schema_type, (str, list, tuple)):
        return name in schema_type
    return False


def first_type(schema_type: Any) -> Any:
    """Return the first entry of a type list, or the type itself."""
    if isinstance(schema_type, list):
        return schema_type[0] if schema_type else None
    return schema_type


def js_typeof(value: Any) -> str:
    """Name the JSON type of a literal the way JavaScript ``typeof`` does."""
    if isinstance(value, bool):
        return 'boolean'
    if is_number(value):
        return 'number'
    if isinstance(value, str):
        return 'string'
    return 'object'


def number_text(value: Any) -> str:
    """Render a number the way JavaScript string conversion does (``5``, not ``5.0``)."""
    if isinstance(value, float):
        if math.isnan(value):
            return 'NaN'
        if math.isinf(value):
            return 'Infinity' if value > 0 else '-Infinity'
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


def type_text(schema_type: Any) -> str:
    """Render a ``type`` keyword for diagnostics."""
    if schema_type is None:
        return 'undefined'
    if isinstance(schema_type, list):
        return ','.join(type_text(t) for t in schema_type)
    if isinstance(schema_type, bool):
        return 'true' if schema_type else 'false'
    return str(schema_type)


def scalar_text(value: Any) -> str:
    """Render a sample value as XML character data."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if is_number(value):
        return number_text(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Not a JSON constant: {token}")


def parse_json_text(text: str) -> Any:
    """
    Parse a string literal as JSON, returning the string unchanged if it is not JSON.

    ``NaN`` and ``Infinity`` are not JSON and stay strings.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return text


def is_uri(value: str) -> bool:
    """Check if a string is an absolute URI."""
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc or parsed.path)


def deeply_strip_key(value: Any, key: str, predicate: Optional[Callable[[Any], bool]] = None) -> Any:
    """
    Return a copy of a mapping with a key removed at every nesting level of mappings.

    Lists are returned unchanged, as are scalars.

    Args:
        value: The value to clean.
        key: The key to remove.
        predicate: Optional test on the key's value; the key is only removed if it passes.
    """
    if not isinstance(value, dict) or not key:
        return value
    stripped = {}
    for k, v in value.items():
        if k == key and (predicate is None or predicate(v)):
            continue
        stripped[k] = deeply_strip_key(v, key, predicate)
    return stripped


def strip_resolved_refs(value: Any) -> Any:
    """Remove ``$$ref`` markers left in literal values by a reference resolver."""
    return deeply_strip_key(value, '$$ref', lambda v: isinstance(v, str) and is_uri(v))
