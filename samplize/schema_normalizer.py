"""
Schema normalization ahead of sample generation.

Covers type inference for schemas without a usable ``type``, lifting of the
first ``oneOf``/``anyOf`` alternative onto its base schema, property
visibility and discriminator lookup. All functions return new mappings and
leave their inputs untouched.
"""

import re
from typing import Any, Dict, FrozenSet, Optional, Tuple

from samplize.common import is_present
from samplize.config import SampleConfig

OBJECT_CONTRACTS = ('maxProperties', 'minProperties')
ARRAY_CONTRACTS = ('minItems', 'maxItems')
NUMBER_CONSTRAINTS = ('minimum', 'maximum', 'exclusiveMinimum', 'exclusiveMaximum', 'multipleOf')
STRING_CONSTRAINTS = ('minLength', 'maxLength', 'pattern')

LIFTED_KEYWORDS = (
    'example', 'default', 'enum', 'xml', 'type', 'const',
    *OBJECT_CONTRACTS, *ARRAY_CONTRACTS, *NUMBER_CONSTRAINTS, *STRING_CONSTRAINTS,
)


def is_visible(schema: Any, config: SampleConfig) -> bool:
    """Check if a property schema should be emitted under the given configuration."""
    if not isinstance(schema, dict):
        return True
    if schema.get('deprecated'):
        return False
    if schema.get('readOnly') and not config.include_read_only:
        return False
    if schema.get('writeOnly') and not config.include_write_only:
        return False
    return True


def lift_schema(source: Dict[str, Any], target: Dict[str, Any], config: SampleConfig, _seen: FrozenSet[int] = frozenset()) -> Dict[str, Any]:
    """
    Merge the keywords of ``source`` into a copy of ``target``.

    A keyword already present on the target is never overwritten. ``required``
    lists are unioned, visible ``properties`` are added by name and ``items``
    schemas are lifted recursively. An ``items`` chain that leads back to a
    schema already being lifted is kept as a reference instead.

    Args:
        source (Dict[str, Any]): The schema to take keywords from.
        target (Dict[str, Any]): The schema receiving keywords.
        config (SampleConfig): Decides which properties are visible.

    Returns:
        Dict[str, Any]: The merged schema.
    """
    seen = _seen | {id(source)}
    merged = dict(target)
    for key in LIFTED_KEYWORDS:
        if key not in merged and key in source:
            merged[key] = source[key]

    if isinstance(source.get('required'), list):
        current = merged.get('required')
        required = list(current) if isinstance(current, list) else []
        for name in source['required']:
            if name not in required:
                required.append(name)
        merged['required'] = required

    if isinstance(source.get('properties'), dict):
        current = merged.get('properties')
        properties = dict(current) if isinstance(current, dict) else {}
        for name, prop in source['properties'].items():
            if not is_visible(prop, config):
                continue
            if not properties.get(name):
                properties[name] = prop
        merged['properties'] = properties

    items = source.get('items')
    if isinstance(items, dict):
        current = merged.get('items')
        if id(items) in seen:
            if not isinstance(current, dict):
                merged['items'] = items
        else:
            merged['items'] = lift_schema(items, current if isinstance(current, dict) else {}, config, seen)

    return merged


def _first_alternative(schema: Dict[str, Any]) -> Optional[Any]:
    for keyword in ('oneOf', 'anyOf'):
        alternatives = schema.get(keyword)
        if isinstance(alternatives, list) and alternatives:
            return alternatives[0]
    return None


def lift_composition(schema: Dict[str, Any], config: SampleConfig) -> Tuple[Dict[str, Any], bool]:
    """
    Lift the first ``oneOf`` (or, failing that, ``anyOf``) alternative onto the schema.

    Returns:
        Tuple[Dict[str, Any], bool]: The resulting schema, and whether the
        alternative supplied an ``example`` that should be used verbatim.
    """
    alternative = _first_alternative(schema)
    if alternative is None:
        return schema, False
    if not isinstance(alternative, dict):
        alternative = {}
    return lift_schema(alternative, schema, config), 'example' in alternative


def infer_type(schema: Dict[str, Any], has_literal: bool) -> Any:
    """
    Resolve the type of a schema that has no usable ``type`` keyword.

    Object keywords win over array keywords, which win over numeric ones.
    Anything else is a string unless a literal value or an ``enum`` is in play,
    in which case the type stays unresolved.

    Args:
        schema (Dict[str, Any]): The schema.
        has_literal (bool): Whether an example, default or override applies.

    Returns:
        The existing type if it is a string or list, the inferred type name, or
        the original (unusable) keyword value.
    """
    schema_type = schema.get('type')
    if isinstance(schema_type, (str, list)):
        return schema_type
    if (is_present(schema.get('properties')) or is_present(schema.get('additionalProperties'))
            or any(key in schema for key in OBJECT_CONTRACTS)):
        return 'object'
    if is_present(schema.get('items')) or any(key in schema for key in ARRAY_CONTRACTS):
        return 'array'
    if any(key in schema for key in NUMBER_CONSTRAINTS):
        return 'number'
    if not has_literal and schema.get('enum') is None:
        return 'string'
    return schema_type


def discriminator_value(schema: Dict[str, Any], property_name: str) -> Optional[str]:
    """
    Find the discriminator mapping key for a resolved schema.

    The schema must carry ``discriminator.mapping`` and the ``$$ref`` identity
    left by the reference resolver, and ``property_name`` must be the
    discriminator property. A mapping value is matched against the reference
    as a regular expression, or as a plain substring if it is not a valid one.

    Returns:
        Optional[str]: The matching mapping key, or None.
    """
    discriminator = schema.get('discriminator')
    ref = schema.get('$$ref')
    if not isinstance(discriminator, dict) or not isinstance(ref, str) or not ref:
        return None
    mapping = discriminator.get('mapping')
    if not isinstance(mapping, dict) or not mapping:
        return None
    if discriminator.get('propertyName') != property_name:
        return None
    for key, target in mapping.items():
        if not isinstance(target, str):
            continue
        try:
            matched = re.search(target, ref) is not None
        except re.error:
            matched = target in ref
        if matched:
            return key
    return None
