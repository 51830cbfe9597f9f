"""
Bound enforcement for synthesized samples.
"""

import math
import sys
from typing import Any, Dict, Iterable, List, Optional

from samplize.common import is_integral, is_number


def _number_keyword(schema: Dict[str, Any], key: str) -> Optional[Any]:
    # infinite and NaN bounds (e.g. YAML .inf) do not constrain anything
    value = schema.get(key)
    return value if is_number(value) and math.isfinite(value) else None


def apply_number_constraints(value: Any, schema: Dict[str, Any]) -> Any:
    """
    Clamp a number into the schema's bounds and round it up to ``multipleOf``.

    Exclusive bounds are moved inwards by one step: ``1`` for integral values,
    machine epsilon otherwise. Contradictory bounds (minimum above maximum)
    leave the value unclamped.

    Args:
        value: The synthesized number.
        schema (Dict[str, Any]): The schema carrying the constraints.

    Returns:
        The adjusted number.
    """
    step = 1 if is_integral(value) else sys.float_info.epsilon
    min_value = _number_keyword(schema, 'minimum')
    max_value = _number_keyword(schema, 'maximum')
    exclusive_minimum = _number_keyword(schema, 'exclusiveMinimum')
    exclusive_maximum = _number_keyword(schema, 'exclusiveMaximum')

    if exclusive_minimum is not None:
        bound = exclusive_minimum + step
        min_value = bound if min_value is None else max(min_value, bound)
    if exclusive_maximum is not None:
        bound = exclusive_maximum - step
        max_value = bound if max_value is None else min(max_value, bound)

    if not (min_value is not None and max_value is not None and min_value > max_value):
        if min_value is not None and value < min_value:
            value = min_value
        if max_value is not None and value > max_value:
            value = max_value

    multiple_of = _number_keyword(schema, 'multipleOf')
    if multiple_of is not None and multiple_of > 0:
        remainder = value % multiple_of
        if remainder != 0:
            value = value + multiple_of - remainder
    return value


def _cycle_fill(source: List[Any], length: int) -> List[Any]:
    # grows by repeating the existing entries in order; an empty source cannot grow
    if not source:
        return source
    i = 0
    while len(source) < length:
        source.append(source[i % len(source)])
        i += 1
    return source


def apply_string_constraints(value: str, schema: Dict[str, Any]) -> str:
    """Truncate to ``maxLength`` and pad cyclically from the start up to ``minLength``."""
    max_length = _number_keyword(schema, 'maxLength')
    if max_length is not None:
        value = value[:int(max_length)]
    min_length = _number_keyword(schema, 'minLength')
    if min_length is not None and len(value) < min_length:
        value = ''.join(_cycle_fill(list(value), int(min_length)))
    return value


def apply_item_constraints(samples: List[Any], schema: Dict[str, Any]) -> List[Any]:
    """Truncate to ``maxItems`` and repeat existing items cyclically up to ``minItems``."""
    samples = list(samples)
    max_items = _number_keyword(schema, 'maxItems')
    if max_items is not None:
        samples = samples[:int(max_items)]
    min_items = _number_keyword(schema, 'minItems')
    if min_items is not None:
        samples = _cycle_fill(samples, int(min_items))
    return samples


class PropertyBudget:
    """
    Tracks how many properties an object sample may still receive.

    An optional property is only admitted while slots remain after reserving
    one for every required property that has not been emitted yet. Required
    properties are admitted until ``maxProperties`` is reached.
    """

    def __init__(self, schema: Dict[str, Any]) -> None:
        self.max_properties = _number_keyword(schema, 'maxProperties')
        self.min_properties = _number_keyword(schema, 'minProperties')
        required = schema.get('required')
        self.required: List[str] = list(dict.fromkeys(required)) if isinstance(required, list) else []
        self.added = 0
        self.emitted: set = set()

    def exceeded(self) -> bool:
        """Check if ``maxProperties`` has been reached."""
        return self.max_properties is not None and self.added >= self.max_properties

    def required_remaining(self) -> int:
        """Count required properties that have not been emitted."""
        return sum(1 for name in self.required if name not in self.emitted)

    def can_add(self, name: str) -> bool:
        if self.max_properties is None:
            return True
        if self.exceeded():
            return False
        if name in self.required:
            return True
        return self.max_properties - self.added - self.required_remaining() > 0

    def record(self, name: str) -> None:
        """Count an emitted property."""
        self.added += 1
        self.emitted.add(name)

    def satisfy(self, names: Iterable[str]) -> None:
        """Mark properties as present without counting them, e.g. XML attributes."""
        self.emitted.update(names)

    def additional_count(self, default: int = 3) -> int:
        """Number of generated additional properties to emit."""
        if self.min_properties is not None and self.added < self.min_properties:
            return int(self.min_properties - self.added)
        return default
