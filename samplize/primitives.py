"""
Representative leaf values for JSON Schema primitive types.

Values are looked up by ``(type, format)`` and fall back to ``(type, None)``.
Unknown types produce a placeholder string naming the type.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Tuple

from hypothesis import HealthCheck, Phase, find, settings
from hypothesis import strategies as st
from hypothesis.errors import InvalidArgument, NoSuchExample, Unsatisfiable

from samplize.common import first_type, type_text

logger = logging.getLogger(__name__)

STRING_PLACEHOLDER = 'string'

# derandomized and without an example database, so a pattern always yields the same string;
# generation only, the first match is returned without shrinking
_REGEX_SETTINGS = settings(
    database=None,
    derandomize=True,
    deadline=None,
    max_examples=10,
    phases=[Phase.generate],
    suppress_health_check=list(HealthCheck),
)


def generate_string_from_regex(pattern: str) -> str:
    """
    Generate a string fully matching a regular expression.

    Args:
        pattern (str): The regular expression.

    Returns:
        str: The first generated string matching the pattern, or ``'string'`` if the
        pattern does not compile or nothing matching can be generated.
    """
    try:
        compiled = re.compile(pattern)
    except (re.error, TypeError) as e:
        logger.debug("Invalid pattern %r: %s", pattern, e)
        return STRING_PLACEHOLDER
    try:
        return find(st.from_regex(compiled, fullmatch=True), lambda _: True, settings=_REGEX_SETTINGS)
    except (NoSuchExample, Unsatisfiable, InvalidArgument) as e:
        logger.debug("No example found for pattern %r: %s", pattern, e)
        return STRING_PLACEHOLDER


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def _string(schema: Dict[str, Any]) -> str:
    pattern = schema.get('pattern')
    if pattern:
        return generate_string_from_regex(pattern)
    return STRING_PLACEHOLDER


def _boolean(schema: Dict[str, Any]) -> bool:
    default = schema.get('default')
    return default if isinstance(default, bool) else True


PRIMITIVES: Dict[Tuple[str, Optional[str]], Callable[[Dict[str, Any]], Any]] = {
    ('string', None): _string,
    ('string', 'email'): lambda _: 'user@example.com',
    ('string', 'idn-email'): lambda _: '실례@example.com',
    ('string', 'hostname'): lambda _: 'example.com',
    ('string', 'idn-hostname'): lambda _: '실례.com',
    ('string', 'ipv4'): lambda _: '198.51.100.42',
    ('string', 'ipv6'): lambda _: '2001:0db8:5b96:0000:0000:426f:8e17:642a',
    ('string', 'uri'): lambda _: 'https://example.com/',
    ('string', 'uri-reference'): lambda _: 'path/index.html',
    ('string', 'iri'): lambda _: 'https://실례.com/',
    ('string', 'iri-reference'): lambda _: 'path/실례.html',
    ('string', 'uuid'): lambda _: '3fa85f64-5717-4562-b3fc-2c963f66afa6',
    ('string', 'uri-template'): lambda _: 'https://example.com/dictionary/{term:1}/{term}',
    ('string', 'json-pointer'): lambda _: '/a/b/c',
    ('string', 'relative-json-pointer'): lambda _: '1/0',
    ('string', 'date-time'): lambda _: _utc_timestamp(),
    ('string', 'date'): lambda _: _utc_timestamp()[:10],
    ('string', 'time'): lambda _: _utc_timestamp()[11:],
    ('string', 'duration'): lambda _: 'P3D',
    ('string', 'password'): lambda _: '********',
    ('string', 'regex'): lambda _: '^[a-z]+$',
    ('number', None): lambda _: 0,
    ('number', 'float'): lambda _: 0.1,
    ('number', 'double'): lambda _: 0.1,
    ('integer', None): lambda _: 0,
    ('integer', 'int32'): lambda _: 2 ** 30,
    ('integer', 'int64'): lambda _: 2 ** 53 - 1,
    ('boolean', None): _boolean,
    ('null', None): lambda _: None,
}


def primitive(schema: Any) -> Any:
    """
    Produce a sample value for a primitive schema.

    Args:
        schema: The schema. Only ``type`` (first entry if a list), ``format``,
            ``pattern`` and ``default`` are consulted.

    Returns:
        The sample value, or ``'Unknown Type: <type>'`` for unrecognized types.
    """
    if not isinstance(schema, dict):
        schema = {}
    schema_type = first_type(schema.get('type'))
    schema_format = schema.get('format')
    fn = None
    if isinstance(schema_type, str):
        if isinstance(schema_format, str):
            fn = PRIMITIVES.get((schema_type, schema_format))
        if fn is None:
            fn = PRIMITIVES.get((schema_type, None))
    if fn is None:
        return f"Unknown Type: {type_text(schema.get('type'))}"
    return fn(schema)
