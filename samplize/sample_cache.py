"""
Bounded memoization of generated samples.

Samples are cached by the JSON serialization of schema, configuration and
override, so structurally equal inputs share an entry. The cache is owned by
the caller; a module-level instance backs the ``memoized_*`` helpers.
"""

import copy
import json
import logging
import threading
from collections import OrderedDict
from typing import Any, Callable, Hashable, Optional, Tuple

from samplize.common import MISSING
from samplize.config import SampleConfig
from samplize.schema_sampler import create_xml_example, sample_from_schema

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 256


def make_cache_key(kind: str, schema: Any, config: Any, example_override: Any) -> Optional[Tuple[Hashable, ...]]:
    """
    Build the cache key for a call.

    Returns:
        The key, or None if the inputs cannot be serialized (e.g. cyclic
        schemas or mappings with tuple keys).
    """
    try:
        schema_key = json.dumps(schema, default=repr)
        override_key = 'undefined' if example_override is MISSING else json.dumps(example_override, default=repr)
    except (TypeError, ValueError, RecursionError) as e:
        logger.debug("Inputs cannot be cached: %s", e)
        return None
    config_key = json.dumps(SampleConfig.from_value(config).to_dict(), sort_keys=True)
    return (kind, schema_key, config_key, override_key)


class SampleCache:
    """
    A least-recently-used cache of samples, safe to share between threads.

    Attributes:
        maxsize (int): Number of entries kept; the least recently used entry is evicted first.
    """

    def __init__(self, maxsize: int = DEFAULT_CACHE_SIZE) -> None:
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self.maxsize = maxsize
        self._entries: 'OrderedDict[Tuple[Hashable, ...], Any]' = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def get_or_compute(self, key: Optional[Tuple[Hashable, ...]], compute: Callable[[], Any]) -> Any:
        """
        Return the cached value for a key, computing and storing it on a miss.

        A None key bypasses the cache. Values are copied on the way out so
        callers can modify them freely.
        """
        if key is None:
            return compute()
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self.hits += 1
                return copy.deepcopy(self._entries[key])
            self.misses += 1
        # computed outside the lock; concurrent misses for one key store equal values
        value = compute()
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self.maxsize:
                self._entries.popitem(last=False)
        return copy.deepcopy(value)


_default_cache = SampleCache()


def default_cache() -> SampleCache:
    """Return the module-level cache used when no cache is passed."""
    return _default_cache


def memoized_sample_from_schema(schema: Any, config: Any = None, example_override: Any = MISSING, cache: Optional[SampleCache] = None) -> Any:
    """Cached variant of ``sample_from_schema``."""
    if cache is None:
        cache = _default_cache
    key = make_cache_key('json', schema, config, example_override)
    return cache.get_or_compute(key, lambda: sample_from_schema(schema, config, example_override))


def memoized_create_xml_example(schema: Any, config: Any = None, example_override: Any = MISSING, cache: Optional[SampleCache] = None) -> Optional[str]:
    """Cached variant of ``create_xml_example``."""
    if cache is None:
        cache = _default_cache
    key = make_cache_key('xml', schema, config, example_override)
    return cache.get_or_compute(key, lambda: create_xml_example(schema, config, example_override))
