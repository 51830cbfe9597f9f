"""Configuration for sample generation."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SampleConfig:
    """Options consulted by the sample generator.

    Attributes:
        include_read_only: Emit properties flagged ``readOnly``.
        include_write_only: Emit properties flagged ``writeOnly``.
    """
    include_read_only: bool = False
    include_write_only: bool = False

    @classmethod
    def from_value(cls, value: Any) -> 'SampleConfig':
        """
        Build a configuration from a ``SampleConfig``, a mapping or ``None``.

        Mappings may use the camelCase keys sent by JavaScript hosts
        (``includeReadOnly``, ``includeWriteOnly``) or the snake_case
        attribute names. Unrecognized keys are ignored, and any other value
        falls back to the defaults.
        """
        if isinstance(value, SampleConfig):
            return value
        if value is None:
            return cls()
        if not isinstance(value, Mapping):
            logger.debug("Unsupported configuration type %s, using defaults", type(value).__name__)
            return cls()
        return cls(
            include_read_only=bool(value.get('includeReadOnly', value.get('include_read_only', False))),
            include_write_only=bool(value.get('includeWriteOnly', value.get('include_write_only', False))),
        )

    def to_dict(self) -> Dict[str, bool]:
        """Return the configuration with camelCase keys."""
        return {
            'includeReadOnly': self.include_read_only,
            'includeWriteOnly': self.include_write_only,
        }
