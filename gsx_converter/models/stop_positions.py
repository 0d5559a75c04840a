"""
Per-aircraft stop distances.

A gate's stop table maps an aircraft key (a major type id such as ``"737"``
or the fallback key ``"default"``) to a StopPositionsEntry, which is exactly
one of:

- ScalarStop: one distance for every sub-variant of that aircraft type
- VariantStop: a table of distances keyed by sub-variant (minor id), with
  an optional ``default`` used when the sub-variant is not listed

The two shapes serialize differently (bare number vs. object) so consumers
can tell them apart from the JSON container alone.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

DEFAULT_KEY = 'default'


@dataclass(frozen=True)
class ScalarStop:
    """A single stop distance in meters."""

    distance: float

    def to_json(self) -> float:
        return self.distance


@dataclass(frozen=True)
class VariantStop:
    """Stop distances keyed by aircraft sub-variant."""

    variants: Dict[str, float] = field(default_factory=dict)
    default: Optional[float] = None

    def __post_init__(self):
        if DEFAULT_KEY in self.variants:
            raise ValueError("'default' must be given as VariantStop.default, not as a variant key")

    def distance_for(self, variant: Union[str, int]) -> Optional[float]:
        """Distance for a sub-variant, falling back to ``default``."""
        return self.variants.get(str(variant), self.default)

    def to_json(self) -> Dict[str, float]:
        data = dict(self.variants)
        if self.default is not None:
            data[DEFAULT_KEY] = self.default
        return data


StopPositionsEntry = Union[ScalarStop, VariantStop]


def stop_entry_to_json(entry: StopPositionsEntry) -> Union[float, Dict[str, float]]:
    """Serialize an entry: bare number for scalars, object with ``default`` last for tables."""
    return entry.to_json()


def stop_entry_from_json(value: Any) -> StopPositionsEntry:
    """
    Rebuild an entry from its JSON form.

    Raises:
        ValueError: If the value is neither a number nor an object of numbers
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid stop position value: {value!r}")
    if isinstance(value, (int, float)):
        return ScalarStop(float(value))
    if isinstance(value, dict):
        variants = {}
        default = None
        for key, distance in value.items():
            if key == DEFAULT_KEY:
                default = float(distance)
            else:
                variants[str(key)] = float(distance)
        return VariantStop(variants=variants, default=default)
    raise ValueError(f"Invalid stop position value: {value!r}")


def stop_table_to_json(table: Dict[str, StopPositionsEntry]) -> Dict[str, Any]:
    """Serialize a gate stop table, emitting the ``default`` aircraft key last."""
    data = {key: stop_entry_to_json(entry) for key, entry in table.items() if key != DEFAULT_KEY}
    if DEFAULT_KEY in table:
        data[DEFAULT_KEY] = stop_entry_to_json(table[DEFAULT_KEY])
    return data


def stop_table_from_json(data: Optional[Dict[str, Any]]) -> Dict[str, StopPositionsEntry]:
    return {str(key): stop_entry_from_json(value) for key, value in (data or {}).items()}
