"""
Field-level merge of an override configuration into a base configuration.

The override only contributes what it explicitly carries: an unset field
(None, an empty string or list, a zero-valued position) never erases base
data. Merging the same override twice gives the same result as merging it
once.
"""

import copy
import logging
from dataclasses import fields
from typing import Any, List

from .models import Configuration, Gate, Position

logger = logging.getLogger(__name__)

# Gate fields with their own merge rule
_SPECIAL_GATE_FIELDS = {
    'gate_id',
    'position',
    'services',
    'tags',
    'allowed_aircraft',
    'aircraft_stop_positions',
    'properties',
}


def _has_value(value: Any) -> bool:
    """True when an override value is meaningful enough to replace the base value."""
    if value is None:
        return False
    if isinstance(value, (str, list, dict)):
        return len(value) > 0
    return True


def _union(target: List[str], source: List[str]) -> None:
    for item in source:
        if item not in target:
            target.append(item)


def merge_position(target: Position, source: Position) -> None:
    """
    Merge a position in place.

    Coordinates move only when the override carries real coordinates; a
    zero heading is the unset default and is ignored.
    """
    if not source.is_degenerate:
        target.lat = source.lat
        target.lon = source.lon
    if source.heading:
        target.heading = source.heading
    if source.height is not None:
        target.height = source.height


def merge_gate(target: Gate, source: Gate) -> Gate:
    """
    Merge one gate into another with the same identifier.

    Args:
        target: Gate receiving the changes (modified in place)
        source: Gate contributing the changes (left untouched)

    Returns:
        The target gate
    """
    merge_position(target.position, source.position)

    for f in fields(Gate):
        if f.name in _SPECIAL_GATE_FIELDS:
            continue
        value = getattr(source, f.name)
        if _has_value(value):
            setattr(target, f.name, copy.deepcopy(value))

    # Stop tables are replaced whole, never merged per aircraft key
    if source.aircraft_stop_positions:
        target.aircraft_stop_positions = dict(source.aircraft_stop_positions)

    for service in source.services:
        if not target.has_service(service.type):
            target.services.append(service.clone())

    _union(target.tags, source.tags)
    _union(target.allowed_aircraft, source.allowed_aircraft)
    target.properties.update(source.properties)
    return target


def merge(base: Configuration, override: Configuration) -> Configuration:
    """
    Merge an override configuration into a base configuration.

    Args:
        base: Receiving configuration, mutated and returned
        override: Configuration contributing deltas

    Returns:
        The base configuration
    """
    if override.airport and not base.airport:
        base.airport = override.airport

    added = 0
    for gate in override.gates:
        existing = base.find_gate(gate.gate_id)
        if existing is None:
            base.gates.append(copy.deepcopy(gate))
            added += 1
        else:
            merge_gate(existing, gate)

    for deice in override.deices:
        if base.find_deice(deice.id) is None:
            base.deices.append(copy.deepcopy(deice))

    for group in override.gate_groups:
        if base.find_group(group.id) is None:
            base.gate_groups.append(copy.deepcopy(group))

    base.jetway_rootfloor_heights.update(override.jetway_rootfloor_heights)
    base.metadata.update(override.metadata)

    logger.debug(f"Merged override: {len(override.gates) - added} gates updated, {added} gates added")
    return base
