"""
Canonical data model for gsx_converter.

This package contains the entities a conversion produces: the airport
Configuration, its Gates (with services, equipment positions and stop
tables), de-ice areas and gate groups, plus model validation.
"""

from .position import Position, Waypoint, WaypointPath
from .stop_positions import (
    DEFAULT_KEY,
    ScalarStop,
    VariantStop,
    StopPositionsEntry,
    stop_entry_to_json,
    stop_entry_from_json,
)
from .service import GroundService
from .gate import Gate, PushbackConfig, BaggagePositions, StairsPositions
from .deice import DeIceArea
from .gate_group import GateGroup
from .configuration import Configuration, FORMAT_VERSION
from .validation import ValidationResult, ValidationError, validate_configuration

__all__ = [
    'Position',
    'Waypoint',
    'WaypointPath',
    'DEFAULT_KEY',
    'ScalarStop',
    'VariantStop',
    'StopPositionsEntry',
    'stop_entry_to_json',
    'stop_entry_from_json',
    'GroundService',
    'Gate',
    'PushbackConfig',
    'BaggagePositions',
    'StairsPositions',
    'DeIceArea',
    'GateGroup',
    'Configuration',
    'FORMAT_VERSION',
    'ValidationResult',
    'ValidationError',
    'validate_configuration',
]
