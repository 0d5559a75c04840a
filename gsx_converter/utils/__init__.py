"""
Utility helpers for gsx_converter.

Case-insensitive key maps and tolerant value parsing shared by the
section mapper and the override extractor.
"""

from .keymap import KeyMap
from .values import (
    parse_number,
    parse_int,
    parse_bool,
    is_true_value,
    split_list,
    parse_position,
    parse_position_3d,
    parse_waypoints,
    parse_position_list,
)

__all__ = [
    'KeyMap',
    'parse_number',
    'parse_int',
    'parse_bool',
    'is_true_value',
    'split_list',
    'parse_position',
    'parse_position_3d',
    'parse_waypoints',
    'parse_position_list',
]
