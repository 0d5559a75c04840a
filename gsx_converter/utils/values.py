"""
Tolerant value parsing for hand-edited GSX files.

Every helper returns ``None`` when the raw text cannot be understood; none of
them raise. Callers decide whether an unparsable value is dropped or kept
verbatim in a properties bag.
"""

import locale
import math
import re
import logging
from typing import List, Optional

from ..models.position import Position, Waypoint

logger = logging.getLogger(__name__)

TRUE_VALUES = {'1', 'true', 'yes', 'on'}
FALSE_VALUES = {'0', 'false', 'no', 'off'}

# Invariant culture with thousands separators: 1,234 or 1,234.5
THOUSANDS_PATTERN = re.compile(r'^[+-]?\d{1,3}(,\d{3})+(\.\d+)?$')
TUPLE_PATTERN = re.compile(r'\(\s*([^,()]+)\s*,\s*([^,()]+)\s*,\s*([^,()]+)\s*\)')


def parse_number(raw: Optional[str]) -> Optional[float]:
    """
    Parse a decimal number, invariant format first, then the current locale.

    Non-finite values (nan, inf) are treated as unparsable.

    Args:
        raw: Text to parse (surrounding whitespace and quotes are ignored)

    Returns:
        The parsed float or None
    """
    if raw is None:
        return None
    text = str(raw).strip().strip('"\'')
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        value = None
    if value is None and THOUSANDS_PATTERN.match(text):
        value = float(text.replace(',', ''))
    if value is None:
        try:
            value = locale.atof(text)
        except ValueError:
            value = None
    if value is None or not math.isfinite(value):
        logger.debug(f"Unparsable number: '{raw}'")
        return None
    return value


def parse_int(raw: Optional[str]) -> Optional[int]:
    """Parse an integer; values such as ``3.0`` are accepted, ``3.5`` is not."""
    value = parse_number(raw)
    if value is None or not value.is_integer():
        return None
    return int(value)


def is_true_value(raw: Optional[str]) -> bool:
    return raw is not None and raw.strip().lower() in TRUE_VALUES


def parse_bool(raw: Optional[str]) -> Optional[bool]:
    """
    Parse a GSX boolean.

    Accepts 1/0, true/false, yes/no, on/off in any case. Anything else is
    "not set" rather than False.
    """
    if raw is None:
        return None
    text = raw.strip().strip('"\'').lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    logger.debug(f"Unparsable boolean: '{raw}'")
    return None


def split_list(raw: Optional[str], separators: str = ',;') -> List[str]:
    """Split a delimited list, dropping empty items."""
    if not raw:
        return []
    pattern = '[' + re.escape(separators) + ']'
    return [part.strip() for part in re.split(pattern, raw) if part.strip()]


def _numbers(parts: List[str]) -> Optional[List[float]]:
    values = [parse_number(p) for p in parts]
    if any(v is None for v in values):
        return None
    return values


def parse_position(raw: Optional[str]) -> Optional[Position]:
    """
    Parse ``"lat lon heading"`` or ``"lat lon heading height"``.

    Returns:
        Position or None when fewer than three numbers are present
    """
    if not raw:
        return None
    parts = raw.split()
    if len(parts) < 3:
        return None
    values = _numbers(parts[:4])
    if values is None:
        return None
    height = values[3] if len(values) == 4 else None
    return Position(lat=values[0], lon=values[1], heading=values[2], height=height)


def parse_position_3d(raw: Optional[str]) -> Optional[Position]:
    """
    Parse a point with height, either ``(lat, lon, height)`` or ``lat lon height``.

    The heading of the returned position is left at zero.
    """
    if not raw:
        return None
    text = raw.strip()
    if text.startswith('(') and text.endswith(')'):
        parts = [p.strip() for p in text[1:-1].split(',')]
    else:
        parts = text.split()
    if len(parts) < 3:
        return None
    values = _numbers(parts[:3])
    if values is None:
        return None
    return Position(lat=values[0], lon=values[1], heading=0.0, height=values[2])


def parse_waypoints(raw: Optional[str]) -> Optional[List[Waypoint]]:
    """Parse ``[(lat, lon, height), ...]`` into waypoints; None when nothing matches."""
    if not raw:
        return None
    waypoints = []
    for match in TUPLE_PATTERN.finditer(raw):
        values = _numbers(list(match.groups()))
        if values is None:
            continue
        waypoints.append(Waypoint(lat=values[0], lon=values[1], height=values[2]))
    return waypoints or None


def parse_position_list(raw: Optional[str]) -> Optional[List[Position]]:
    """
    Parse a flat list of ``lat, lon, heading`` triples.

    ``[]`` yields an empty list, unparsable text yields None.
    """
    if raw is None:
        return None
    text = raw.strip()
    if not (text.startswith('[') and text.endswith(']')):
        return None
    inner = text[1:-1].replace('(', ' ').replace(')', ' ')
    if not inner.strip():
        return []
    parts = [p.strip() for p in inner.split(',') if p.strip()]
    if len(parts) % 3 != 0:
        return None
    values = _numbers(parts)
    if values is None:
        return None
    return [
        Position(lat=values[i], lon=values[i + 1], heading=values[i + 2])
        for i in range(0, len(values), 3)
    ]
