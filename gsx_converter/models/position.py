from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Position:
    """
    A geographic position with heading.

    Coordinates are decimal degrees, heading is degrees true. ``height`` is
    only present for positions that carry a vertical component (parking
    system objects, passenger gate entry points).
    """

    lat: float = 0.0
    lon: float = 0.0
    heading: float = 0.0
    height: Optional[float] = None

    @property
    def is_degenerate(self) -> bool:
        """True when the coordinates are the zero default and carry no information."""
        return self.lat == 0 and self.lon == 0

    def to_dict(self) -> Dict[str, Any]:
        data = {'lat': self.lat, 'lon': self.lon, 'heading': self.heading}
        if self.height is not None:
            data['height'] = self.height
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['Position']:
        if data is None:
            return None
        height = data.get('height')
        return cls(
            lat=float(data.get('lat', 0.0)),
            lon=float(data.get('lon', 0.0)),
            heading=float(data.get('heading', 0.0)),
            height=float(height) if height is not None else None,
        )


@dataclass
class Waypoint:
    """A single point of a walker or passenger path."""

    lat: float = 0.0
    lon: float = 0.0
    height: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {'lat': self.lat, 'lon': self.lon, 'height': self.height}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Waypoint':
        return cls(
            lat=float(data.get('lat', 0.0)),
            lon=float(data.get('lon', 0.0)),
            height=float(data.get('height', 0.0)),
        )


@dataclass
class WaypointPath:
    """Ordered waypoints plus the rendered path thickness."""

    waypoints: List[Waypoint] = field(default_factory=list)
    thickness: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'waypoints': [w.to_dict() for w in self.waypoints],
            'thickness': self.thickness,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['WaypointPath']:
        if data is None:
            return None
        thickness = data.get('thickness')
        return cls(
            waypoints=[Waypoint.from_dict(w) for w in data.get('waypoints') or []],
            thickness=float(thickness) if thickness is not None else None,
        )
