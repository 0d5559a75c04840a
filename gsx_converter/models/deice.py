from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .position import Position


@dataclass
class DeIceArea:
    """
    A de-icing zone.

    De-ice areas are top-level entities, independent of any gate. ``id`` is
    the section name the area was declared under (e.g. ``DeIce_01``).
    """

    id: str
    display_name: Optional[str] = None
    type: Optional[str] = None
    is_deice_area: Optional[bool] = None
    position: Optional[Position] = None
    radius: Optional[float] = None
    parking_system: Optional[str] = None
    parking_system_stop_position: Optional[Position] = None
    parking_system_object_position: Optional[Position] = None
    user_customized: Optional[bool] = None
    properties: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'display_name': self.display_name,
            'type': self.type,
            'is_deice_area': self.is_deice_area,
            'position': self.position.to_dict() if self.position else None,
            'radius': self.radius,
            'parking_system': self.parking_system,
            'parking_system_stop_position': (
                self.parking_system_stop_position.to_dict() if self.parking_system_stop_position else None
            ),
            'parking_system_object_position': (
                self.parking_system_object_position.to_dict() if self.parking_system_object_position else None
            ),
            'user_customized': self.user_customized,
            'properties': dict(self.properties),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DeIceArea':
        radius = data.get('radius')
        return cls(
            id=data['id'],
            display_name=data.get('display_name'),
            type=data.get('type'),
            is_deice_area=data.get('is_deice_area'),
            position=Position.from_dict(data.get('position')),
            radius=float(radius) if radius is not None else None,
            parking_system=data.get('parking_system'),
            parking_system_stop_position=Position.from_dict(data.get('parking_system_stop_position')),
            parking_system_object_position=Position.from_dict(data.get('parking_system_object_position')),
            user_customized=data.get('user_customized'),
            properties=dict(data.get('properties') or {}),
        )
