import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .position import Position


@dataclass
class GroundService:
    """A ground-handling service attached to a gate (pushback, marshaller, catering, ...)."""

    type: str = ''
    offset: Optional[float] = None
    spawn_coords: Optional[Position] = None
    properties: Dict[str, str] = field(default_factory=dict)

    def clone(self) -> 'GroundService':
        """Independent copy, used when a global service section is referenced by several gates."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type,
            'offset': self.offset,
            'spawn_coords': self.spawn_coords.to_dict() if self.spawn_coords else None,
            'properties': dict(self.properties),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GroundService':
        offset = data.get('offset')
        return cls(
            type=data.get('type', ''),
            offset=float(offset) if offset is not None else None,
            spawn_coords=Position.from_dict(data.get('spawn_coords')),
            properties=dict(data.get('properties') or {}),
        )
