"""
Gate model.

A gate carries its position, attached services, tags, a per-aircraft stop
table and the typed ground-handling attributes GSX knows about. Anything the
parsers could not map to a typed field lives in ``properties`` unchanged.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

from .position import Position, WaypointPath
from .service import GroundService
from .stop_positions import StopPositionsEntry, stop_table_to_json, stop_table_from_json


def _position_or_none(data: Optional[Dict[str, Any]]) -> Optional[Position]:
    return Position.from_dict(data) if data is not None else None


class _PositionSet:
    """Mixin for small containers whose fields are all optional positions."""

    def to_dict(self) -> Dict[str, Any]:
        return {
            f.name: (getattr(self, f.name).to_dict() if getattr(self, f.name) else None)
            for f in fields(self)
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]):
        if data is None:
            return None
        return cls(**{f.name: _position_or_none(data.get(f.name)) for f in fields(cls)})

    def has_any(self) -> bool:
        return any(getattr(self, f.name) is not None for f in fields(self))


@dataclass
class BaggagePositions(_PositionSet):
    baggage_loader_front_pos: Optional[Position] = None
    baggage_loader_rear_pos: Optional[Position] = None
    baggage_loader_main_pos: Optional[Position] = None
    baggage_train_front_pos: Optional[Position] = None
    baggage_train_rear_pos: Optional[Position] = None
    baggage_train_main_pos: Optional[Position] = None


@dataclass
class StairsPositions(_PositionSet):
    stairs_front_pos: Optional[Position] = None
    stairs_middle_pos: Optional[Position] = None
    stairs_rear_pos: Optional[Position] = None


PUSHBACK_POSITION_FIELDS = (
    'pushback_left_pos',
    'pushback_right_pos',
    'pushback_left_approach_pos',
    'pushback_right_approach_pos',
    'pushback_left_approach_pos2',
    'pushback_right_approach_pos2',
    'pushback_pos',
)


@dataclass
class PushbackConfig:
    """Pushback directions, approach points, wing walkers and engine start settings."""

    pushback_type: Optional[int] = None
    pushback_labels: Optional[List[str]] = None
    snap_left_pushback_pos: Optional[bool] = None
    snap_right_pushback_pos: Optional[bool] = None
    pushback_left_pos: Optional[Position] = None
    pushback_right_pos: Optional[Position] = None
    pushback_left_approach_pos: Optional[Position] = None
    pushback_right_approach_pos: Optional[Position] = None
    pushback_left_approach_pos2: Optional[Position] = None
    pushback_right_approach_pos2: Optional[Position] = None
    pushback_pos: Optional[Position] = None
    wingwalkers_left_pushback: Optional[int] = None
    wingwalkers_right_pushback: Optional[int] = None
    wingwalkers_quick_pushback: Optional[int] = None
    start_engines_left_pushback: Optional[float] = None
    start_engines_right_pushback: Optional[float] = None
    start_engines_quick_pushback: Optional[float] = None

    def has_any(self) -> bool:
        return any(getattr(self, f.name) is not None for f in fields(self))

    def to_dict(self) -> Dict[str, Any]:
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in PUSHBACK_POSITION_FIELDS:
                data[f.name] = value.to_dict() if value else None
            elif isinstance(value, list):
                data[f.name] = list(value)
            else:
                data[f.name] = value
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['PushbackConfig']:
        if data is None:
            return None
        values = {}
        for f in fields(cls):
            value = data.get(f.name)
            if f.name in PUSHBACK_POSITION_FIELDS:
                value = _position_or_none(value)
            elif f.name.startswith('start_engines') and value is not None:
                value = float(value)
            elif f.name == 'pushback_labels' and value is not None:
                value = list(value)
            values[f.name] = value
        return cls(**values)


# Optional float fields that must survive a JSON round trip as floats
FLOAT_FIELDS = (
    'max_wingspan',
    'radius_left',
    'radius_right',
    'gate_distance_threshold',
    'walker_path_thickness',
    'passenger_path_thickness',
    'passenger_path_thickness_deboarding',
)

POSITION_FIELDS = (
    'parking_system_stop_position',
    'parking_system_object_position',
    'passenger_enter_gate_pos',
)


@dataclass
class Gate:
    """An aircraft parking position and everything GSX attaches to it."""

    gate_id: str
    position: Position = field(default_factory=Position)
    services: List[GroundService] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    allowed_aircraft: List[str] = field(default_factory=list)
    aircraft_stop_positions: Dict[str, StopPositionsEntry] = field(default_factory=dict)
    ui_name: Optional[str] = None

    gate_type: Optional[int] = None
    max_wingspan: Optional[float] = None
    radius_left: Optional[float] = None
    radius_right: Optional[float] = None
    gate_distance_threshold: Optional[float] = None
    has_jetway: Optional[bool] = None
    parking_system: Optional[str] = None
    underground_refueling: Optional[bool] = None
    no_passenger_stairs: Optional[bool] = None
    no_passenger_bus: Optional[bool] = None
    no_passenger_bus_deboarding: Optional[bool] = None
    ignore_icao_prefixes: Optional[bool] = None
    ignore_preferred_exit: Optional[bool] = None
    dont_create_jetways: Optional[bool] = None
    disable_pax_barriers: Optional[bool] = None
    disable_pax_barriers_deboarding: Optional[bool] = None
    user_customized: Optional[bool] = None
    loader_type: Optional[str] = None
    airline_codes: Optional[str] = None
    handling_texture: Optional[List[str]] = None
    catering_texture: Optional[List[str]] = None
    walker_type: Optional[str] = None
    walker_path_thickness: Optional[float] = None
    walker_loop_start: Optional[int] = None
    passenger_path_thickness: Optional[float] = None
    passenger_path_thickness_deboarding: Optional[float] = None
    pax_barriers_texture: Optional[str] = None
    pushback: Optional[int] = None

    pushback_config: Optional[PushbackConfig] = None
    parking_system_stop_position: Optional[Position] = None
    parking_system_object_position: Optional[Position] = None
    passenger_enter_gate_pos: Optional[Position] = None
    baggage_positions: Optional[BaggagePositions] = None
    stairs_positions: Optional[StairsPositions] = None
    walker_waypoints: Optional[WaypointPath] = None
    passenger_waypoints: Optional[WaypointPath] = None
    pushback_add_pos: Optional[List[Position]] = None

    properties: Dict[str, str] = field(default_factory=dict)

    def service_types(self) -> List[str]:
        return [s.type for s in self.services]

    def has_service(self, service_type: str) -> bool:
        wanted = service_type.lower()
        return any(s.type.lower() == wanted for s in self.services)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == 'aircraft_stop_positions':
                data[f.name] = stop_table_to_json(value)
            elif f.name == 'services':
                data[f.name] = [s.to_dict() for s in value]
            elif f.name == 'pushback_add_pos':
                data[f.name] = [p.to_dict() for p in value] if value is not None else None
            elif hasattr(value, 'to_dict'):
                data[f.name] = value.to_dict()
            elif isinstance(value, (list, dict)):
                data[f.name] = type(value)(value)
            else:
                data[f.name] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Gate':
        """Create instance from dictionary; unknown keys are ignored."""
        known_fields = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known_fields}

        values['position'] = Position.from_dict(values.get('position')) or Position()
        values['services'] = [GroundService.from_dict(s) for s in values.get('services') or []]
        values['tags'] = list(values.get('tags') or [])
        values['allowed_aircraft'] = list(values.get('allowed_aircraft') or [])
        values['aircraft_stop_positions'] = stop_table_from_json(values.get('aircraft_stop_positions'))
        values['properties'] = dict(values.get('properties') or {})

        for name in POSITION_FIELDS:
            values[name] = _position_or_none(values.get(name))
        for name in FLOAT_FIELDS:
            if values.get(name) is not None:
                values[name] = float(values[name])
        for name in ('handling_texture', 'catering_texture'):
            if values.get(name) is not None:
                values[name] = list(values[name])

        values['pushback_config'] = PushbackConfig.from_dict(values.get('pushback_config'))
        values['baggage_positions'] = BaggagePositions.from_dict(values.get('baggage_positions'))
        values['stairs_positions'] = StairsPositions.from_dict(values.get('stairs_positions'))
        values['walker_waypoints'] = WaypointPath.from_dict(values.get('walker_waypoints'))
        values['passenger_waypoints'] = WaypointPath.from_dict(values.get('passenger_waypoints'))
        if values.get('pushback_add_pos') is not None:
            values['pushback_add_pos'] = [Position.from_dict(p) for p in values['pushback_add_pos']]

        return cls(**values)

    def __str__(self) -> str:
        label = f" ({self.ui_name})" if self.ui_name else ''
        return f"Gate {self.gate_id}{label}"
