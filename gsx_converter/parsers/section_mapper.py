"""
Semantic mapper for the GSX section format.

Sections are classified by name (gate, service, de-ice, group, jetway height
table) and their keys are mapped onto the canonical model. The mapping is an
allow-list: a key is claimed only when its value was converted into a typed
field. Every other key, including recognized keys with unparsable values, is
kept verbatim in the entity's ``properties`` or in the configuration
metadata, so nothing in the source is lost.
"""

import re
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Set, Tuple

from ..merger import merge_gate
from ..models import (
    BaggagePositions,
    Configuration,
    DeIceArea,
    Gate,
    GateGroup,
    GroundService,
    Position,
    PushbackConfig,
    StairsPositions,
    WaypointPath,
)
from ..utils.keymap import KeyMap
from ..utils.values import (
    is_true_value,
    parse_bool,
    parse_int,
    parse_number,
    parse_position,
    parse_position_3d,
    parse_position_list,
    parse_waypoints,
    split_list,
)
from .base import ConfigParser
from .sections import Section, tokenize_sections

logger = logging.getLogger(__name__)

JETWAY_HEIGHTS_SECTION = 'jetway_rootfloor_heights'
SERVICE_SECTION_PREFIXES = ('gndservice', 'service')
SERVICE_FLAGS = ('pushback', 'marshaller', 'catering', 'baggage', 'fuel')

GATE_PATTERN = re.compile(r'^(Gate|Stand|Parking)[\s_\-:]*(.+)$', re.IGNORECASE)
DEICE_PATTERN = re.compile(r'^de[-_]?ice', re.IGNORECASE)
GATE_GROUP_PATTERN = re.compile(r'^GateGroup[\s_\-:]*(.+)$', re.IGNORECASE)
SERVICE_INDEX_PATTERN = re.compile(r'^service[_\s\-]?(\d+)$', re.IGNORECASE)
SERVICE_INDEXED_KEY_PATTERN = re.compile(r'^service[_\s\-]?(\d+)[_\s\-:](.+)$', re.IGNORECASE)

# section key -> Gate attribute
GATE_FLOAT_KEYS = {
    'maxwingspan': 'max_wingspan',
    'radiusleft': 'radius_left',
    'radiusright': 'radius_right',
    'gatedistancethreshold': 'gate_distance_threshold',
    'walkerpaththickness': 'walker_path_thickness',
    'passengerpaththickness': 'passenger_path_thickness',
    'passengerpaththickness_deboarding': 'passenger_path_thickness_deboarding',
}
GATE_INT_KEYS = {
    'walkerloopstart': 'walker_loop_start',
    'pushback': 'pushback',
}
GATE_BOOL_KEYS = {
    'hasjetway': 'has_jetway',
    'undergroundrefueling': 'underground_refueling',
    'nopassengerstairs': 'no_passenger_stairs',
    'nopassengerbus': 'no_passenger_bus',
    'nopassengerbus_deboarding': 'no_passenger_bus_deboarding',
    'ignoreicaoprefixes': 'ignore_icao_prefixes',
    'ignorepreferredexit': 'ignore_preferred_exit',
    'dontcreatejetways': 'dont_create_jetways',
    'disablepaxbarriers': 'disable_pax_barriers',
    'disablepaxbarriers_deboarding': 'disable_pax_barriers_deboarding',
    'usercustomized': 'user_customized',
}
GATE_TEXT_KEYS = {
    'uiname': 'ui_name',
    'parkingsystem': 'parking_system',
    'loadertype': 'loader_type',
    'airlinecodes': 'airline_codes',
    'walkertype': 'walker_type',
    'paxbarrierstexture': 'pax_barriers_texture',
}
GATE_LIST_KEYS = {
    'handlingtexture': 'handling_texture',
    'cateringtexture': 'catering_texture',
}
GATE_POSITION_KEYS = {
    'parkingsystem_stopposition': 'parking_system_stop_position',
    'parkingsystem_objectposition': 'parking_system_object_position',
}

PUSHBACK_INT_KEYS = {
    'pushbacktype': 'pushback_type',
    'wingwalkersleftpushback': 'wingwalkers_left_pushback',
    'wingwalkersrightpushback': 'wingwalkers_right_pushback',
    'wingwalkersquickpushback': 'wingwalkers_quick_pushback',
}
PUSHBACK_FLOAT_KEYS = {
    'startenginesleftpushback': 'start_engines_left_pushback',
    'startenginesrightpushback': 'start_engines_right_pushback',
    'startenginesquickpushback': 'start_engines_quick_pushback',
}
PUSHBACK_BOOL_KEYS = {
    'snapleftpushbackpos': 'snap_left_pushback_pos',
    'snaprightpushbackpos': 'snap_right_pushback_pos',
}
PUSHBACK_POSITION_KEYS = {
    'pushbackleftpos': 'pushback_left_pos',
    'pushbackrightpos': 'pushback_right_pos',
    'pushbackleftapproachpos': 'pushback_left_approach_pos',
    'pushbackrightapproachpos': 'pushback_right_approach_pos',
    'pushbackleftapproachpos2': 'pushback_left_approach_pos2',
    'pushbackrightapproachpos2': 'pushback_right_approach_pos2',
    'pushback_pos': 'pushback_pos',
}

BAGGAGE_POSITION_KEYS = {
    'baggage_loader_front_pos': 'baggage_loader_front_pos',
    'baggage_loader_rear_pos': 'baggage_loader_rear_pos',
    'baggage_loader_main_pos': 'baggage_loader_main_pos',
    'baggage_train_front_pos': 'baggage_train_front_pos',
    'baggage_train_rear_pos': 'baggage_train_rear_pos',
    'baggage_train_main_pos': 'baggage_train_main_pos',
}
STAIRS_POSITION_KEYS = {
    'stairs_front_pos': 'stairs_front_pos',
    'stairs_middle_pos': 'stairs_middle_pos',
    'stairs_rear_pos': 'stairs_rear_pos',
}

WAYPOINT_KEYS = {
    'walkerwaypoints': ('walker_waypoints', 'walker_path_thickness'),
    'passengerwaypoints': ('passenger_waypoints', 'passenger_path_thickness'),
}


class SectionKind(Enum):
    """What a section describes, decided from its name."""

    GATE = 'gate'
    SERVICE = 'service'
    DEICE = 'deice'
    GATE_GROUP = 'gate_group'
    JETWAY_HEIGHTS = 'jetway_heights'
    UNRECOGNIZED = 'unrecognized'


def classify_section(name: str) -> Tuple[SectionKind, Optional[str]]:
    """
    Classify a section by its name.

    Args:
        name: Section name without brackets

    Returns:
        Tuple of (kind, entity id). The id is the gate or group identifier
        extracted from the name, the full name for services and de-ice
        areas, and None otherwise.
    """
    name = name.strip()
    if name.lower() == JETWAY_HEIGHTS_SECTION:
        return SectionKind.JETWAY_HEIGHTS, None
    if DEICE_PATTERN.match(name):
        return SectionKind.DEICE, name
    match = GATE_GROUP_PATTERN.match(name)
    if match:
        return SectionKind.GATE_GROUP, match.group(1).strip()
    if name.lower().startswith(SERVICE_SECTION_PREFIXES):
        return SectionKind.SERVICE, name
    match = GATE_PATTERN.match(name)
    if match:
        return SectionKind.GATE, match.group(2).strip()
    return SectionKind.UNRECOGNIZED, None


class _KeyReader:
    """
    Reads typed values out of a section and records which keys were claimed.

    Empty values count as absent. A key is claimed only when its value was
    successfully converted.
    """

    def __init__(self, keys: KeyMap):
        self.keys = keys
        self.claimed: Set[str] = set()

    def claim(self, key: str) -> None:
        self.claimed.add(key.casefold())

    def is_claimed(self, key: str) -> bool:
        return key.casefold() in self.claimed

    def raw(self, key: str) -> Optional[str]:
        value = self.keys.get(key)
        if value is None or not value.strip():
            return None
        return value.strip()

    def _convert(self, key: str, converter: Callable):
        raw = self.raw(key)
        if raw is None:
            return None
        value = converter(raw)
        if value is None:
            logger.debug(f"Keeping unparsable value for '{key}': '{raw}'")
        else:
            self.claim(key)
        return value

    def text(self, key: str) -> Optional[str]:
        return self._convert(key, lambda raw: raw)

    def number(self, key: str) -> Optional[float]:
        return self._convert(key, parse_number)

    def integer(self, key: str) -> Optional[int]:
        return self._convert(key, parse_int)

    def boolean(self, key: str) -> Optional[bool]:
        return self._convert(key, parse_bool)

    def position(self, key: str) -> Optional[Position]:
        return self._convert(key, parse_position)

    def position_3d(self, key: str) -> Optional[Position]:
        return self._convert(key, parse_position_3d)

    def position_list(self, key: str) -> Optional[List[Position]]:
        return self._convert(key, parse_position_list)

    def waypoints(self, key: str):
        return self._convert(key, parse_waypoints)

    def list(self, key: str, separators: str = ',;') -> Optional[List[str]]:
        return self._convert(key, lambda raw: split_list(raw, separators) or None)

    def unclaimed(self) -> Dict[str, str]:
        """Keys not converted into a typed field, verbatim and in file order."""
        return {k: v for k, v in self.keys.items() if not self.is_claimed(k)}


def _apply(reader: _KeyReader, target, mapping: Dict[str, str], read: Callable) -> None:
    """Set target attributes from a key mapping."""
    for key, attribute in mapping.items():
        value = read(key)
        if value is not None:
            setattr(target, attribute, value)


class SectionConfigParser(ConfigParser):
    """
    Parser for the GSX section format (``.ini`` / ``.base``).

    Example:
        config = SectionConfigParser().parse('''
            [Gate_A1]
            lat = 52.1
            lon = 4.8
            heading = 90
            hasjetway = 1
        ''')
    """

    def get_supported_extensions(self) -> List[str]:
        return ['.ini', '.base']

    def parse(self, text: str, airport: str = '') -> Configuration:
        config = Configuration(airport=airport)
        sections = tokenize_sections(text)

        # Global services first so indexed references resolve regardless of order
        global_services: Dict[str, GroundService] = {}
        for section in sections:
            kind, entity_id = classify_section(section.name)
            if kind == SectionKind.SERVICE:
                service = self.parse_service_section(entity_id, section.keys)
                global_services[entity_id.casefold()] = service
                config.metadata[f"service.{entity_id}.type"] = service.type

        for section in sections:
            kind, entity_id = classify_section(section.name)
            if kind == SectionKind.SERVICE:
                continue
            if kind == SectionKind.JETWAY_HEIGHTS:
                self.parse_jetway_heights(section, config)
            elif kind == SectionKind.DEICE:
                config.deices.append(self.parse_deice_section(entity_id, section.keys))
            elif kind == SectionKind.GATE_GROUP:
                config.gate_groups.append(self.parse_gate_group_section(entity_id, section.keys))
            elif kind == SectionKind.GATE:
                self._add_gate(config, self.parse_gate_section(entity_id, section.keys, global_services))
            else:
                for key, value in section.keys.items():
                    config.metadata[f"{section.name}.{key}"] = value

        logger.debug(f"Parsed {len(config.gates)} gates, {len(config.deices)} de-ice areas, "
                     f"{len(config.gate_groups)} groups from section text")
        return config

    def _add_gate(self, config: Configuration, gate: Gate) -> None:
        existing = config.find_gate(gate.gate_id)
        if existing is None:
            config.gates.append(gate)
            return
        logger.warning(f"Duplicate gate '{gate.gate_id}', merging into the first definition")
        merge_gate(existing, gate)

    def parse_jetway_heights(self, section: Section, config: Configuration) -> None:
        """Numeric entries become heights; anything else is kept as metadata."""
        for key, value in section.keys.items():
            height = parse_number(value)
            if height is not None:
                config.jetway_rootfloor_heights[key] = height
            else:
                config.metadata[f"{JETWAY_HEIGHTS_SECTION}.{key}"] = value

    def parse_service_section(self, service_id: str, keys: KeyMap) -> GroundService:
        """
        Parse a global service definition (``[GndService_Pushback]``).

        The type comes from a ``type`` key or is inferred from the section name.
        """
        reader = _KeyReader(keys)
        service = GroundService()
        service_type = reader.text('type')
        if service_type:
            service.type = service_type
        elif 'push' in service_id.lower():
            service.type = 'pushback'
        elif 'marshall' in service_id.lower() or 'gear' in service_id.lower():
            service.type = 'marshaller'
        else:
            service.type = service_id
        self._read_service_fields(reader, service, lambda key: key)
        service.properties.update(reader.unclaimed())
        return service

    def _read_service_fields(self, reader: _KeyReader, service: GroundService,
                             key_for: Callable[[str], Optional[str]]) -> None:
        """Offset and spawn coordinates, shared by every way a service can be declared."""
        def number(name: str) -> Optional[float]:
            key = key_for(name)
            return reader.number(key) if key is not None else None

        for key in ('offset', 'offset_meters'):
            offset = number(key)
            if offset is not None:
                service.offset = offset

        spawn = Position()
        has_spawn = False
        for key, attribute in (('spawn_lat', 'lat'), ('spawn_lon', 'lon'), ('spawn_heading', 'heading')):
            value = number(key)
            if value is not None:
                setattr(spawn, attribute, value)
                has_spawn = True
        if has_spawn:
            service.spawn_coords = spawn

    def parse_deice_section(self, deice_id: str, keys: KeyMap) -> DeIceArea:
        reader = _KeyReader(keys)
        deice = DeIceArea(id=deice_id)
        deice.display_name = reader.text('uiname')
        deice.type = reader.text('type')
        deice.is_deice_area = reader.boolean('is_deicearea')
        deice.position = reader.position('this_parking_pos')
        deice.radius = reader.number('radius')
        deice.parking_system = reader.text('parkingsystem')
        deice.parking_system_stop_position = reader.position('parkingsystem_stopposition')
        deice.parking_system_object_position = reader.position('parkingsystem_objectposition')
        deice.user_customized = reader.boolean('usercustomized')
        deice.properties = reader.unclaimed()
        return deice

    def parse_gate_group_section(self, group_id: str, keys: KeyMap) -> GateGroup:
        reader = _KeyReader(keys)
        group = GateGroup(id=group_id)
        for member in reader.list('members') or []:
            group.add_member(member)
        group.properties = reader.unclaimed()
        return group

    def parse_gate_section(self, gate_id: str, keys: KeyMap,
                           global_services: Optional[Dict[str, GroundService]] = None) -> Gate:
        """
        Parse one gate section.

        Args:
            gate_id: Identifier extracted from the section name
            keys: Section keys
            global_services: Parsed global service sections keyed by folded name

        Returns:
            Gate with every unclaimed key preserved in ``properties``
        """
        reader = _KeyReader(keys)
        gate = Gate(gate_id=gate_id)

        self._read_gate_position(reader, gate)

        gate.tags.extend(reader.list('tags') or [])
        category = reader.text('category')
        if category:
            gate.tags.append(category)
        gate_type = reader.text('type')
        if gate_type:
            gate.tags.append(f"type_{gate_type}")
            gate.gate_type = parse_int(gate_type)
        gate.allowed_aircraft.extend(reader.list('allowed_aircraft') or [])

        _apply(reader, gate, GATE_FLOAT_KEYS, reader.number)
        _apply(reader, gate, GATE_INT_KEYS, reader.integer)
        _apply(reader, gate, GATE_BOOL_KEYS, reader.boolean)
        _apply(reader, gate, GATE_TEXT_KEYS, reader.text)
        _apply(reader, gate, GATE_LIST_KEYS, reader.list)
        _apply(reader, gate, GATE_POSITION_KEYS, reader.position)
        gate.passenger_enter_gate_pos = reader.position_3d('passengerentergatepos')
        gate.pushback_add_pos = reader.position_list('pushbackaddpos')

        pushback = PushbackConfig()
        _apply(reader, pushback, PUSHBACK_INT_KEYS, reader.integer)
        _apply(reader, pushback, PUSHBACK_FLOAT_KEYS, reader.number)
        _apply(reader, pushback, PUSHBACK_BOOL_KEYS, reader.boolean)
        _apply(reader, pushback, PUSHBACK_POSITION_KEYS, reader.position)
        pushback.pushback_labels = reader.list('pushbacklabels', separators='|') or None
        gate.pushback_config = pushback if pushback.has_any() else None

        baggage = BaggagePositions()
        _apply(reader, baggage, BAGGAGE_POSITION_KEYS, reader.position)
        gate.baggage_positions = baggage if baggage.has_any() else None
        stairs = StairsPositions()
        _apply(reader, stairs, STAIRS_POSITION_KEYS, reader.position)
        gate.stairs_positions = stairs if stairs.has_any() else None

        for key, (attribute, thickness_attribute) in WAYPOINT_KEYS.items():
            waypoints = reader.waypoints(key)
            if waypoints:
                setattr(gate, attribute, WaypointPath(waypoints=waypoints,
                                                      thickness=getattr(gate, thickness_attribute)))

        gate.services = (self._indexed_services(reader, global_services or {})
                         + self._inline_services(reader)
                         + self._flag_services(reader))

        gate.properties = reader.unclaimed()
        return gate

    def _read_gate_position(self, reader: _KeyReader, gate: Gate) -> None:
        position = reader.position('this_parking_pos')
        if position is not None:
            gate.position = position
            return

        lat = reader.number('lat')
        lon = reader.number('lon')
        heading = reader.number('heading')
        if lat is None and lon is None:
            lat = reader.number('spawn_lat')
            if lat is None:
                lat = reader.number('spawn_latitude')
            lon = reader.number('spawn_lon')
            if lon is None:
                lon = reader.number('spawn_longitude')
            if heading is None:
                heading = reader.number('spawn_heading')
        gate.position = Position(lat=lat or 0.0, lon=lon or 0.0, heading=heading or 0.0)

    def _indexed_services(self, reader: _KeyReader,
                          global_services: Dict[str, GroundService]) -> List[GroundService]:
        """``service_1 = GndService_Pushback`` plus ``service_1_offset = 5`` style overrides."""
        references: Dict[int, Tuple[str, str]] = {}
        overrides: Dict[int, List[Tuple[str, str]]] = {}
        for key, value in reader.keys.items():
            match = SERVICE_INDEX_PATTERN.match(key)
            if match:
                if value.strip():
                    references[int(match.group(1))] = (key, value.strip())
                continue
            match = SERVICE_INDEXED_KEY_PATTERN.match(key)
            if match:
                overrides.setdefault(int(match.group(1)), []).append((key, match.group(2).strip()))

        services = []
        for index in sorted(references):
            key, reference = references[index]
            reader.claim(key)
            template = global_services.get(reference.casefold())
            if template is not None:
                service = template.clone()
            else:
                if reference:
                    logger.debug(f"Service reference '{reference}' has no section, using it as the type")
                service = GroundService(type=reference)

            sub_keys = {sub.casefold(): full for full, sub in overrides.get(index, [])}
            self._read_service_fields(reader, service, sub_keys.get)
            for full, sub in overrides.get(index, []):
                if not reader.is_claimed(full):
                    service.properties[sub] = reader.keys[full]
                    reader.claim(full)
            services.append(service)
        return services

    def _inline_services(self, reader: _KeyReader) -> List[GroundService]:
        """A single ``serviceType`` key with its offset and spawn keys on the gate itself."""
        service_type = reader.text('serviceType')
        if not service_type:
            return []
        service = GroundService(type=service_type)
        self._read_service_fields(reader, service, lambda key: key)
        for key, value in reader.keys.items():
            if key.lower().startswith(('service.', 'svc_')):
                service.properties[key] = value
                reader.claim(key)
        return [service]

    def _flag_services(self, reader: _KeyReader) -> List[GroundService]:
        """Services implied by truthy flags (``catering = 1``) and ``*pushback*offset*`` keys."""
        services = []
        for flag in SERVICE_FLAGS:
            raw = reader.raw(flag)
            if is_true_value(raw):
                services.append(GroundService(type=flag))
                reader.claim(flag)

        for key, value in reader.keys.items():
            lowered = key.lower()
            if reader.is_claimed(key) or 'pushback' not in lowered or 'offset' not in lowered:
                continue
            offset = parse_number(value)
            if offset is None:
                continue
            services.append(GroundService(type='pushback', offset=offset))
            reader.claim(key)
        return services
