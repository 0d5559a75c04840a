"""Tests for the section format semantic mapper."""

import locale

import pytest

from gsx_converter.models import Position
from gsx_converter.parsers.section_mapper import SectionConfigParser, SectionKind, classify_section


@pytest.fixture
def parser():
    return SectionConfigParser()


class TestClassifySection:
    """Tests for classify_section."""

    @pytest.mark.parametrize('name,kind,entity_id', [
        ('Gate_A1', SectionKind.GATE, 'A1'),
        ('gate A1', SectionKind.GATE, 'A1'),
        ('Stand-12', SectionKind.GATE, '12'),
        ('PARKING:B3', SectionKind.GATE, 'B3'),
        ('GateGroup_Terminal1', SectionKind.GATE_GROUP, 'Terminal1'),
        ('GndService_Pushback', SectionKind.SERVICE, 'GndService_Pushback'),
        ('Service_Catering', SectionKind.SERVICE, 'Service_Catering'),
        ('DeIce_01', SectionKind.DEICE, 'DeIce_01'),
        ('de-ice pad', SectionKind.DEICE, 'de-ice pad'),
        ('Jetway_RootFloor_Heights', SectionKind.JETWAY_HEIGHTS, None),
        ('Airport', SectionKind.UNRECOGNIZED, None),
        ('', SectionKind.UNRECOGNIZED, None),
    ])
    def test_classification(self, name, kind, entity_id):
        assert classify_section(name) == (kind, entity_id)


class TestSectionConfigParser:
    """Tests for SectionConfigParser."""

    def test_supported_extensions(self, parser):
        assert parser.get_supported_extensions() == ['.ini', '.base']

    def test_simple_gate(self, parser):
        """A base section with discrete position keys and a jetway flag."""
        config = parser.parse("[Gate_A1]\nlat=52.1\nlon=4.8\nheading=90\nhasjetway=1\n")

        assert len(config.gates) == 1
        gate = config.gates[0]
        assert gate.gate_id == 'A1'
        assert gate.position == Position(lat=52.1, lon=4.8, heading=90.0)
        assert gate.has_jetway is True
        assert gate.properties == {}

    def test_combined_position_wins(self, parser):
        config = parser.parse("[Gate_A1]\nthis_parking_pos = 1.5 2.5 180 3\nlat = 9\nlon = 9\n")
        gate = config.gates[0]

        assert gate.position == Position(lat=1.5, lon=2.5, heading=180.0, height=3.0)
        # the discrete keys were not used and stay as properties
        assert gate.properties == {'lat': '9', 'lon': '9'}

    def test_spawn_position_fallback(self, parser):
        config = parser.parse("[Gate_A1]\nspawn_latitude = 10\nspawn_lon = 20\nspawn_heading = 45\n")

        assert config.gates[0].position == Position(lat=10.0, lon=20.0, heading=45.0)

    def test_boolean_spellings(self, parser):
        text = "[Gate_A1]\nhasjetway = yes\nnopassengerbus = OFF\nundergroundrefueling = maybe\n"
        gate = parser.parse(text).gates[0]

        assert gate.has_jetway is True
        assert gate.no_passenger_bus is False
        assert gate.underground_refueling is None
        assert gate.properties == {'undergroundrefueling': 'maybe'}

    def test_unparsable_number_is_preserved(self, parser):
        gate = parser.parse("[Gate_A1]\nmaxwingspan = wide\n").gates[0]

        assert gate.max_wingspan is None
        assert gate.properties['maxwingspan'] == 'wide'

    def test_non_finite_number_is_preserved(self, parser):
        gate = parser.parse("[Gate_A1]\nlat = inf\nlon = 4.8\nmaxwingspan = nan\n").gates[0]

        assert gate.max_wingspan is None
        assert gate.position == Position(0.0, 4.8, 0.0)
        assert gate.properties == {'lat': 'inf', 'maxwingspan': 'nan'}

    def test_decimal_comma_locale(self, parser, monkeypatch):
        conv = dict(locale.localeconv())
        conv.update(decimal_point=',', thousands_sep='.')
        monkeypatch.setattr(locale, 'localeconv', lambda: conv)

        gate = parser.parse("[Gate_A1]\nlat = 52,1\nlon = 4,8\nheading = 90\n").gates[0]

        assert gate.position == Position(52.1, 4.8, 90.0)
        assert gate.properties == {}

    def test_thousands_separator(self, parser):
        gate = parser.parse("[Gate_A1]\ngatedistancethreshold = 1,250.5\n").gates[0]

        assert gate.gate_distance_threshold == 1250.5

    def test_type_and_tags(self, parser):
        gate = parser.parse("[Gate_A1]\ntags = remote; cargo\ncategory = heavy\ntype = 3\n").gates[0]

        assert gate.tags == ['remote', 'cargo', 'heavy', 'type_3']
        assert gate.gate_type == 3

    def test_indexed_service_reference(self, parser):
        text = """
        [Gate_A1]
        service_1 = GndService_Pushback
        service_1_offset = 8
        service_1_color = yellow

        [GndService_Pushback]
        offset = 5
        spawn_lat = 52.2
        spawn_lon = 4.7
        """
        config = parser.parse(text)
        gate = config.gates[0]

        assert len(gate.services) == 1
        service = gate.services[0]
        assert service.type == 'pushback'
        assert service.offset == 8.0
        assert service.spawn_coords == Position(lat=52.2, lon=4.7, heading=0.0)
        assert service.properties == {'color': 'yellow'}
        assert gate.properties == {}
        assert config.metadata['service.GndService_Pushback.type'] == 'pushback'

    def test_indexed_service_is_cloned_per_gate(self, parser):
        text = """
        [GndService_Pushback]
        offset = 5
        [Gate_A1]
        service_1 = GndService_Pushback
        service_1_offset = 8
        [Gate_A2]
        service_1 = GndService_Pushback
        """
        config = parser.parse(text)

        assert config.gates[0].services[0].offset == 8.0
        assert config.gates[1].services[0].offset == 5.0
        assert config.gates[0].services[0] is not config.gates[1].services[0]

    def test_unknown_service_reference_becomes_type(self, parser):
        gate = parser.parse("[Gate_A1]\nservice_2 = fuel_truck\n").gates[0]

        assert gate.service_types() == ['fuel_truck']

    def test_orphan_indexed_override_is_preserved(self, parser):
        gate = parser.parse("[Gate_A1]\nservice_3_offset = 4\n").gates[0]

        assert gate.services == []
        assert gate.properties == {'service_3_offset': '4'}

    def test_inline_service(self, parser):
        text = "[Gate_A1]\nserviceType = marshaller\noffset_meters = 12\nsvc_color = green\n"
        gate = parser.parse(text).gates[0]

        assert len(gate.services) == 1
        assert gate.services[0].type == 'marshaller'
        assert gate.services[0].offset == 12.0
        assert gate.services[0].properties == {'svc_color': 'green'}
        assert gate.properties == {}

    def test_flag_services(self, parser):
        gate = parser.parse("[Gate_A1]\ncatering = 1\nfuel = true\nbaggage = 0\n").gates[0]

        assert gate.service_types() == ['catering', 'fuel']
        assert gate.properties == {'baggage': '0'}

    def test_services_concatenate_in_order(self, parser):
        text = """
        [Gate_A1]
        fuel = 1
        serviceType = catering
        service_1 = GndService_Pushback
        rear_pushback_offset = 3
        """
        gate = parser.parse(text).gates[0]

        assert gate.service_types() == ['GndService_Pushback', 'catering', 'fuel', 'pushback']
        assert gate.services[-1].offset == 3.0

    def test_pushback_flag_sets_mode_and_service(self, parser):
        gate = parser.parse("[Gate_A1]\npushback = 2\n").gates[0]

        assert gate.pushback == 2
        assert gate.service_types() == []

        gate = parser.parse("[Gate_A1]\npushback = 1\n").gates[0]
        assert gate.pushback == 1
        assert gate.service_types() == ['pushback']

    def test_pushback_configuration(self, parser):
        text = """
        [Gate_A1]
        pushbacktype = 2
        pushbacklabels = Left|Right|Straight
        snapleftpushbackpos = 1
        pushbackleftpos = 52.0 4.7 180
        wingwalkersleftpushback = 2
        startenginesquickpushback = 0.5
        """
        config = parser.parse(text).gates[0].pushback_config

        assert config.pushback_type == 2
        assert config.pushback_labels == ['Left', 'Right', 'Straight']
        assert config.snap_left_pushback_pos is True
        assert config.pushback_left_pos == Position(lat=52.0, lon=4.7, heading=180.0)
        assert config.wingwalkers_left_pushback == 2
        assert config.start_engines_quick_pushback == 0.5

    def test_no_pushback_configuration_without_keys(self, parser):
        gate = parser.parse("[Gate_A1]\nlat = 1\nlon = 2\n").gates[0]

        assert gate.pushback_config is None
        assert gate.baggage_positions is None
        assert gate.stairs_positions is None

    def test_equipment_positions(self, parser):
        text = """
        [Gate_A1]
        baggage_loader_front_pos = 1 2 3
        stairs_rear_pos = 4 5 6
        parkingsystem_stopposition = 7 8 9 1.5
        passengerentergatepos = (10, 11, 2.5)
        pushbackaddpos = [(1, 2, 3), (4, 5, 6)]
        """
        gate = parser.parse(text).gates[0]

        assert gate.baggage_positions.baggage_loader_front_pos == Position(1.0, 2.0, 3.0)
        assert gate.stairs_positions.stairs_rear_pos == Position(4.0, 5.0, 6.0)
        assert gate.parking_system_stop_position == Position(7.0, 8.0, 9.0, 1.5)
        assert gate.passenger_enter_gate_pos == Position(10.0, 11.0, 0.0, 2.5)
        assert gate.pushback_add_pos == [Position(1.0, 2.0, 3.0), Position(4.0, 5.0, 6.0)]

    def test_waypoints_take_path_thickness(self, parser):
        text = """
        [Gate_A1]
        passengerpaththickness = 2
        passengerwaypoints = [(52.1, 4.8, 0.0), (52.2, 4.9, 1.0)]
        """
        path = parser.parse(text).gates[0].passenger_waypoints

        assert path.thickness == 2.0
        assert [(w.lat, w.lon, w.height) for w in path.waypoints] == [(52.1, 4.8, 0.0), (52.2, 4.9, 1.0)]

    def test_texture_lists(self, parser):
        gate = parser.parse("[Gate_A1]\nhandlingtexture = KLM, DLH\n").gates[0]

        assert gate.handling_texture == ['KLM', 'DLH']

    def test_duplicate_gate_sections_merge(self, parser):
        text = """
        [Gate_A1]
        lat = 52.1
        lon = 4.8
        hasjetway = 1
        [gate a1]
        maxwingspan = 36
        note = second
        """
        config = parser.parse(text)

        assert len(config.gates) == 1
        gate = config.gates[0]
        assert gate.position.lat == 52.1
        assert gate.has_jetway is True
        assert gate.max_wingspan == 36.0
        assert gate.properties == {'note': 'second'}

    def test_deice_section(self, parser):
        text = """
        [DeIce_01]
        uiname = Pad 1
        this_parking_pos = 52.31 4.76 180
        radius = 45
        is_deicearea = 1
        pad_color = orange
        """
        deice = parser.parse(text).deices[0]

        assert deice.id == 'DeIce_01'
        assert deice.display_name == 'Pad 1'
        assert deice.position == Position(52.31, 4.76, 180.0)
        assert deice.radius == 45.0
        assert deice.is_deice_area is True
        assert deice.properties == {'pad_color': 'orange'}

    def test_gate_group_section(self, parser):
        group = parser.parse("[GateGroup_T1]\nmembers = A1, A2; A1\ncolor = blue\n").gate_groups[0]

        assert group.id == 'T1'
        assert group.members == ['A1', 'A2']
        assert group.properties == {'color': 'blue'}

    def test_jetway_heights(self, parser):
        config = parser.parse("[jetway_rootfloor_heights]\njw_a = 3.5\njw_b = tall\n")

        assert config.jetway_rootfloor_heights == {'jw_a': 3.5}
        assert config.metadata == {'jetway_rootfloor_heights.jw_b': 'tall'}

    def test_unrecognized_sections_become_metadata(self, parser):
        config = parser.parse("version = 3\n[Airport]\nicao = KTST\n")

        assert config.metadata == {'.version': '3', 'Airport.icao': 'KTST'}

    def test_parse_file_uses_stem_as_airport(self, parser, test_assets_dir):
        config = parser.parse_file(test_assets_dir / 'KTST.ini')

        assert config.airport == 'KTST'


class TestSampleProfile:
    """Tests against the KTST.ini asset."""

    def test_counts(self, parser, section_text):
        config = parser.parse(section_text)

        assert [g.gate_id for g in config.gates] == ['A1', 'A2']
        assert [d.id for d in config.deices] == ['DeIce_01']
        assert [g.id for g in config.gate_groups] == ['Terminal1']
        assert config.jetway_rootfloor_heights == {'jw_a320': 3.5, 'jw_b747': 5.25}

    def test_metadata(self, parser, section_text):
        metadata = parser.parse(section_text).metadata

        assert metadata['.airport_name'] == 'Test Field'
        assert metadata['Airport.icao'] == 'KTST'
        assert metadata['jetway_rootfloor_heights.jw_custom'] == 'tall'
        assert metadata['service.Service_Catering.type'] == 'catering'

    def test_gate_a1(self, parser, section_text):
        gate = parser.parse(section_text).gates[0]

        assert gate.position == Position(52.1, 4.8, 90.0)
        assert gate.has_jetway is True
        assert gate.max_wingspan == 36.0
        assert gate.service_types() == ['pushback', 'pushback']
        assert gate.services[0].offset == 8.0
        assert gate.properties == {'catering': '0', 'custom_light': 'red'}

    def test_stand_a2(self, parser, section_text):
        gate = parser.parse(section_text).gates[1]

        assert gate.position == Position(52.11, 4.81, 270.0, 1.5)
        assert gate.tags == ['remote', 'cargo', 'type_3']
        assert gate.radius_left is None
        assert gate.walker_waypoints.thickness == 1.2
        assert gate.pushback_config.pushback_labels == ['Left', 'Right']
        assert gate.properties == {'radiusleft': 'wide'}
