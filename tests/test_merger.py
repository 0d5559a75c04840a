"""Tests for the override merge."""

import copy

from gsx_converter.merger import merge, merge_gate
from gsx_converter.models import (
    Configuration,
    DeIceArea,
    Gate,
    GateGroup,
    GroundService,
    Position,
    ScalarStop,
    VariantStop,
)
from gsx_converter.parsers import OverrideConfigParser, SectionConfigParser
from gsx_converter.serializer import to_json


class TestMergeGate:
    """Field-level precedence for gates with the same identifier."""

    def test_override_value_wins(self, base_config):
        override = Configuration(gates=[Gate(gate_id='a1', max_wingspan=52.0, ui_name='Gate One')])

        gate = merge(base_config, override).gates[0]

        assert gate.max_wingspan == 52.0
        assert gate.ui_name == 'Gate One'

    def test_unset_override_keeps_base(self, base_config):
        override = Configuration(gates=[Gate(gate_id='A1', ui_name='')])

        gate = merge(base_config, override).gates[0]

        assert gate.max_wingspan == 36.0
        assert gate.has_jetway is True
        assert gate.ui_name == 'Gate A1'
        assert gate.position == Position(52.1, 4.8, 90.0)

    def test_explicit_false_overrides(self, base_config):
        gate = merge(base_config, Configuration(gates=[Gate(gate_id='A1', has_jetway=False)])).gates[0]

        assert gate.has_jetway is False

    def test_position_needs_real_coordinates(self):
        target = Gate(gate_id='A1', position=Position(52.1, 4.8, 90.0))

        merge_gate(target, Gate(gate_id='A1', position=Position(0.0, 0.0, 180.0)))
        assert target.position == Position(52.1, 4.8, 180.0)

        merge_gate(target, Gate(gate_id='A1', position=Position(53.0, 5.0, 0.0)))
        assert target.position == Position(53.0, 5.0, 180.0)

    def test_stop_table_replaced_whole(self, base_config):
        table = {'737': VariantStop(variants={'800': 14.0}, default=-1.0)}
        override = Configuration(gates=[Gate(gate_id='A1', aircraft_stop_positions=table)])

        gate = merge(base_config, override).gates[0]

        assert gate.aircraft_stop_positions == table

    def test_empty_stop_table_keeps_base(self, base_config):
        gate = merge(base_config, Configuration(gates=[Gate(gate_id='A1')])).gates[0]

        assert gate.aircraft_stop_positions == {'default': ScalarStop(3.0)}

    def test_services_added_by_type(self, base_config):
        override = Configuration(gates=[Gate(gate_id='A1', services=[
            GroundService(type='PUSHBACK', offset=99.0),
            GroundService(type='catering'),
        ])])

        gate = merge(base_config, override).gates[0]

        assert gate.service_types() == ['pushback', 'catering']
        assert gate.services[0].offset == 5.0

    def test_properties_and_tags(self, base_config):
        override = Configuration(gates=[Gate(
            gate_id='A1',
            tags=['terminal', 'remote'],
            properties={'custom_light': 'green', 'group_code': 'A'},
        )])

        gate = merge(base_config, override).gates[0]

        assert gate.tags == ['terminal', 'remote']
        assert gate.properties == {'custom_light': 'green', 'group_code': 'A'}


class TestMerge:
    """Tests for whole configuration merges."""

    def test_new_gate_appended_as_copy(self, base_config):
        new_gate = Gate(gate_id='B1', properties={'x': '1'})
        override = Configuration(gates=[new_gate])

        merged = merge(base_config, override)

        assert [g.gate_id for g in merged.gates] == ['A1', 'B1']
        assert merged.gates[1] == new_gate
        assert merged.gates[1] is not new_gate

    def test_deices_and_groups_never_overwritten(self):
        base = Configuration(
            deices=[DeIceArea(id='DeIce_01', radius=45.0)],
            gate_groups=[GateGroup(id='T1', members=['A1'])],
        )
        override = Configuration(
            deices=[DeIceArea(id='deice_01', radius=10.0), DeIceArea(id='DeIce_02')],
            gate_groups=[GateGroup(id='t1', members=['B1']), GateGroup(id='T2')],
        )

        merged = merge(base, override)

        assert [(d.id, d.radius) for d in merged.deices] == [('DeIce_01', 45.0), ('DeIce_02', None)]
        assert [(g.id, g.members) for g in merged.gate_groups] == [('T1', ['A1']), ('T2', [])]

    def test_metadata_and_heights_union(self, base_config):
        override = Configuration(
            jetway_rootfloor_heights={'jw_a320': 3.7, 'jw_b747': 5.0},
            metadata={'Airport.icao': 'KXYZ', 'extra.key': 'v'},
        )

        merged = merge(base_config, override)

        assert merged.jetway_rootfloor_heights == {'jw_a320': 3.7, 'jw_b747': 5.0}
        assert merged.metadata == {'Airport.icao': 'KXYZ', 'extra.key': 'v'}

    def test_returns_base(self, base_config):
        assert merge(base_config, Configuration()) is base_config

    def test_idempotent(self, section_text, override_text):
        override = OverrideConfigParser().parse(override_text)
        once = merge(SectionConfigParser().parse(section_text), override)
        snapshot = to_json(once)

        twice = merge(once, override)

        assert to_json(twice) == snapshot

    def test_idempotent_with_matching_gates(self, base_config):
        override = Configuration(gates=[Gate(
            gate_id='A1',
            services=[GroundService(type='fuel')],
            tags=['remote'],
            properties={'k': 'v'},
        )])
        merge(base_config, override)
        snapshot = copy.deepcopy(base_config)

        merge(base_config, override)

        assert base_config == snapshot


class TestScenario:
    """End-to-end behavior of a base gate with an override."""

    def test_base_gate_survives_merge(self):
        base = SectionConfigParser().parse("[Gate_A1]\nlat=52.1\nlon=4.8\nheading=90\nhasjetway=1\n")
        override = OverrideConfigParser().parse('parkings = {GATE_A: {1: (name("Terminal 1|Gate 1"),)}}\n')

        merged = merge(base, override)
        gate = merged.find_gate('A1')

        assert gate.position == Position(52.1, 4.8, 90.0)
        assert gate.has_jetway is True
        assert merged.find_gate('a 1').ui_name == 'Gate 1'
