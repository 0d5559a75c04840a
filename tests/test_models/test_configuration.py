"""Tests for the configuration model and its validation."""

from gsx_converter.models import Configuration, DeIceArea, Gate, GateGroup, validate_configuration


class TestConfiguration:
    """Tests for Configuration lookups."""

    def test_find_gate_ignores_case(self, base_config):
        assert base_config.find_gate('a1') is base_config.gates[0]
        assert base_config.find_gate('B1') is None

    def test_group_members_resolved_by_id(self):
        config = Configuration(
            gates=[Gate(gate_id='A1'), Gate(gate_id='A2')],
            gate_groups=[GateGroup(id='T1', members=['a2', 'X9', 'A1'])],
        )

        members = config.group_members(config.gate_groups[0])

        assert [g.gate_id for g in members] == ['A2', 'A1']
        assert config.groups_for_gate('A1') == [config.gate_groups[0]]

    def test_str(self, base_config):
        assert str(base_config) == 'Configuration(KTST: 1 gates, 0 de-ice areas, 0 groups)'


class TestValidateConfiguration:
    """Tests for validate_configuration."""

    def test_valid(self, base_config):
        result = validate_configuration(base_config)

        assert result.is_valid
        assert not result.has_warnings
        assert str(result) == 'Valid'

    def test_duplicate_gate_ids(self):
        config = Configuration(gates=[Gate(gate_id='A1'), Gate(gate_id='a1')])

        result = config.validate()

        assert not result.is_valid
        assert 'duplicate gate identifier' in result.get_error_messages()[0]

    def test_empty_ids(self):
        config = Configuration(
            gates=[Gate(gate_id=' ')],
            deices=[DeIceArea(id='')],
            gate_groups=[GateGroup(id='')],
        )

        result = config.validate()

        assert len(result.errors) == 3

    def test_dangling_group_member_is_a_warning(self):
        config = Configuration(gate_groups=[GateGroup(id='T1', members=['Z9'])])

        result = config.validate()

        assert result.is_valid
        assert result.warnings == ["group 'T1' references unknown gate 'Z9'"]
