"""Tests for the gate equipment groupings."""

from gsx_converter.models import BaggagePositions, Position, PushbackConfig, StairsPositions


class TestHasAny:
    """Tests for has_any on optional equipment groupings."""

    def test_empty(self):
        assert not PushbackConfig().has_any()
        assert not BaggagePositions().has_any()
        assert not StairsPositions().has_any()

    def test_single_field(self):
        assert PushbackConfig(pushback_labels=['Left']).has_any()
        assert PushbackConfig(snap_left_pushback_pos=False).has_any()
        assert StairsPositions(stairs_rear_pos=Position(1.0, 2.0, 3.0)).has_any()
