"""Tests for the per-gate table export."""

import pandas as pd

from gsx_converter.export import GATE_COLUMNS, gates_dataframe, write_gates_csv
from gsx_converter.merger import merge
from gsx_converter.models import Configuration
from gsx_converter.parsers import OverrideConfigParser, SectionConfigParser


class TestGatesDataframe:
    """Tests for gates_dataframe."""

    def test_columns_and_rows(self, section_text, override_text):
        config = merge(SectionConfigParser().parse(section_text), OverrideConfigParser().parse(override_text))

        df = gates_dataframe(config)

        assert list(df.columns) == GATE_COLUMNS
        assert list(df['gate_id']) == ['A1', 'A2', 'a 1', 'a 2', 'b 7', 'b 8']
        a1 = df[df['gate_id'] == 'A1'].iloc[0]
        assert a1['services'] == 'pushback;pushback'
        assert a1['groups'] == 'Terminal1'
        gate_a1 = df[df['gate_id'] == 'a 1'].iloc[0]
        assert gate_a1['stop_positions'] == '737;757;320;321;default'
        assert gate_a1['groups'] == 'Terminal 1'

    def test_empty_configuration(self):
        df = gates_dataframe(Configuration())

        assert df.empty
        assert list(df.columns) == GATE_COLUMNS

    def test_write_csv(self, tmp_path, base_config):
        path = write_gates_csv(base_config, tmp_path / 'gates.csv')

        df = pd.read_csv(path)
        assert list(df['gate_id']) == ['A1']
        assert df.loc[0, 'max_wingspan'] == 36.0
