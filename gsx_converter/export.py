"""
Flat per-gate table for quick inspection of a converted configuration.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import pandas as pd

from .models import Configuration

logger = logging.getLogger(__name__)

GATE_COLUMNS = [
    'gate_id',
    'ui_name',
    'lat',
    'lon',
    'heading',
    'has_jetway',
    'max_wingspan',
    'services',
    'stop_positions',
    'groups',
]


def gate_rows(config: Configuration) -> List[Dict[str, Any]]:
    rows = []
    for gate in config.gates:
        rows.append({
            'gate_id': gate.gate_id,
            'ui_name': gate.ui_name,
            'lat': gate.position.lat,
            'lon': gate.position.lon,
            'heading': gate.position.heading,
            'has_jetway': gate.has_jetway,
            'max_wingspan': gate.max_wingspan,
            'services': ';'.join(gate.service_types()),
            'stop_positions': ';'.join(gate.aircraft_stop_positions.keys()),
            'groups': ';'.join(g.id for g in config.groups_for_gate(gate.gate_id)),
        })
    return rows


def gates_dataframe(config: Configuration) -> pd.DataFrame:
    """
    Build a DataFrame with one row per gate.

    Args:
        config: Converted configuration

    Returns:
        DataFrame with the GATE_COLUMNS columns, in gate order
    """
    return pd.DataFrame(gate_rows(config), columns=GATE_COLUMNS)


def write_gates_csv(config: Configuration, path: Union[str, Path]) -> Path:
    path = Path(path)
    df = gates_dataframe(config)
    df.to_csv(path, index=False)
    logger.info(f"Wrote {len(df)} gates to {path}")
    return path
