import shutil

import pytest
from pathlib import Path

from gsx_converter.models import Configuration, Gate, GroundService, Position, ScalarStop


@pytest.fixture
def test_assets_dir() -> Path:
    """Return the path to the test assets directory."""
    return Path(__file__).parent / 'assets'


@pytest.fixture
def section_text(test_assets_dir) -> str:
    """Section-format profile used across parser and pipeline tests."""
    return (test_assets_dir / 'KTST.ini').read_text(encoding='utf-8')


@pytest.fixture
def override_text(test_assets_dir) -> str:
    """Python override profile matching KTST.ini."""
    return (test_assets_dir / 'KTST.py').read_text(encoding='utf-8')


@pytest.fixture
def profile_dir(tmp_path, test_assets_dir) -> Path:
    """A scratch directory holding copies of the KTST profiles."""
    for name in ('KTST.ini', 'KTST.py'):
        shutil.copy(test_assets_dir / name, tmp_path / name)
    return tmp_path


@pytest.fixture
def base_config() -> Configuration:
    """Small hand-built base configuration."""
    gate = Gate(
        gate_id='A1',
        position=Position(lat=52.1, lon=4.8, heading=90.0),
        services=[GroundService(type='pushback', offset=5.0)],
        tags=['terminal'],
        aircraft_stop_positions={'default': ScalarStop(3.0)},
        ui_name='Gate A1',
        max_wingspan=36.0,
        has_jetway=True,
        properties={'custom_light': 'red'},
    )
    return Configuration(
        airport='KTST',
        gates=[gate],
        jetway_rootfloor_heights={'jw_a320': 3.5},
        metadata={'Airport.icao': 'KTST'},
    )
