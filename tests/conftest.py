"""
Pytest configuration and shared fixtures for the test suite.
"""

import json
import pytest
from pathlib import Path

import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from phaseparser.catalog.bosses import BOSSES, PhaseDescriptor
from tests.helpers import start, end


@pytest.fixture
def catalog_phases():
    """Phase catalog with two phases and opaque display metadata."""
    return {
        "P1": PhaseDescriptor("P1", "Stage One", {"difficulties": [15, 16], "color": "#ff0000"}),
        "P2": PhaseDescriptor("P2", "Stage Two", {"difficulties": [16]}),
    }


@pytest.fixture
def scenario_events():
    """Boundary events where P1 is complete and P2 never ends."""
    return [
        start("P1", "i1", 100),
        end("P1", "i1", 200),
        start("P1", "i2", 300),
        start("P2", "i1", 50),
    ]


@pytest.fixture(autouse=True)
def restore_boss_catalog():
    """Undo catalog registrations made by a test."""
    saved = dict(BOSSES)
    yield
    BOSSES.clear()
    BOSSES.update(saved)


@pytest.fixture
def sample_report_data():
    """Encounter report for Sire Denathrius with one intermission."""
    return {
        "boss": 2407,
        "start_time": 0,
        "end_time": 60000,
        "events": [
            {"type": "phasestart", "timestamp": 0, "phase": {"key": "P1", "instance": 1}},
            {"type": "applybuff", "timestamp": 1000, "sourceID": 7, "targetID": 7, "abilityGameID": 162264},
            {"type": "cast", "timestamp": 2000, "sourceID": 7, "abilityGameID": 258925},
            {"type": "damage", "timestamp": 2100, "sourceID": 7, "abilityGameID": 258926, "amount": 5000},
            {"type": "removebuff", "timestamp": 5000, "sourceID": 7, "targetID": 7, "abilityGameID": 162264},
            {"type": "phaseend", "timestamp": 20000, "phase": {"key": "P1", "instance": 1}},
            {"type": "phasestart", "timestamp": 20000, "phase": {"key": "I1", "instance": 1}},
            {"type": "phaseend", "timestamp": 30000, "phase": {"key": "I1", "instance": 1}},
            {"type": "phasestart", "timestamp": 30000, "phase": {"key": "P2", "instance": 1}},
            {"type": "cast", "timestamp": 31000, "sourceID": 7, "abilityGameID": 258925},
            {"type": "damage", "timestamp": 31100, "sourceID": 7, "abilityGameID": 258926, "amount": 3000},
            {"type": "cast", "timestamp": 32000, "sourceID": 9, "abilityGameID": 258925},
            {"type": "phaseend", "timestamp": 60000, "phase": {"key": "P2", "instance": 1}},
            {"type": "phasestart", "timestamp": 60000, "phase": {"key": "P3", "instance": 1}},
        ],
    }


@pytest.fixture
def sample_report_file(tmp_path, sample_report_data):
    """Sample report written to a temporary JSON file."""
    path = tmp_path / "report.json"
    path.write_text(json.dumps(sample_report_data))
    return path
