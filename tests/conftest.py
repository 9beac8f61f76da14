"""Shared test fixtures for the habits tests."""

from __future__ import annotations

import json
import os
from datetime import date
from pathlib import Path

import pytest
import yaml

from habits.timestamp import Timestamp


def _seconds(d: date) -> int:
    return Timestamp.from_date(d).seconds


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with habits, repetitions, and a profile."""
    root = tmp_path / "workspace"
    root.mkdir(parents=True)

    (root / "profile.yaml").write_text(
        yaml.dump({"timezone": "UTC"}, default_flow_style=False), encoding="utf-8"
    )

    habits = {
        "habits": [
            {"id": 1, "name": "Meditate", "question": "Did you meditate today?", "type": 0, "freq_num": 1, "freq_den": 1},
            {"id": 2, "name": "Run", "type": 0, "freq_num": 3, "freq_den": 7},
            {
                "id": 3,
                "name": "Water",
                "type": 1,
                "freq_num": 1,
                "freq_den": 1,
                "target_type": 0,
                "target_value": 8,
                "unit": "glasses",
            },
            {
                "id": 4,
                "name": "Coffee",
                "type": 1,
                "freq_num": 1,
                "freq_den": 1,
                "target_type": 1,
                "target_value": 2,
                "unit": "cups",
            },
            {"id": 5, "name": "Old habit", "type": 0, "freq_num": 1, "freq_den": 1, "archived": True},
        ],
    }
    (root / "habits.yaml").write_text(
        yaml.dump(habits, default_flow_style=False), encoding="utf-8"
    )

    repetitions = [
        {"habit": 1, "timestamp": _seconds(date(2026, 3, 10)), "value": 1},
        {"habit": 1, "timestamp": _seconds(date(2026, 3, 11)), "value": 1},
        {"habit": 3, "timestamp": _seconds(date(2026, 3, 10)), "value": 8000, "notes": "hot day"},
    ]
    (root / "repetitions.json").write_text(
        json.dumps(repetitions, indent=2), encoding="utf-8"
    )

    # Set env var
    os.environ["HABITS_ROOT"] = str(root)
    yield root
    # Cleanup
    if "HABITS_ROOT" in os.environ:
        del os.environ["HABITS_ROOT"]
