"""Shared fixtures for skill-activation tests."""

import json
from pathlib import Path

import pytest


@pytest.fixture
def write_rules(tmp_path: Path):
    """Write a rule document to a temp skill-rules.json and return its path."""

    def _write(skills: dict, settings: dict = None, name: str = "skill-rules.json") -> Path:
        doc = {"skills": skills}
        if settings is not None:
            doc["settings"] = settings
        path = tmp_path / name
        path.write_text(json.dumps(doc))
        return path

    return _write


@pytest.fixture
def testing_rules(write_rules) -> Path:
    """Single auto rule 'testing' triggered by the phrase 'test'."""
    return write_rules(
        {
            "testing": {
                "description": "Write and run tests",
                "triggers": {"prompt": ["test"]},
                "enforcement": "auto",
                "priority": 1,
            }
        }
    )
