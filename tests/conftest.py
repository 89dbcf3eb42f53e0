"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from protoforge import LocalStore, ManipulatorSettings


def make_records() -> list[dict]:
    return [
        {
            "type": "technology",
            "name": "automation",
            "prerequisites": [],
            "effects": [{"type": "unlock-recipe", "recipe": "assembling-machine-1"}],
            "unit": {"count": 10, "ingredients": [["automation-science-pack", 1]], "time": 10},
        },
        {
            "type": "technology",
            "name": "electronics",
            "prerequisites": ["automation"],
            "effects": [],
            "unit": {
                "count": 30,
                "ingredients": [["automation-science-pack", 1], ["logistic-science-pack", 1]],
                "time": 15,
            },
        },
        {
            "type": "recipe",
            "name": "electronic-circuit",
            "ingredients": [
                {"type": "item", "name": "iron-plate", "amount": 1},
                {"type": "item", "name": "copper-cable", "amount": 3},
            ],
            "results": [{"type": "item", "name": "electronic-circuit", "amount": 1}],
        },
        {
            "type": "recipe",
            "name": "processor",
            "ingredients": [
                {"type": "item", "name": "electronic-circuit", "amount": 10},
                {"type": "item", "name": "advanced-circuit", "amount": 2},
                {"type": "item", "name": "processing-unit", "amount": 1},
            ],
            "results": [{"type": "item", "name": "processor", "amount": 1}],
        },
    ]


@pytest.fixture
def store():
    """Fresh store with a few vanilla-like records."""
    return LocalStore(make_records())


@pytest.fixture
def empty_store():
    return LocalStore()


@pytest.fixture
def settings():
    """Settings isolated from PROTOFORGE_* environment variables."""
    return ManipulatorSettings(validate_elements=True, warn_on_overwrite=False)
