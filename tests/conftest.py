"""
Shared test fixtures.

Two datasets are used throughout:
- scenario: two unrelated mother/child pairs (Momoa and Cravalho)
- family: three generations of the Kahale/Akana family plus one unrelated person

Family tree (parent -> child):

    10 Keoni Kahale   11 Malia Kahale
            \\          /
         20 Kimo      21 Leilani           22 Noelani Akana
              \\          \\               /
               \\          32 Pua         /
                30 Kai, 31 Kaimana  <---+   (parents 20 and 22)

    23 Makoa Silva (no relationships)
"""

import copy

import pytest

from mookuauhau.config import Config, DatasetConfig, LoggingConfig
from mookuauhau.core.loader import DatasetLoader
from mookuauhau.services.query_engine import QueryEngine

SCENARIO_DATA = {
    "people": [
        {"id": 1, "name": "Jason Momoa", "parents": [3]},
        {"id": 3, "name": "Mommy Momoa"},
        {"id": 2, "name": "Aulii Cravalho", "parents": [4]},
        {"id": 4, "name": "Mommy Cravalho"},
    ]
}

LOCATIONS = [
    {
        "id": 1,
        "name": "Honolulu",
        "locationType": "CITY",
        "description": "Capital city on the island of Oahu",
    },
    {
        "id": 2,
        "name": "Hilo",
        "locationType": "CITY",
        "description": "Town on the windward coast of Hawaii island",
    },
    {"id": 3, "name": "Lihue", "locationType": "CITY", "description": "County seat of Kauai"},
    {"id": 4, "name": "Oahu", "locationType": "MOKUPUNI", "description": "The gathering place"},
]

FAMILY_DATA = {
    "locations": LOCATIONS,
    "people": [
        {"id": 10, "name": "Keoni Kahale", "sex": "M", "birth": {"date": "1930", "place": 2}},
        {"id": 11, "name": "Malia Kahale", "sex": "F", "birth": {"date": "1932-05-01"}},
        {"id": 20, "name": "Kimo Kahale", "sex": "M", "parents": [10, 11]},
        {"id": 21, "name": "Leilani Kahale Akana", "sex": "F", "parents": [10, 11]},
        {"id": 22, "name": "Noelani Akana", "sex": "F"},
        {"id": 30, "name": "Kai Kahale", "sex": "M", "parents": [20, 22]},
        {"id": 31, "name": "Kaimana Kahale", "sex": "F", "parents": [20, 22]},
        {"id": 32, "name": "Pua Akana", "sex": "F", "parents": [21], "birth": {"place": 1}},
        {"id": 23, "name": "Makoa Silva", "sex": "M"},
    ],
}


def make_config(**dataset) -> Config:
    """Config with file logging off and optional dataset overrides."""
    return Config(
        dataset=DatasetConfig(**dataset),
        logging=LoggingConfig(log_to_file=False),
    )


def build_engine(data, **dataset) -> QueryEngine:
    config = make_config(**dataset)
    loaded = DatasetLoader(config.dataset).load_data(copy.deepcopy(data))
    return QueryEngine.from_dataset(loaded, config)


@pytest.fixture
def scenario_data() -> dict:
    return copy.deepcopy(SCENARIO_DATA)


@pytest.fixture
def family_data() -> dict:
    return copy.deepcopy(FAMILY_DATA)


@pytest.fixture
def scenario_engine() -> QueryEngine:
    return build_engine(SCENARIO_DATA)


@pytest.fixture
def family_engine() -> QueryEngine:
    return build_engine(FAMILY_DATA)


@pytest.fixture
def engine_factory():
    """Build an engine from raw data, with optional dataset config overrides."""
    return build_engine
