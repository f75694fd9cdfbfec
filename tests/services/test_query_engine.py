"""
Tests for the query engine.

Test Organization:
1. Building (from dataset, from config, repair and lineage options)
2. Lookups and paged listing
3. Shortest paths and relationship labels
4. Search, plain and paged
5. Argument validation and statistics
"""

import json

import pytest

from mookuauhau.config import Config, DatasetConfig, LoggingConfig
from mookuauhau.core.graph import CHILD, PARENT
from mookuauhau.services.query_engine import QueryEngine
from mookuauhau.utils.exceptions import DatasetError, NotFoundError, ValidationError


def ids(records) -> list[int]:
    return [r.id for r in records]


class TestBuild:
    """Tests for engine construction."""

    def test_from_config(self, tmp_path, scenario_data):
        path = tmp_path / "family.json"
        path.write_text(json.dumps(scenario_data))
        config = Config(
            dataset=DatasetConfig(path=str(path)), logging=LoggingConfig(log_to_file=False)
        )

        engine = QueryEngine.from_config(config)

        assert engine.config is config
        assert ids(engine.get_people()) == [1, 2, 3, 4]

    def test_from_config_missing_file(self, tmp_path):
        config = Config(dataset=DatasetConfig(path=str(tmp_path / "missing.yaml")))

        with pytest.raises(DatasetError):
            QueryEngine.from_config(config)

    def test_one_sided_links_repaired(self, scenario_engine):
        assert scenario_engine.get_person(3).children == [1]

    def test_one_sided_links_rejected_without_repair(self, engine_factory, scenario_data):
        with pytest.raises(DatasetError):
            engine_factory(scenario_data, repair_relationships=False)

    def test_dangling_reference_aborts(self, engine_factory):
        with pytest.raises(DatasetError):
            engine_factory({"people": [{"id": 1, "parents": [9]}]})

    def test_lineage_warnings(self, engine_factory):
        data = {
            "people": [
                {"id": 1, "birth": {"date": "1990"}},
                {"id": 2, "birth": {"date": "1960"}, "parents": [1]},
            ]
        }

        assert len(engine_factory(data).lineage_warnings) == 1
        assert engine_factory(data, validate_lineage=False).lineage_warnings == []

    def test_empty_dataset(self, engine_factory):
        engine = engine_factory({"people": []})

        assert engine.get_people() == []
        assert engine.get_shortest_path(1, 1) == []


class TestLookups:
    """Tests for get_person, get_place and get_people."""

    def test_get_person(self, scenario_engine):
        person = scenario_engine.get_person(1)

        assert person.display_name == "Jason Momoa"
        assert person.parents == [3]

    def test_get_missing_person(self, scenario_engine):
        assert scenario_engine.get_person(99) is None

    def test_get_place(self, family_engine):
        assert family_engine.get_place(2).name == "Hilo"
        assert family_engine.get_place(99) is None

    def test_require_person(self, scenario_engine):
        assert scenario_engine.require_person(4).display_name == "Mommy Cravalho"

        with pytest.raises(NotFoundError) as exc_info:
            scenario_engine.require_person(99)

        assert exc_info.value.to_dict() == {"message": "Person not found: 99", "id": 99}

    def test_require_place(self, family_engine):
        assert family_engine.require_place(3).name == "Lihue"

        with pytest.raises(NotFoundError):
            family_engine.require_place(99)

    def test_first_page(self, scenario_engine):
        assert ids(scenario_engine.get_people(2, 0)) == [1, 2]

    def test_second_page(self, scenario_engine):
        assert ids(scenario_engine.get_people(2, 2)) == [3, 4]

    def test_offset_past_end(self, scenario_engine):
        assert scenario_engine.get_people(5, 10) == []

    def test_no_limit(self, family_engine):
        assert ids(family_engine.get_people(offset=6)) == [30, 31, 32]

    def test_pages_partition_population(self, family_engine):
        pages = [family_engine.get_people(limit=4, offset=o) for o in range(0, 12, 4)]

        flat = [p.id for page in pages for p in page]
        assert flat == ids(family_engine.get_people())
        assert [len(page) for page in pages] == [4, 4, 1]


class TestPaths:
    """Tests for shortest paths."""

    def test_mother_and_child(self, scenario_engine):
        assert ids(scenario_engine.get_shortest_path(1, 3)) == [1, 3]

    def test_unrelated(self, scenario_engine):
        assert scenario_engine.get_shortest_path(1, 2) == []

    def test_unknown_person(self, scenario_engine):
        assert scenario_engine.get_shortest_path(1, 99) == []

    def test_self_path(self, scenario_engine):
        assert ids(scenario_engine.get_shortest_path(4, 4)) == [4]

    def test_cousins(self, family_engine):
        assert ids(family_engine.get_shortest_path(30, 32)) == [30, 20, 10, 21, 32]

    @pytest.mark.parametrize("a,b", [(30, 32), (22, 11), (31, 21), (10, 32)])
    def test_symmetric_length(self, family_engine, a, b):
        forward = family_engine.get_shortest_path(a, b)
        backward = family_engine.get_shortest_path(b, a)

        assert len(forward) == len(backward)
        assert forward[0].id == a and forward[-1].id == b

    def test_relationship_labels(self, family_engine):
        relationship = family_engine.get_relationship(30, 32)

        assert ids(relationship.people) == [30, 20, 10, 21, 32]
        assert [s.relation_to_next for s in relationship.steps] == [
            PARENT,
            PARENT,
            CHILD,
            CHILD,
            None,
        ]
        assert relationship.generations_apart == 4

    def test_relationship_with_self(self, family_engine):
        relationship = family_engine.get_relationship(23, 23)

        assert relationship.generations_apart == 0
        assert relationship.steps[0].relation_to_next is None

    def test_no_relationship(self, family_engine):
        assert family_engine.get_relationship(30, 23) is None


class TestSearch:
    """Tests for people and place search."""

    def test_search_people(self, scenario_engine):
        assert ids(scenario_engine.search_people("momoa")) == [1, 3]

    def test_search_people_ranked(self, family_engine):
        assert ids(family_engine.search_people("Kai Kahale")) == [30, 31, 10, 11, 20, 21]

    def test_search_people_no_match(self, family_engine):
        assert family_engine.search_people("silvaa") == []

    def test_search_places(self, family_engine):
        assert ids(family_engine.search_places("oahu island")) == [1, 2, 4]

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_text_rejected(self, family_engine, text):
        with pytest.raises(ValidationError):
            family_engine.search_people(text)
        with pytest.raises(ValidationError):
            family_engine.search_places(text)

    def test_people_page(self, family_engine):
        page = family_engine.search_people_page("ka", limit=4, offset=2)

        assert ids(page.results) == [20, 21, 30, 31]
        assert page.total == 6
        assert page.count == 4
        assert page.offset == 2

    def test_people_page_past_end(self, family_engine):
        page = family_engine.search_people_page("ka", limit=4, offset=8)

        assert page.results == []
        assert page.total == 6
        assert page.count == 0

    def test_places_page_defaults(self, family_engine):
        page = family_engine.search_places_page("island")

        assert ids(page.results) == [1, 2]
        assert page.offset == 0

    def test_page_rejects_negative(self, family_engine):
        with pytest.raises(ValidationError):
            family_engine.search_places_page("island", limit=-1)


class TestValidation:
    """Tests for argument validation."""

    @pytest.mark.parametrize("bad", ["1", 1.0, True, None])
    def test_non_integer_id(self, scenario_engine, bad):
        with pytest.raises(ValidationError) as exc_info:
            scenario_engine.get_person(bad)

        assert exc_info.value.context["argument"] == "id"

    def test_non_integer_path_argument(self, scenario_engine):
        with pytest.raises(ValidationError) as exc_info:
            scenario_engine.get_shortest_path(1, "3")

        assert exc_info.value.context["argument"] == "person2"

    @pytest.mark.parametrize("limit,offset", [(-1, 0), (2, -1), ("2", 0), (2, 0.5)])
    def test_bad_paging(self, scenario_engine, limit, offset):
        with pytest.raises(ValidationError):
            scenario_engine.get_people(limit, offset)

    def test_statistics(self, family_engine):
        stats = family_engine.get_statistics()

        assert stats["people"] == 9
        assert stats["locations"] == 4
        assert stats["relationships"] == {"edges": 9, "families": 2}
        assert stats["search"]["person_tokens"] > 0
        assert stats["lineage_warnings"] == 0
