"""
Tests for the dataset record models.

Test Organization:
1. Name parsing
2. Person: names, sex, relationships, immutability
3. LifeEvent: opaque dates
4. Location and Address
5. Result models
"""

from datetime import date

import pytest
from pydantic import ValidationError

from mookuauhau.models import (
    Address,
    LifeEvent,
    Location,
    LocationType,
    Name,
    NameType,
    Note,
    PathStep,
    Person,
    PersonSearchResult,
    RelationshipPath,
    Sex,
)


class TestName:
    """Tests for Name model."""

    def test_from_text_first_last(self):
        name = Name.from_text("Jason Momoa")

        assert name.first == "Jason"
        assert name.middle == []
        assert name.last == "Momoa"

    def test_from_text_with_middle_names(self):
        name = Name.from_text("Leilani Kahale Akana")

        assert name.first == "Leilani"
        assert name.middle == ["Kahale"]
        assert name.last == "Akana"
        assert name.full_name == "Leilani Kahale Akana"

    def test_from_text_single_word(self):
        name = Name.from_text("Kamehameha")

        assert name.first == "Kamehameha"
        assert name.last is None

    def test_camel_case_keys(self):
        name = Name.model_validate(
            {"first": "Kai", "nameType": "NICKNAME", "givenBy": [10], "middle": "Keola Kanoa"}
        )

        assert name.name_type == NameType.NICKNAME
        assert name.given_by == [10]
        assert name.middle == ["Keola", "Kanoa"]


class TestPerson:
    """Tests for Person model."""

    def test_person_creation_minimal(self):
        person = Person(id=1)

        assert person.id == 1
        assert person.names == []
        assert person.sex == Sex.UNKNOWN
        assert person.birth is None
        assert person.parents == []
        assert person.children == []
        assert person.display_name == ""

    def test_name_string_accepted(self):
        person = Person.model_validate({"id": 1, "name": "Jason Momoa"})

        assert len(person.names) == 1
        assert person.names[0].last == "Momoa"
        assert person.display_name == "Jason Momoa"

    def test_name_list_mixed(self):
        person = Person.model_validate(
            {"id": 1, "names": ["Kai Kahale", {"first": "Kai", "nameType": "NICKNAME"}]}
        )

        assert [n.full_name for n in person.names] == ["Kai Kahale", "Kai"]

    @pytest.mark.parametrize(
        "raw,expected",
        [("M", Sex.MALE), ("f", Sex.FEMALE), ("other", Sex.OTHER), (None, Sex.UNKNOWN)],
    )
    def test_sex_parsing(self, raw, expected):
        assert Person(id=1, sex=raw).sex == expected

    def test_invalid_sex_rejected(self):
        with pytest.raises(ValidationError):
            Person(id=1, sex="X")

    def test_relationships_sorted_and_unique(self):
        person = Person(id=5, parents=[9, 3, 9], children=[7, 6])

        assert person.parents == [3, 9]
        assert person.children == [6, 7]

    def test_id_required(self):
        with pytest.raises(ValidationError):
            Person.model_validate({"name": "Nobody"})

    def test_person_is_frozen(self):
        person = Person(id=1)

        with pytest.raises(ValidationError):
            person.id = 2

    def test_all_events_order(self):
        person = Person(
            id=1,
            birth=LifeEvent(description="birth"),
            death=LifeEvent(description="death"),
            events=[LifeEvent(description="census")],
        )

        assert [e.description for e in person.all_events()] == ["birth", "death", "census"]

    def test_serializes_camel_case(self):
        person = Person.model_validate({"id": 1, "names": [{"first": "Kai", "nameType": "BIRTH"}]})

        dumped = person.model_dump(by_alias=True)

        assert dumped["names"][0]["nameType"] == "BIRTH"


class TestLifeEvent:
    """Tests for LifeEvent model."""

    def test_date_kept_as_text(self):
        event = LifeEvent(date="ABT 1905")

        assert event.date == "ABT 1905"

    def test_date_object_converted(self):
        event = LifeEvent.model_validate({"date": date(1982, 1, 1)})

        assert event.date == "1982-01-01"

    def test_year_number_converted(self):
        assert LifeEvent.model_validate({"date": 1930}).date == "1930"

    def test_notes_attached(self):
        event = LifeEvent.model_validate(
            {"notes": [{"text": "From parish register", "source": "extra key kept"}]}
        )

        assert isinstance(event.notes[0], Note)
        assert event.notes[0].text == "From parish register"


class TestLocation:
    """Tests for Location and Address models."""

    def test_location_requires_name(self):
        with pytest.raises(ValidationError):
            Location.model_validate({"id": 1})

    def test_location_rejects_empty_name(self):
        with pytest.raises(ValidationError):
            Location(id=1, name="")

    def test_location_type_case_insensitive(self):
        location = Location.model_validate({"id": 1, "name": "Waikiki", "locationType": "ahupuaa"})

        assert location.location_type == LocationType.AHUPUAA

    def test_coordinates_kept_as_text(self):
        location = Location.model_validate({"id": 1, "name": "Hilo", "lat": 19.7, "long": -155.08})

        assert location.lat == "19.7"
        assert location.long == "-155.08"

    def test_address_postal_code(self):
        address = Address.model_validate({"city": "Honolulu", "postalCode": 96813})

        assert address.postal_code == "96813"


class TestResults:
    """Tests for result models."""

    def test_person_search_result_defaults(self):
        result = PersonSearchResult()

        assert result.results == []
        assert result.total == 0
        assert result.timestamp

    def test_relationship_path_people(self):
        a, b = Person(id=1), Person(id=3)
        path = RelationshipPath(
            steps=[PathStep(person=a, relation_to_next="parent"), PathStep(person=b)],
            generations_apart=1,
        )

        assert [p.id for p in path.people] == [1, 3]

    def test_path_step_rejects_unknown_relation(self):
        with pytest.raises(ValidationError):
            PathStep(person=Person(id=1), relation_to_next="cousin")
