"""
Tests for the collection export loader.

Tests cover:
- Top-level shape validation
- Default filling of optional specimen fields
- Reading exports from disk
"""

import json

import pytest
from pydantic import ValidationError

from collection import MalformedInputError, load_collection
from io_utils.read import read_collection


class TestLoadCollection:
    """Tests for load_collection."""

    def test_loads_specimens_in_order(self, sample_export):
        collection = load_collection(sample_export)

        assert [s.id for s in collection.specimens] == ["1", "2", "3", "4", "5"]
        assert collection.collector.collectorId == "12345"

    def test_defaults_missing_containers(self, sample_export):
        collection = load_collection(sample_export)
        second = collection.specimens[1]

        assert second.minerals == []
        assert second.images == []
        assert second.properties == {}

    def test_explicit_null_containers_default(self):
        data = {
            "collector": {},
            "specimens": [{"location": "Peru", "species": None, "properties": None}],
        }
        specimen = load_collection(data).specimens[0]

        assert specimen.species == []
        assert specimen.properties == {}

    def test_numeric_ids_become_strings(self):
        data = {"collector": {"collectorId": 42}, "specimens": [{"id": 7, "location": "Peru"}]}
        collection = load_collection(data)

        assert collection.specimens[0].id == "7"
        assert collection.collector.collectorId == "42"

    def test_specimens_are_immutable(self, sample_export):
        specimen = load_collection(sample_export).specimens[0]

        with pytest.raises(ValidationError):
            specimen.location = "Elsewhere"

    def test_display_fields_pass_through_any_type(self):
        data = {
            "collector": {},
            "specimens": [
                {
                    "location": "Peru",
                    "dimensions": {"w": 4, "h": 3},
                    "size": 12,
                    "locality": ["Huanzala", "Huallanca"],
                }
            ],
        }
        specimen = load_collection(data).specimens[0]

        assert specimen.dimensions == {"w": 4, "h": 3}
        assert specimen.size == 12
        assert specimen.to_dict()["locality"] == ["Huanzala", "Huallanca"]

    def test_wrong_type_containers_default(self):
        data = {
            "collector": {},
            "specimens": [
                {
                    "location": "Peru",
                    "properties": ["x"],
                    "images": "a.jpg",
                    "minerals": "Pyrite",
                }
            ],
        }
        specimen = load_collection(data).specimens[0]

        assert specimen.properties == {}
        assert specimen.images == []
        assert specimen.minerals == []

    def test_non_text_title_becomes_none(self):
        data = {
            "collector": {},
            "specimens": [{"id": {"n": 1}, "title": {"en": "Pyrite"}, "location": "Peru"}],
        }
        specimen = load_collection(data).specimens[0]

        assert specimen.id is None
        assert specimen.title is None
        assert "title" not in specimen.to_dict()

    @pytest.mark.parametrize(
        "entry",
        [
            {"location": "Peru", "species": "Quartz"},
            {"location": "Peru", "species": [{"name": "Quartz"}]},
            {"location": {"country": "Peru"}},
        ],
    )
    def test_unusable_grouping_fields_rejected(self, entry):
        with pytest.raises(MalformedInputError) as exc_info:
            load_collection({"collector": {}, "specimens": [entry]})

        assert exc_info.value.code == "bad_specimen"

    @pytest.mark.parametrize(
        "data, code",
        [
            ([], "not_an_object"),
            ({"collector": {}}, "missing_specimens"),
            ({"collector": {}, "specimens": {}}, "missing_specimens"),
            ({"specimens": []}, "missing_collector"),
            ({"specimens": [], "collector": "someone"}, "missing_collector"),
            ({"specimens": ["x"], "collector": {}}, "bad_specimen"),
        ],
    )
    def test_rejects_malformed_shape(self, data, code):
        with pytest.raises(MalformedInputError) as exc_info:
            load_collection(data)

        assert exc_info.value.code == code


class TestReadCollection:
    """Tests for reading exports from disk."""

    def test_read_collection(self, export_file):
        collection = read_collection(export_file)

        assert len(collection.specimens) == 5

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(MalformedInputError) as exc_info:
            read_collection(path)

        assert exc_info.value.code == "invalid_json"

    def test_empty_collection(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"collector": {}, "specimens": []}))

        assert read_collection(path).specimens == ()

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"collector": {}, "specimens": [{"title": "\xff"}]}')

        with pytest.raises(MalformedInputError) as exc_info:
            read_collection(path)

        assert exc_info.value.code == "invalid_encoding"
