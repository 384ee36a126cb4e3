"""Tests for the gazetteer and location search index."""

import math

import pytest

from aquamap.models.schemas import SearchStatus, WaterBodyType
from aquamap.services.gazetteer import (
    DEFAULT_RECORDS,
    GazetteerError,
    get_gazetteer,
    load_gazetteer,
)
from aquamap.services.search import LocationSearchIndex


class TestLoadGazetteer:
    """Tests for gazetteer validation."""

    def test_default_records_load_in_order(self) -> None:
        entries = load_gazetteer(DEFAULT_RECORDS)

        assert len(entries) == 10
        assert entries[0].name == "Ganges River"
        assert entries[-1].name == "Cochin Port"
        assert entries[4].category == WaterBodyType.SEA

    def test_out_of_range_latitude_fails(self) -> None:
        with pytest.raises(GazetteerError):
            load_gazetteer(
                [{"name": "Nowhere", "category": "lake", "latitude": 95.0, "longitude": 10.0}]
            )

    def test_out_of_range_longitude_fails(self) -> None:
        with pytest.raises(GazetteerError):
            load_gazetteer(
                [{"name": "Nowhere", "category": "lake", "latitude": 10.0, "longitude": -181.0}]
            )

    def test_non_finite_coordinate_fails(self) -> None:
        with pytest.raises(GazetteerError):
            load_gazetteer(
                [{"name": "Nowhere", "category": "lake", "latitude": math.nan, "longitude": 0.0}]
            )

    def test_unknown_category_fails(self) -> None:
        with pytest.raises(GazetteerError):
            load_gazetteer(
                [{"name": "Puddle", "category": "puddle", "latitude": 0.0, "longitude": 0.0}]
            )

    def test_duplicate_names_fail(self) -> None:
        record = {"name": "Dal Lake", "category": "lake", "latitude": 34.1, "longitude": 74.8}
        with pytest.raises(GazetteerError):
            load_gazetteer([record, dict(record, name="dal lake")])


class TestLocationSearchIndex:
    """Tests for search matching and ordering."""

    def setup_method(self) -> None:
        self.index = LocationSearchIndex(entries=get_gazetteer(), min_query_length=3)

    def test_empty_query_returns_nothing(self) -> None:
        assert self.index.search("") == []

    def test_short_query_returns_nothing(self) -> None:
        assert self.index.search("ab") == []
        assert self.index.search("  a ") == []

    def test_ganges_matches_by_name(self) -> None:
        results = self.index.search("Ganges")

        assert [r.entry.name for r in results] == ["Ganges River"]
        assert results[0].rank == 1
        assert results[0].is_prefix is True

    def test_case_insensitive(self) -> None:
        assert [r.entry.name for r in self.index.search("gANGES")] == ["Ganges River"]

    def test_results_keep_dataset_order(self) -> None:
        results = self.index.search("port")

        assert [r.entry.name for r in results] == [
            "Mumbai Port",
            "Kolkata Port",
            "Chennai Port",
            "Cochin Port",
        ]
        assert [r.rank for r in results] == [1, 2, 3, 4]

    def test_lake_matches_lakes(self) -> None:
        names = [r.entry.name for r in self.index.search("Lake")]
        assert names == ["Dal Lake", "Vembanad Lake"]

    def test_substring_inside_name(self) -> None:
        results = self.index.search("bengal")

        assert [r.entry.name for r in results] == ["Bay of Bengal"]
        assert results[0].is_prefix is False

    def test_category_match(self) -> None:
        results = self.index.search("sea")

        assert [r.entry.name for r in results] == ["Arabian Sea", "Bay of Bengal"]
        assert results[1].matched_on == "category"

    def test_category_match_can_be_disabled(self) -> None:
        index = LocationSearchIndex(entries=get_gazetteer(), match_category=False)
        assert [r.entry.name for r in index.search("sea")] == ["Arabian Sea"]

    def test_lookup_distinguishes_idle_and_no_results(self) -> None:
        idle = self.index.lookup("ab")
        none = self.index.lookup("Thames")
        found = self.index.lookup("Dal")

        assert idle.status == SearchStatus.IDLE
        assert none.status == SearchStatus.NO_RESULTS
        assert none.results == []
        assert found.status == SearchStatus.RESULTS
        assert found.results[0].entry.name == "Dal Lake"

    def test_presets(self) -> None:
        assert [r.entry.name for r in self.index.preset("Rivers").results] == ["Ganges River"]
        assert len(self.index.preset("Ports").results) == 4
        assert self.index.preset("Oceans").status == SearchStatus.IDLE

    def test_result_for_exact_name(self) -> None:
        result = self.index.result_for("  mumbai port ")

        assert result is not None
        assert result.entry.name == "Mumbai Port"
        assert result.rank == 1

    def test_result_for_requires_full_name(self) -> None:
        assert self.index.result_for("Mumbai") is None
        assert self.index.result_for("Atlantis") is None
