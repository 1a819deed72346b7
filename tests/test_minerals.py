"""Tests for the mineral reference table."""

import pytest

from catalog import (
    MINERALS,
    RARITY_LEVELS,
    UNKNOWN_MINERAL,
    get_mineral_data,
    known_minerals,
    minerals_by_rarity,
)


class TestMineralCatalog:
    def test_known_mineral(self):
        info = get_mineral_data("Rhodochrosite")

        assert info.formula == "MnCO₃"
        assert info.hardness == "3.5-4"
        assert info.rarity == "uncommon"

    def test_unknown_mineral_fallback(self):
        info = get_mineral_data("Unobtainium")

        assert info is UNKNOWN_MINERAL
        assert info.to_dict()["formula"] == "Unknown"
        assert info.icon == "💎"

    def test_lookup_is_case_sensitive(self):
        assert get_mineral_data("quartz") is UNKNOWN_MINERAL

    def test_all_rarities_are_known_levels(self):
        assert {info.rarity for info in MINERALS.values()} <= set(RARITY_LEVELS)

    def test_known_minerals_sorted(self):
        names = known_minerals()

        assert names == sorted(names)
        assert "Dioptase" in names

    def test_by_rarity(self):
        assert minerals_by_rarity("very-rare") == ["Hiddenite"]
        with pytest.raises(ValueError):
            minerals_by_rarity("legendary")
