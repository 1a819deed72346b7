"""Reference data for minerals shown in specimen detail panels.

Lookups are exact, case-sensitive name matches.  Names outside the table
resolve to :data:`UNKNOWN_MINERAL` rather than raising.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List


@dataclass(frozen=True)
class MineralInfo:
    formula: str
    system: str
    hardness: str
    color: str
    icon: str
    rarity: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


UNKNOWN_MINERAL = MineralInfo("Unknown", "Unknown", "Unknown", "Unknown", "💎", "common")

MINERALS: Dict[str, MineralInfo] = {
    "Amethyst": MineralInfo("SiO₂", "Hexagonal", "7", "Purple", "💜", "common"),
    "Citrine": MineralInfo("SiO₂", "Hexagonal", "7", "Yellow", "💛", "common"),
    "Rose Quartz": MineralInfo("SiO₂", "Hexagonal", "7", "Pink", "🌸", "common"),
    "Smoky Quartz": MineralInfo("SiO₂", "Hexagonal", "7", "Gray-Brown", "🖤", "common"),
    "Clear Quartz": MineralInfo("SiO₂", "Hexagonal", "7", "Colorless", "🤍", "common"),
    "Rhodochrosite": MineralInfo("MnCO₃", "Hexagonal", "3.5-4", "Pink-Red", "❤️", "uncommon"),
    "Purple Fluorite": MineralInfo("CaF₂", "Cubic", "4", "Purple", "💜", "common"),
    "Green Fluorite": MineralInfo("CaF₂", "Cubic", "4", "Green", "💚", "common"),
    "Emerald": MineralInfo("Be₃Al₂Si₆O₁₈", "Hexagonal", "7.5-8", "Green", "💚", "rare"),
    "Hiddenite": MineralInfo("LiAlSi₂O₆", "Monoclinic", "6.5-7", "Green", "💚", "very-rare"),
    "Kunzite": MineralInfo("LiAlSi₂O₆", "Monoclinic", "6.5-7", "Pink", "🌸", "rare"),
    "Aquamarine": MineralInfo("Be₃Al₂Si₆O₁₈", "Hexagonal", "7.5-8", "Blue", "💙", "uncommon"),
    "Turquoise": MineralInfo("CuAl₆(PO₄)₄(OH)₈·4H₂O", "Triclinic", "5-6", "Blue-Green", "🐚", "uncommon"),
    "Chrysocolla": MineralInfo("Cu₂H₂Si₂O₅(OH)₄", "Orthorhombic", "2-4", "Blue-Green", "🌊", "common"),
    "Stilbite": MineralInfo("NaCa₂Al₅Si₁₃O₃₆·14H₂O", "Monoclinic", "3.5-4", "White-Pink", "🤍", "common"),
    "Heulandite": MineralInfo("Ca₄Al₈Si₂₈O₇₂·24H₂O", "Monoclinic", "3.5-4", "White-Red", "❤️", "common"),
    "Chabazite": MineralInfo("Ca₂Al₄Si₈O₂₄·12H₂O", "Hexagonal", "4-5", "White-Pink", "🌸", "uncommon"),
    "Prehnite": MineralInfo("Ca₂Al₂Si₃O₁₀(OH)₂", "Orthorhombic", "6-6.5", "Green", "💚", "common"),
    "Apophyllite": MineralInfo("KCa₄Si₈O₂₀(F,OH)·8H₂O", "Tetragonal", "4.5-5", "Colorless-White", "🤍", "common"),
    "Calcite": MineralInfo("CaCO₃", "Hexagonal", "3", "Variable", "🪨", "common"),
    "Agate": MineralInfo("SiO₂", "Hexagonal", "7", "Banded", "🎨", "common"),
    "Jasper": MineralInfo("SiO₂", "Hexagonal", "7", "Red-Brown", "🔴", "common"),
    "Petrified Wood": MineralInfo("SiO₂", "Hexagonal", "7", "Brown", "🪵", "common"),
    "Thunder Eggs": MineralInfo("SiO₂", "Hexagonal", "7", "Variable", "⚡", "uncommon"),
    "Pyrite": MineralInfo("FeS₂", "Cubic", "6-6.5", "Gold", "🟨", "common"),
    "Galena": MineralInfo("PbS", "Cubic", "2.5", "Silver-Gray", "⚫", "common"),
    "Sphalerite": MineralInfo("ZnS", "Cubic", "3.5-4", "Brown-Black", "🟤", "common"),
    "Morganite": MineralInfo("Be₃Al₂Si₆O₁₈", "Hexagonal", "7.5-8", "Pink", "🌸", "uncommon"),
    "Beryl": MineralInfo("Be₃Al₂Si₆O₁₈", "Hexagonal", "7.5-8", "Variable", "💎", "uncommon"),
    "Chalcedony": MineralInfo("SiO₂", "Hexagonal", "7", "Blue-White", "💎", "common"),
    "Carnelian": MineralInfo("SiO₂", "Hexagonal", "7", "Orange-Red", "🔶", "common"),
    "Chrysoprase": MineralInfo("SiO₂", "Hexagonal", "7", "Green", "💚", "common"),
    "Bloodstone": MineralInfo("SiO₂", "Hexagonal", "7", "Green-Red", "🩸", "common"),
    "Moss Agate": MineralInfo("SiO₂", "Hexagonal", "7", "Green-White", "🌿", "common"),
    "Garnet": MineralInfo("X₃Y₂(SiO₄)₃", "Cubic", "6.5-7.5", "Red", "💎", "common"),
    "Ruby": MineralInfo("Al₂O₃", "Hexagonal", "9", "Red", "💎", "rare"),
    "Sapphire": MineralInfo("Al₂O₃", "Hexagonal", "9", "Blue", "💎", "rare"),
    "Moonstone": MineralInfo("KAlSi₃O₈", "Monoclinic", "6", "White-Blue", "🌙", "uncommon"),
    "Sunstone": MineralInfo("NaAlSi₃O₈", "Triclinic", "6", "Orange", "☀️", "uncommon"),
    "Quartz": MineralInfo("SiO₂", "Hexagonal", "7", "Clear", "💎", "common"),
    "Azurite": MineralInfo("Cu₃(CO₃)₂(OH)₂", "Monoclinic", "3.5-4", "Blue", "💙", "uncommon"),
    "Malachite": MineralInfo("Cu₂CO₃(OH)₂", "Monoclinic", "3.5-4", "Green", "💚", "common"),
    "Cuprite": MineralInfo("Cu₂O", "Cubic", "3.5-4", "Red", "🔴", "uncommon"),
    "Wulfenite": MineralInfo("PbMoO₄", "Tetragonal", "3", "Orange-Yellow", "🟠", "uncommon"),
    "Vanadinite": MineralInfo("Pb₅(VO₄)₃Cl", "Hexagonal", "3", "Red-Orange", "🔶", "uncommon"),
    "Dioptase": MineralInfo("CuSiO₃·H₂O", "Hexagonal", "5", "Green", "💚", "rare"),
}

RARITY_LEVELS = ("common", "uncommon", "rare", "very-rare")


def get_mineral_data(name: str) -> MineralInfo:
    """Return reference data for ``name`` or :data:`UNKNOWN_MINERAL`."""
    return MINERALS.get(name, UNKNOWN_MINERAL)


def known_minerals() -> List[str]:
    return sorted(MINERALS)


def minerals_by_rarity(rarity: str) -> List[str]:
    """Return table names with the given rarity, sorted."""
    if rarity not in RARITY_LEVELS:
        raise ValueError(f"Unknown rarity {rarity!r}; expected one of {', '.join(RARITY_LEVELS)}")
    return sorted(name for name, info in MINERALS.items() if info.rarity == rarity)


__all__ = [
    "MINERALS",
    "MineralInfo",
    "RARITY_LEVELS",
    "UNKNOWN_MINERAL",
    "get_mineral_data",
    "known_minerals",
    "minerals_by_rarity",
]
