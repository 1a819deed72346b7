from .minerals import (
    MINERALS,
    RARITY_LEVELS,
    UNKNOWN_MINERAL,
    MineralInfo,
    get_mineral_data,
    known_minerals,
    minerals_by_rarity,
)

__all__ = [
    "MINERALS",
    "MineralInfo",
    "RARITY_LEVELS",
    "UNKNOWN_MINERAL",
    "get_mineral_data",
    "known_minerals",
    "minerals_by_rarity",
]
