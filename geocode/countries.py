"""Approximate centroids for the countries found in the sample collection."""

from __future__ import annotations

from typing import Dict, Tuple

COUNTRY_COORDINATES: Dict[str, Tuple[float, float]] = {
    "Brazil": (-14.235, -51.9253),
    "China": (35.8617, 104.1954),
    "Colombia": (4.5709, -74.2973),
    "USA": (39.8283, -98.5795),
    "Russia": (61.524, 105.3188),
    "Bolivia": (-16.2902, -63.5887),
    "Tajikistan": (38.861, 71.2761),
    "Germany": (51.1657, 10.4515),
    "Pakistan": (30.3753, 69.3451),
    "Peru": (-9.19, -75.0152),
}

__all__ = ["COUNTRY_COORDINATES"]
