"""Group specimens by country and derive collection statistics.

Specimens are visited once, in input order.  Each specimen with a
non-blank ``location`` is assigned to the group of its country, the text
before the first comma.  Species are de-duplicated per group and across
the whole collection.  When every specimen has been placed the groups are
frozen into :class:`FocusArea` values, in order of first appearance, with
an ``intensity`` of ``min(specimenCount / K, 1.0)``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from .models import (
    CollectionSummary,
    Collector,
    CountryGroup,
    FocusArea,
    RawCollection,
    Specimen,
)

if TYPE_CHECKING:
    from geocode.protocols import LocationResolver

logger = logging.getLogger(__name__)


def country_of(location: str) -> str:
    """Return the country part of a ``"Country, Region"`` location.

    This is the text before the first comma.  A location with a blank
    leading part (``", Bahia"``) falls back to the first non-blank part.
    """
    country = location.split(",", 1)[0].strip()
    if country:
        return country
    return next((part.strip() for part in location.split(",") if part.strip()), "")


def intensity_for(specimen_count: int, scale: float) -> float:
    """Saturating linear weight in ``[0, 1]``."""
    return min(specimen_count / scale, 1.0)


class Aggregator:
    """Single-pass country aggregation of a specimen sequence.

    Parameters
    ----------
    intensity_scale:
        Divisor ``K`` of the intensity formula. Must be positive.
    resolver:
        Optional location resolver. Country-scoped resolvers are asked once
        per new group; location-scoped resolvers once per specimen, with the
        group taking the coordinates of the specimen that created it.
    collector_name:
        Overrides the collector ``name`` copied from the source.
    """

    def __init__(
        self,
        intensity_scale: float,
        resolver: Optional["LocationResolver"] = None,
        collector_name: Optional[str] = None,
    ):
        if intensity_scale <= 0:
            raise ValueError("intensity_scale must be positive")
        self.intensity_scale = intensity_scale
        self.resolver = resolver
        self.collector_name = collector_name

    def _resolve(self, location: str):
        return self.resolver.resolve(location) if self.resolver is not None else None

    def group(self, specimens: Iterable[Specimen]) -> Dict[str, CountryGroup]:
        """Assign specimens to country groups, keyed in first-appearance order."""
        groups: Dict[str, CountryGroup] = {}
        per_location = self.resolver is not None and self.resolver.scope == "location"

        for specimen in specimens:
            location = (specimen.location or "").strip()
            if not location:
                logger.debug("Skipping specimen %s without location", specimen.id)
                continue

            country = country_of(location)
            coordinates = self._resolve(location) if per_location else None

            group = groups.get(country)
            if group is None:
                group_coordinates = coordinates if per_location else self._resolve(country)
                group = groups[country] = CountryGroup(country, coordinates=group_coordinates)
            group.add(specimen, coordinates)

            if self.resolver is not None:
                self.resolver.after_specimen()

        return groups

    def summarize(self, groups: Dict[str, CountryGroup], collector: Collector) -> CollectionSummary:
        """Freeze ``groups`` into a :class:`CollectionSummary`."""
        all_species: Dict[str, None] = {}
        focus_areas: List[FocusArea] = []
        total_specimens = 0
        per_location = self.resolver is not None and self.resolver.scope == "location"

        for group in groups.values():
            total_specimens += group.specimen_count
            all_species.update(group.species)
            specimens = tuple(
                specimen.to_dict(coords if per_location else None)
                for specimen, coords in zip(group.specimens, group.specimen_coordinates)
            )
            focus_areas.append(
                FocusArea(
                    name=group.country,
                    country=group.country,
                    specimen_count=group.specimen_count,
                    species_count=len(group.species),
                    species=tuple(group.species),
                    specimens=specimens,
                    coordinates=group.coordinates,
                    intensity=intensity_for(group.specimen_count, self.intensity_scale),
                )
            )

        if self.collector_name is not None:
            collector = collector.model_copy(update={"name": self.collector_name})

        return CollectionSummary(
            collector=collector,
            focus_areas=tuple(focus_areas),
            total_specimens=total_specimens,
            total_species=len(all_species),
            total_countries=len(groups),
        )

    def aggregate(self, collection: RawCollection) -> CollectionSummary:
        """Group ``collection`` and return its summary."""
        logger.info(
            "Aggregating %d specimens (intensity scale K=%g)",
            len(collection.specimens),
            self.intensity_scale,
        )
        groups = self.group(collection.specimens)
        summary = self.summarize(groups, collection.collector)
        logger.info(
            "Total Specimens: %d | Total Species: %d | Total Countries: %d",
            summary.total_specimens,
            summary.total_species,
            summary.total_countries,
        )
        return summary


def ranked_focus_areas(summary: CollectionSummary) -> List[FocusArea]:
    """Return focus areas by specimen count, largest first, for display."""
    return sorted(summary.focus_areas, key=lambda area: area.specimen_count, reverse=True)


__all__ = [
    "Aggregator",
    "country_of",
    "intensity_for",
    "ranked_focus_areas",
]
