"""Record types for the collection summary pipeline.

``Specimen``, ``Collector`` and ``Coordinates`` are pydantic models that
mirror the JSON export field names.  ``CountryGroup`` is the mutable
bucket filled during a single aggregation pass, and ``FocusArea`` /
``CollectionSummary`` are the frozen values produced at the end of it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator


class Coordinates(BaseModel):
    """A resolved latitude/longitude pair."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    displayName: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class Specimen(BaseModel):
    """One cataloged mineral specimen from a collection export.

    Display fields (``imageUrl``, ``locality``, ``size``, ``dimensions``,
    ``description``) pass through whatever JSON value the export holds.
    ``minerals`` and ``images`` default to ``[]`` and ``properties`` to ``{}``
    when missing, ``null`` or of the wrong type; a non-text ``id`` or
    ``title`` becomes ``None``.  Only ``location`` and ``species`` are
    strictly typed, since grouping depends on them.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: Optional[str] = None
    title: Optional[str] = None
    imageUrl: Any = None
    location: Optional[str] = None
    locality: Any = None
    species: List[str] = []
    minerals: List[Any] = []
    size: Any = None
    dimensions: Any = None
    description: Any = None
    properties: Dict[str, Any] = {}
    images: List[Any] = []

    @field_validator("id", "title", mode="before")
    @classmethod
    def _text_or_none(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            return None
        return value

    @field_validator("species", mode="before")
    @classmethod
    def _default_species(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("minerals", "images", mode="before")
    @classmethod
    def _default_list(cls, value: Any) -> Any:
        return value if isinstance(value, list) else []

    @field_validator("properties", mode="before")
    @classmethod
    def _default_mapping(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}

    def to_dict(self, coordinates: Optional[Coordinates] = None) -> Dict[str, Any]:
        """Return the output form; unset optional fields are omitted."""
        data = self.model_dump(exclude_none=True)
        if coordinates is not None:
            data["coordinates"] = coordinates.to_dict()
        return data


class Collector(BaseModel):
    """Collector metadata, copied verbatim into the summary."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    name: Optional[str] = None
    url: Optional[str] = None
    collectorId: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


@dataclass
class CountryGroup:
    """Aggregation bucket for every specimen sharing a derived country."""

    country: str
    coordinates: Optional[Coordinates] = None
    specimens: List[Specimen] = field(default_factory=list)
    specimen_coordinates: List[Optional[Coordinates]] = field(default_factory=list)
    # dict keys keep first-seen order
    species: Dict[str, None] = field(default_factory=dict)

    @property
    def specimen_count(self) -> int:
        return len(self.specimens)

    def add(self, specimen: Specimen, coordinates: Optional[Coordinates] = None) -> None:
        self.specimens.append(specimen)
        self.specimen_coordinates.append(coordinates)
        for name in specimen.species:
            self.species[name] = None


@dataclass(frozen=True)
class FocusArea:
    """Output form of a :class:`CountryGroup`."""

    name: str
    country: str
    specimen_count: int
    species_count: int
    species: Tuple[str, ...]
    specimens: Tuple[Dict[str, Any], ...]
    coordinates: Optional[Coordinates]
    intensity: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "country": self.country,
            "specimenCount": self.specimen_count,
            "speciesCount": self.species_count,
            "species": list(self.species),
            "specimens": list(self.specimens),
            "coordinates": self.coordinates.to_dict() if self.coordinates else None,
            "intensity": self.intensity,
        }


@dataclass(frozen=True)
class CollectionSummary:
    """Final country-grouped view of a collection."""

    collector: Collector
    focus_areas: Tuple[FocusArea, ...]
    total_specimens: int
    total_species: int
    total_countries: int

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON shape consumed by the globe front-end."""

        return {
            "collector": self.collector.to_dict(),
            "focusAreas": [area.to_dict() for area in self.focus_areas],
            "totalSpecimens": self.total_specimens,
            "totalSpecies": self.total_species,
            "totalCountries": self.total_countries,
        }


@dataclass(frozen=True)
class RawCollection:
    """Loader output: ordered specimens plus collector metadata."""

    collector: Collector
    specimens: Tuple[Specimen, ...]


__all__ = [
    "CollectionSummary",
    "Collector",
    "Coordinates",
    "CountryGroup",
    "FocusArea",
    "RawCollection",
    "Specimen",
]
