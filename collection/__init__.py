from .errors import MalformedInputError
from .models import (
    CollectionSummary,
    Collector,
    Coordinates,
    CountryGroup,
    FocusArea,
    RawCollection,
    Specimen,
)
from .loader import load_collection
from .aggregate import Aggregator, country_of, intensity_for, ranked_focus_areas
from .geojson import summary_to_geojson

__all__ = [
    "Aggregator",
    "CollectionSummary",
    "Collector",
    "Coordinates",
    "CountryGroup",
    "FocusArea",
    "MalformedInputError",
    "RawCollection",
    "Specimen",
    "country_of",
    "intensity_for",
    "load_collection",
    "ranked_focus_areas",
    "summary_to_geojson",
]
