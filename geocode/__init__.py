from .cache import MISSING, GeocodeCache
from .countries import COUNTRY_COORDINATES
from .errors import ResolutionFailure
from .protocols import LocationResolver
from .resolver import NominatimResolver, StaticResolver, create_resolver

__all__ = [
    "COUNTRY_COORDINATES",
    "GeocodeCache",
    "LocationResolver",
    "MISSING",
    "NominatimResolver",
    "ResolutionFailure",
    "StaticResolver",
    "create_resolver",
]
