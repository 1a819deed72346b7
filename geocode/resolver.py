"""Location resolver strategies.

``StaticResolver`` looks country names up in a fixed table.
``NominatimResolver`` queries the OpenStreetMap Nominatim search API one
location at a time, caches every outcome and sleeps a fixed delay between
specimens so that no more than one request is ever in flight.
"""

from __future__ import annotations

import http.client
import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Literal, Mapping, Optional, Tuple
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from collection.models import Coordinates
from config import PipelineConfig

from .cache import MISSING, GeocodeCache
from .countries import COUNTRY_COORDINATES
from .errors import ResolutionFailure

DEFAULT_GEOCODE_ENDPOINT = "https://nominatim.openstreetmap.org/search"
DEFAULT_TIMEOUT = 10.0
DEFAULT_DELAY_SECONDS = 1.0
DEFAULT_USER_AGENT = "mineral-globe-data/0.1"

ThrottlePolicy = Literal["per_specimen", "per_request"]


class StaticResolver:
    """Resolve country names against a closed coordinate table."""

    scope: Literal["country", "location"] = "country"

    def __init__(self, table: Optional[Mapping[str, Tuple[float, float]]] = None):
        source = COUNTRY_COORDINATES if table is None else table
        self._table = {
            name: Coordinates(latitude=lat, longitude=lon) for name, (lat, lon) in source.items()
        }

    def resolve(self, location: str) -> Optional[Coordinates]:
        return self._table.get(location)

    def after_specimen(self) -> None:
        return None


@dataclass
class NominatimResolver:
    """Sequential, cached client for the Nominatim search endpoint."""

    endpoint: str = DEFAULT_GEOCODE_ENDPOINT
    cache: GeocodeCache = field(default_factory=GeocodeCache)
    delay_seconds: float = DEFAULT_DELAY_SECONDS
    timeout: float | None = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    throttle_policy: ThrottlePolicy = "per_specimen"
    sleep: Callable[[float], None] = time.sleep
    lookups: int = 0
    _requested_since_sleep: bool = False
    _logger: Optional[logging.Logger] = None

    scope: Literal["country", "location"] = "location"

    def __post_init__(self):
        if self._logger is None:
            self._logger = logging.getLogger(__name__)

    @classmethod
    def from_config(cls, cfg: PipelineConfig, cache: GeocodeCache) -> "NominatimResolver":
        """Create a resolver from validated configuration."""
        resolver_cfg = cfg.resolver
        return cls(
            endpoint=resolver_cfg.geocode_endpoint,
            cache=cache,
            delay_seconds=cfg.rate_limit_delay,
            timeout=resolver_cfg.timeout,
            user_agent=resolver_cfg.user_agent,
            throttle_policy=resolver_cfg.throttle_policy,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _request_json(self, location: str) -> Any:
        """Fetch the best match for ``location`` and decode the JSON body."""
        url = f"{self.endpoint}?{urlencode({'format': 'json', 'q': location, 'limit': 1})}"
        request = Request(url, headers={"User-Agent": self.user_agent})
        self.lookups += 1
        self._requested_since_sleep = True
        try:
            with urlopen(request, timeout=self.timeout) as resp:
                return json.load(resp)
        # URLError, timeouts and connection resets are OSErrors; bad bodies are ValueErrors
        except (OSError, http.client.HTTPException, ValueError) as exc:
            raise ResolutionFailure(location, str(exc)) from exc

    @staticmethod
    def _parse_match(location: str, data: Any) -> Optional[Coordinates]:
        if not isinstance(data, list):
            raise ResolutionFailure(location, f"unexpected response type {type(data).__name__}")
        if not data:
            return None
        best: Dict[str, Any] = data[0]
        try:
            return Coordinates(
                latitude=float(best["lat"]),
                longitude=float(best["lon"]),
                displayName=best.get("display_name"),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ResolutionFailure(location, f"unparseable match: {exc}") from exc

    def _geocode(self, location: str) -> Optional[Coordinates]:
        try:
            coords = self._parse_match(location, self._request_json(location))
        except ResolutionFailure as exc:
            self._logger.warning("Error geocoding %s: %s", location, exc.reason)
            return None
        if coords is None:
            self._logger.info("No coordinates found for: %s", location)
        else:
            self._logger.info(
                "Geocoded: %s -> %.4f, %.4f", location, coords.latitude, coords.longitude
            )
        return coords

    # ------------------------------------------------------------------
    # LocationResolver
    # ------------------------------------------------------------------
    def resolve(self, location: str) -> Optional[Coordinates]:
        """Return cached or freshly geocoded coordinates for ``location``.

        Failures are cached as unresolved and never retried within a run.
        """

        cached = self.cache.get(location, default=MISSING)
        if cached is not MISSING:
            self._logger.debug("Geocode cache hit: %s", location)
            return cached

        coords = self._geocode(location)
        self.cache.set(location, coords)
        return coords

    def after_specimen(self) -> None:
        """Sleep the configured delay according to the throttle policy."""
        if self.throttle_policy == "per_specimen" or self._requested_since_sleep:
            self.sleep(self.delay_seconds)
        self._requested_since_sleep = False


def create_resolver(cfg: PipelineConfig, cache: Optional[GeocodeCache] = None):
    """Return the resolver selected by ``resolver.strategy``."""
    if cfg.resolver.strategy == "external":
        return NominatimResolver.from_config(cfg, cache if cache is not None else GeocodeCache())
    return StaticResolver()


__all__ = [
    "DEFAULT_DELAY_SECONDS",
    "DEFAULT_GEOCODE_ENDPOINT",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "NominatimResolver",
    "StaticResolver",
    "create_resolver",
]
