"""
Tests for location resolvers.

Note: Nominatim responses are mocked; no test reaches the network.
"""

import http.client
import io
import json
import socket
from unittest.mock import patch
from urllib.error import URLError

import pytest

from collection import Aggregator, Coordinates
from collection.models import Collector, RawCollection, Specimen
from config import build_config
from geocode import GeocodeCache, NominatimResolver, StaticResolver, create_resolver

LIMA_MATCH = [{"lat": "-12.0464", "lon": "-77.0428", "display_name": "Lima, Peru"}]


def _response(payload):
    """Build a urlopen() return value whose context manager yields ``payload``."""
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
    return io.BytesIO(body)


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def resolver(sleeps):
    return NominatimResolver(cache=GeocodeCache(), delay_seconds=1.0, sleep=sleeps.append)


class TestStaticResolver:
    def test_known_country(self):
        coords = StaticResolver().resolve("Peru")

        assert coords == Coordinates(latitude=-9.19, longitude=-75.0152)

    def test_unknown_country(self):
        assert StaticResolver().resolve("Atlantis") is None

    def test_custom_table(self):
        resolver = StaticResolver({"Namibia": (-22.9576, 18.4904)})

        assert resolver.resolve("Namibia").longitude == 18.4904
        assert resolver.resolve("Peru") is None

    def test_no_throttle(self):
        assert StaticResolver().after_specimen() is None


class TestNominatimResolver:
    @patch("geocode.resolver.urlopen")
    def test_resolves_match(self, mock_urlopen, resolver):
        mock_urlopen.return_value = _response(LIMA_MATCH)

        coords = resolver.resolve("Lima, Peru")

        assert coords == Coordinates(latitude=-12.0464, longitude=-77.0428, displayName="Lima, Peru")
        request = mock_urlopen.call_args.args[0]
        assert "q=Lima%2C+Peru" in request.full_url
        assert "limit=1" in request.full_url
        assert request.get_header("User-agent") == resolver.user_agent

    @patch("geocode.resolver.urlopen")
    def test_no_match_is_cached_as_unresolved(self, mock_urlopen, resolver):
        mock_urlopen.return_value = _response([])

        assert resolver.resolve("Nowhere") is None
        assert resolver.resolve("Nowhere") is None
        assert mock_urlopen.call_count == 1
        assert "Nowhere" in resolver.cache
        assert resolver.cache.get("Nowhere") is None

    @pytest.mark.parametrize(
        "error",
        [
            URLError("connection refused"),
            http.client.RemoteDisconnected("Remote end closed connection without response"),
            http.client.IncompleteRead(b"[{"),
            ConnectionResetError(104, "Connection reset by peer"),
            socket.timeout("timed out"),
        ],
    )
    @patch("geocode.resolver.urlopen")
    def test_transport_failure_is_not_raised(self, mock_urlopen, error, resolver):
        mock_urlopen.side_effect = error

        assert resolver.resolve("Lima, Peru") is None
        assert resolver.resolve("Lima, Peru") is None
        assert mock_urlopen.call_count == 1  # no retries

    @pytest.mark.parametrize(
        "payload",
        [b"<html>rate limited</html>", {"error": "bad"}, [{"lat": "x", "lon": "1"}], [{}]],
    )
    @patch("geocode.resolver.urlopen")
    def test_parse_failure_is_unresolved(self, mock_urlopen, payload, resolver):
        mock_urlopen.return_value = _response(payload)

        assert resolver.resolve("Lima, Peru") is None
        assert resolver.cache.get("Lima, Peru") is None

    @patch("geocode.resolver.urlopen")
    def test_cache_hit_skips_network(self, mock_urlopen, resolver):
        cached = Coordinates(latitude=1.0, longitude=2.0, displayName="Cached")
        resolver.cache.set("Lima, Peru", cached)

        assert resolver.resolve("Lima, Peru") == cached
        mock_urlopen.assert_not_called()
        assert resolver.lookups == 0

    @patch("geocode.resolver.urlopen")
    def test_shared_location_single_lookup_full_delay(self, mock_urlopen, resolver, sleeps):
        mock_urlopen.return_value = _response(LIMA_MATCH)
        collection = RawCollection(
            collector=Collector(),
            specimens=(
                Specimen(id="a", location="Lima, Peru"),
                Specimen(id="b", location="Lima, Peru"),
            ),
        )

        summary = Aggregator(intensity_scale=10, resolver=resolver).aggregate(collection)

        assert mock_urlopen.call_count == 1
        assert resolver.lookups == 1
        assert sleeps == [1.0, 1.0]
        assert summary.focus_areas[0].country == "Lima"
        assert summary.focus_areas[0].coordinates.displayName == "Lima, Peru"

    @patch("geocode.resolver.urlopen")
    def test_per_request_throttle(self, mock_urlopen, sleeps):
        mock_urlopen.return_value = _response(LIMA_MATCH)
        resolver = NominatimResolver(
            delay_seconds=0.5, throttle_policy="per_request", sleep=sleeps.append
        )

        resolver.resolve("Lima, Peru")
        resolver.after_specimen()
        resolver.resolve("Lima, Peru")
        resolver.after_specimen()

        assert sleeps == [0.5]

    @patch("geocode.resolver.urlopen")
    def test_idempotent_with_warm_cache(self, mock_urlopen, sleeps):
        mock_urlopen.side_effect = lambda *args, **kwargs: _response(LIMA_MATCH)
        cache = GeocodeCache()
        collection = RawCollection(
            collector=Collector(),
            specimens=(Specimen(location="Lima, Peru"), Specimen(location="Peru, Cusco")),
        )

        first = Aggregator(
            intensity_scale=10, resolver=NominatimResolver(cache=cache, sleep=sleeps.append)
        ).aggregate(collection)
        mock_urlopen.reset_mock()
        second = Aggregator(
            intensity_scale=10, resolver=NominatimResolver(cache=cache, sleep=sleeps.append)
        ).aggregate(collection)

        mock_urlopen.assert_not_called()
        assert first.to_dict() == second.to_dict()


class TestCreateResolver:
    def test_static_by_default(self):
        assert isinstance(create_resolver(build_config()), StaticResolver)

    def test_external_from_config(self, tmp_path):
        cfg = build_config(
            overrides={
                "resolver": {
                    "strategy": "external",
                    "rate_limit_delay_ms": 250,
                    "geocode_endpoint": "http://localhost:8080/search",
                }
            }
        )
        cache = GeocodeCache(tmp_path / "cache.json")

        resolver = create_resolver(cfg, cache)

        assert isinstance(resolver, NominatimResolver)
        assert resolver.delay_seconds == 0.25
        assert resolver.endpoint == "http://localhost:8080/search"
        assert resolver.cache is cache


class TestNominatimResolverFailuresInPipeline:
    @patch("geocode.resolver.urlopen")
    def test_reset_mid_body_keeps_run_going(self, mock_urlopen, sleeps):
        lima = io.BytesIO(json.dumps(LIMA_MATCH).encode())
        mock_urlopen.side_effect = [http.client.RemoteDisconnected("closed"), lima]
        resolver = NominatimResolver(sleep=sleeps.append)
        collection = RawCollection(
            collector=Collector(),
            specimens=(Specimen(location="Peru, Cusco"), Specimen(location="Lima, Peru")),
        )

        summary = Aggregator(intensity_scale=10, resolver=resolver).aggregate(collection)

        assert [a.country for a in summary.focus_areas] == ["Peru", "Lima"]
        assert summary.focus_areas[0].coordinates is None
        assert summary.focus_areas[1].coordinates.displayName == "Lima, Peru"
        assert resolver.cache.get("Peru, Cusco", default="absent") is None
