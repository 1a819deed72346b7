"""GeoJSON projection of a collection summary for map layers."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Union

from .models import CollectionSummary

logger = logging.getLogger(__name__)


def summary_to_geojson(summary: Union[CollectionSummary, Mapping[str, Any]]) -> Dict[str, Any]:
    """Return a FeatureCollection with one Point per placed focus area.

    ``summary`` may be a :class:`CollectionSummary` or its JSON form as
    written by the ``summarize`` command.  Focus areas without coordinates
    are left out.
    """

    data = summary.to_dict() if isinstance(summary, CollectionSummary) else summary
    features: List[Dict[str, Any]] = []
    skipped = 0
    for area in data.get("focusAreas", []):
        coords = area.get("coordinates")
        if not coords:
            skipped += 1
            continue
        features.append(
            {
                "type": "Feature",
                "properties": {
                    "name": area.get("name"),
                    "specimenCount": area.get("specimenCount", 0),
                    "speciesCount": area.get("speciesCount", 0),
                    "intensity": area.get("intensity", 0.0),
                    # map SDK feature properties must be flat
                    "species": json.dumps(area.get("species", [])),
                },
                "geometry": {
                    "type": "Point",
                    "coordinates": [coords["longitude"], coords["latitude"]],
                },
            }
        )
    if skipped:
        logger.debug("Skipped %d focus areas without coordinates", skipped)
    return {"type": "FeatureCollection", "features": features}


__all__ = ["summary_to_geojson"]
