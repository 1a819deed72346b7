from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from .errors import MalformedInputError
from .models import Collector, RawCollection, Specimen

logger = logging.getLogger(__name__)


def load_collection(data: Any) -> RawCollection:
    """Validate the top-level shape of a collection export.

    Parameters
    ----------
    data:
        Decoded JSON document.  It must be an object holding a
        ``specimens`` array and a ``collector`` object.

    Returns
    -------
    RawCollection
        Specimens in input order and the collector metadata.  Optional
        specimen fields are defaulted rather than rejected.

    Raises
    ------
    MalformedInputError
        If the document does not have the required shape.
    """

    if not isinstance(data, Mapping):
        raise MalformedInputError("not_an_object", "collection export must be a JSON object")
    raw_specimens = data.get("specimens")
    if not isinstance(raw_specimens, list):
        raise MalformedInputError("missing_specimens", "'specimens' must be an array")
    raw_collector = data.get("collector")
    if not isinstance(raw_collector, Mapping):
        raise MalformedInputError("missing_collector", "'collector' must be an object")

    specimens = []
    for index, raw in enumerate(raw_specimens):
        if not isinstance(raw, Mapping):
            raise MalformedInputError(
                "bad_specimen", f"specimens[{index}] must be an object, got {type(raw).__name__}"
            )
        try:
            specimens.append(Specimen.model_validate(raw))
        except ValidationError as exc:
            raise MalformedInputError("bad_specimen", f"specimens[{index}]: {exc}") from exc

    try:
        collector = Collector.model_validate(raw_collector)
    except ValidationError as exc:
        raise MalformedInputError("bad_collector", str(exc)) from exc

    logger.info("Loaded %d specimens", len(specimens))
    return RawCollection(collector=collector, specimens=tuple(specimens))


__all__ = ["load_collection"]
