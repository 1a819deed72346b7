from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ResolutionFailure(Exception):
    """Network or parse failure while geocoding a location.

    The resolver catches this itself and records the location as
    unresolved; it never reaches the aggregator.
    """

    location: str
    reason: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.location}: {self.reason}"


__all__ = ["ResolutionFailure"]
