"""Protocol for location resolver strategies.

A resolver turns a location string into :class:`Coordinates` or ``None``.
Not finding a location is an expected outcome, so implementations never
raise for it.
"""

from __future__ import annotations

from typing import Literal, Optional, Protocol

from collection.models import Coordinates


class LocationResolver(Protocol):
    """Strategy used by the aggregator to place country groups."""

    # "country" resolvers are queried once per new group with the country
    # name; "location" resolvers once per specimen with its full location.
    scope: Literal["country", "location"]

    def resolve(self, location: str) -> Optional[Coordinates]:
        """Return coordinates for ``location`` or ``None`` when unresolved."""
        ...

    def after_specimen(self) -> None:
        """Hook run after each specimen has been assigned to a group."""
        ...


__all__ = ["LocationResolver"]
