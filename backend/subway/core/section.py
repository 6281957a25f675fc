"""Station & Section Values — immutable building blocks of a segment chain.

Invariants:
    - Station equality and hashing use the id only (name is display data)
    - Section.distance > 0 and up_station != down_station, checked on construction
    - shrink_from_front / shrink_from_back / merge return NEW values; nothing mutates

Design Decisions:
    - Frozen dataclasses: the chain swaps whole values, which keeps
      Sections' invariant checks testable without an ORM
    - Section.id is optional and survives shrink/merge so the shell can update
      the same row instead of delete + insert
"""

from dataclasses import dataclass, field, replace

from subway.core.domain_types import StationId, SectionId
from subway.core.errors import InvalidDistanceError, InvalidSectionError


@dataclass(frozen=True)
class Station:
    """A stop, identified by id. Owned outside the chain."""
    id: StationId
    name: str = field(default="", compare=False)


@dataclass(frozen=True)
class Section:
    """Directed, distance-weighted edge between two stations of one line."""
    up_station: Station
    down_station: Station
    distance: int
    id: SectionId | None = field(default=None, compare=False)

    def __post_init__(self):
        if self.distance <= 0:
            raise InvalidDistanceError(self.distance)
        if self.up_station == self.down_station:
            raise InvalidSectionError(
                f"Up and down station must differ (got '{self.up_station.name}' twice).",
            )

    @property
    def stations(self) -> tuple[Station, Station]:
        return (self.up_station, self.down_station)

    def has_station(self, station: Station) -> bool:
        return station == self.up_station or station == self.down_station

    def same_endpoints(self, other: "Section") -> bool:
        return (
            self.up_station == other.up_station
            and self.down_station == other.down_station
        )

    def shrink_from_front(self, inserted: "Section") -> "Section":
        """Give the leading part to `inserted`: result starts at inserted.down_station."""
        return replace(
            self,
            up_station=inserted.down_station,
            distance=self._remaining(inserted),
        )

    def shrink_from_back(self, inserted: "Section") -> "Section":
        """Give the trailing part to `inserted`: result ends at inserted.up_station."""
        return replace(
            self,
            down_station=inserted.up_station,
            distance=self._remaining(inserted),
        )

    def merge(self, following: "Section") -> "Section":
        """Absorb the next section: self.up -> following.down, distances summed."""
        return replace(
            self,
            down_station=following.down_station,
            distance=self.distance + following.distance,
        )

    def _remaining(self, inserted: "Section") -> int:
        remaining = self.distance - inserted.distance
        if remaining <= 0:
            raise InvalidDistanceError(remaining)
        return remaining
