"""Segment Chain — keeps a line's sections a single simple path under add/remove.

Invariants:
    - At most one section per (up_station, down_station) pair
    - Sections form one simple path: one head (never a down station), one tail
      (never an up station); every station reachable from the head exactly once
    - A chain with one section cannot be emptied by remove()
    - Every precondition is checked before the collection is touched: a failed
      add()/remove() leaves the chain unchanged

Design Decisions:
    - Unordered list of edges + linear scans: lines hold a handful of stations,
      so no head/tail index is maintained
    - Replacement over mutation: a split or splice swaps in a new Section value
      at the same list position
    - Stations compared by id (Station.__eq__), never by object identity
"""

from typing import Iterable, Iterator

from subway.core.domain_types import ChainPosition, Distance, SplitKind
from subway.core.errors import (
    ChainEmptyError,
    DuplicateSegmentError,
    NotPossibleRemoveError,
    SegmentNotFoundError,
    StationsAlreadyExistError,
    StationsNoExistError,
)
from subway.core.section import Section, Station


class Sections:
    """Segment chain of one line."""

    def __init__(self, sections: Iterable[Section] = ()):
        self._sections: list[Section] = list(sections)

    @classmethod
    def of(cls, *sections: Section) -> "Sections":
        """Build a chain by adding sections one by one (all add() rules apply)."""
        chain = cls()
        for section in sections:
            chain.add(section)
        return chain

    @classmethod
    def empty(cls) -> "Sections":
        return cls()

    # ─── Queries ─────────────────────────────────────────────────

    @property
    def sections(self) -> tuple[Section, ...]:
        """Snapshot in storage order."""
        return tuple(self._sections)

    @property
    def stations(self) -> set[Station]:
        return {s for section in self._sections for s in section.stations}

    def __len__(self) -> int:
        return len(self._sections)

    def __contains__(self, station: object) -> bool:
        return any(section.has_station(station) for section in self._sections)

    def __iter__(self) -> Iterator[Section]:
        """Sections in traversal order, head to tail."""
        if not self._sections:
            return iter(())
        return iter(self._walk())

    @property
    def head(self) -> Station:
        return self._first_section().up_station

    @property
    def tail(self) -> Station:
        return self._last_section().down_station

    def ordered_stations(self) -> tuple[Station, ...]:
        """Stations from head to tail. Length is len(self) + 1."""
        walked = self._walk()
        return (walked[0].up_station,) + tuple(s.down_station for s in walked)

    def position_of(self, station: Station) -> ChainPosition:
        if station not in self:
            raise SegmentNotFoundError(station.name, station.name)
        if station == self.head:
            return ChainPosition.HEAD
        if station == self.tail:
            return ChainPosition.TAIL
        return ChainPosition.INTERIOR

    def section_between(self, up: Station, down: Station) -> Section:
        """The single section joining two adjacent stations, in either direction."""
        for section in self._sections:
            if section.stations in ((up, down), (down, up)):
                return section
        raise SegmentNotFoundError(up.name, down.name)

    def distance_between(self, a: Station, b: Station) -> Distance:
        """Path distance between two stations on the chain, either direction."""
        if not self._sections or a not in self or b not in self:
            raise SegmentNotFoundError(a.name, b.name)
        ordered = self.ordered_stations()
        if a not in ordered or b not in ordered:
            # disconnected storage; the walk never reached one of them
            raise SegmentNotFoundError(a.name, b.name)
        start, end = sorted((ordered.index(a), ordered.index(b)))
        return Distance(sum(
            self.section_between(ordered[i], ordered[i + 1]).distance
            for i in range(start, end)
        ))

    # ─── Mutations ───────────────────────────────────────────────

    def add(self, section: Section) -> SplitKind:
        """Insert a section, splitting the overlapped one. Returns how it attached."""
        self._validate_addable(section)

        kind = SplitKind.EXTEND
        index, replacement = self._find_split(section)
        if replacement is not None:
            kind = (
                SplitKind.FRONT
                if replacement.down_station == self._sections[index].down_station
                else SplitKind.BACK
            )
            self._sections[index] = replacement
        self._sections.append(section)
        return kind

    def remove(self, station: Station) -> ChainPosition:
        """Drop a station, splicing its neighbours. Returns where it was."""
        if len(self._sections) == 1:
            raise NotPossibleRemoveError(
                "Line has only one section; it cannot be removed.",
            )
        if station not in self:
            raise NotPossibleRemoveError(
                f"Station '{station.name}' is not on this line.",
            )

        first = self._first_section()
        if first.up_station == station:
            self._sections.remove(first)
            return ChainPosition.HEAD

        last = self._last_section()
        if last.down_station == station:
            self._sections.remove(last)
            return ChainPosition.TAIL

        up_section = self._section_ending_at(station)
        down_section = self._section_starting_at(station)
        self._sections[self._sections.index(up_section)] = up_section.merge(down_section)
        self._sections.remove(down_section)
        return ChainPosition.INTERIOR

    # ─── Internals ───────────────────────────────────────────────

    def _validate_addable(self, section: Section) -> None:
        if any(s.same_endpoints(section) for s in self._sections):
            raise DuplicateSegmentError(
                section.up_station.name, section.down_station.name,
            )
        if not self._sections:
            return
        has_up = section.up_station in self
        has_down = section.down_station in self
        if has_up and has_down:
            raise StationsAlreadyExistError()
        if not has_up and not has_down:
            raise StationsNoExistError()

    def _find_split(self, section: Section) -> tuple[int, Section | None]:
        """Locate the section the new one overlaps and compute its shrunk value.

        Computed before anything is written so an InvalidDistanceError
        leaves the chain untouched.
        """
        for i, existing in enumerate(self._sections):
            if existing.up_station == section.up_station:
                return i, existing.shrink_from_front(section)
        for i, existing in enumerate(self._sections):
            if existing.down_station == section.down_station:
                return i, existing.shrink_from_back(section)
        return -1, None

    def _walk(self) -> list[Section]:
        """Follow up -> down links from the head section."""
        walked = [self._first_section()]
        remaining = len(self._sections) - 1
        while remaining > 0:
            following = self._find_starting_at(walked[-1].down_station)
            if following is None:
                break
            walked.append(following)
            remaining -= 1
        return walked

    def _first_section(self) -> Section:
        if not self._sections:
            raise ChainEmptyError()
        downs = {s.down_station for s in self._sections}
        for section in self._sections:
            if section.up_station not in downs:
                return section
        raise ChainEmptyError()

    def _last_section(self) -> Section:
        if not self._sections:
            raise ChainEmptyError()
        ups = {s.up_station for s in self._sections}
        for section in self._sections:
            if section.down_station not in ups:
                return section
        raise ChainEmptyError()

    def _find_starting_at(self, station: Station) -> Section | None:
        return next(
            (s for s in self._sections if s.up_station == station), None,
        )

    def _section_starting_at(self, station: Station) -> Section:
        section = self._find_starting_at(station)
        if section is None:
            raise NotPossibleRemoveError(
                f"Station '{station.name}' is not on this line.",
            )
        return section

    def _section_ending_at(self, station: Station) -> Section:
        section = next(
            (s for s in self._sections if s.down_station == station), None,
        )
        if section is None:
            raise NotPossibleRemoveError(
                f"Station '{station.name}' is not on this line.",
            )
        return section
