"""
Section chain rules for a single line.

A line's route is an ordered list of directed sections where each section's
down station is the next section's up station. The chain only ever grows or
shrinks at its downstream end, so it stays a simple path: no branches, no
cycles, and no station entered twice.

Everything here is pure. The chain wraps the caller's list (for example the
``Line.sections`` relationship) and mutates it in place only after every rule
has passed, so a rejected call leaves the list exactly as it was.
"""

from __future__ import annotations

import uuid
from collections.abc import MutableSequence
from typing import Generic, Protocol, TypeVar


class SectionLike(Protocol):
    """Anything with the three fields the chain rules look at."""

    up_station_id: uuid.UUID
    down_station_id: uuid.UUID
    distance: int


SectionT = TypeVar("SectionT", bound=SectionLike)


class SectionChainError(Exception):
    """Base exception for rejected chain mutations."""

    code = "SectionChainError"


class InvalidUpStationError(SectionChainError):
    """Raised when a new section does not start at the line's terminal."""

    code = "InvalidUpStation"

    def __init__(self, up_station_id: uuid.UUID, terminal_station_id: uuid.UUID) -> None:
        self.up_station_id = up_station_id
        self.terminal_station_id = terminal_station_id
        super().__init__(
            f"Up station '{up_station_id}' must be the line's terminal station '{terminal_station_id}'."
        )


class DuplicateDownStationError(SectionChainError):
    """Raised when the new down station is already on the line."""

    code = "DuplicateDownStation"

    def __init__(self, down_station_id: uuid.UUID) -> None:
        self.down_station_id = down_station_id
        super().__init__(f"Down station '{down_station_id}' is already registered on the line.")


class InvalidDistanceError(SectionChainError):
    """Raised when a section distance is not a positive integer."""

    code = "InvalidDistance"

    def __init__(self, distance: int) -> None:
        self.distance = distance
        super().__init__(f"Section distance must be positive. Got {distance}.")


class ChainTooShortToShrinkError(SectionChainError):
    """Raised when removing from a chain with fewer than two sections."""

    code = "ChainTooShortToShrink"

    def __init__(self, section_count: int) -> None:
        self.section_count = section_count
        super().__init__(
            f"A line must keep at least one section; it currently has {section_count}."
        )


class NotTerminalStationError(SectionChainError):
    """Raised when removing a station other than the line's terminal."""

    code = "NotTerminalStation"

    def __init__(self, station_id: uuid.UUID, terminal_station_id: uuid.UUID) -> None:
        self.station_id = station_id
        self.terminal_station_id = terminal_station_id
        super().__init__(
            f"Only the terminal station '{terminal_station_id}' can be removed, not '{station_id}'."
        )


def ordered_station_ids(sections: list[SectionLike]) -> list[uuid.UUID]:
    """
    Derive the station path from an ordered list of sections.

    Examples:
        >>> ordered_station_ids([])
        []

        >>> ordered_station_ids([Section(A, B, 10), Section(B, C, 20)])
        [A, B, C]
    """
    if not sections:
        return []
    return [sections[0].up_station_id, *(section.down_station_id for section in sections)]


class SectionChain(Generic[SectionT]):
    """Ordered, directed path of sections for one line."""

    def __init__(self, sections: MutableSequence[SectionT]) -> None:
        self._sections = sections

    def __len__(self) -> int:
        return len(self._sections)

    @property
    def is_empty(self) -> bool:
        return not self._sections

    @property
    def terminal_station_id(self) -> uuid.UUID | None:
        """Down station of the last section, or None for an empty chain."""
        return self._sections[-1].down_station_id if self._sections else None

    @property
    def station_ids(self) -> list[uuid.UUID]:
        return ordered_station_ids(list(self._sections))

    @property
    def total_distance(self) -> int:
        return sum(section.distance for section in self._sections)

    def add_section(self, section: SectionT) -> None:
        """
        Append a section at the downstream end of the chain.

        Rules are checked in order and the first failure wins:
        the up station must be the current terminal (skipped for an empty
        chain), the down station must not already be on the path, and the
        distance must be positive.

        Raises:
            InvalidUpStationError: Up station is not the terminal
            DuplicateDownStationError: Down station already on the line
            InvalidDistanceError: Distance is zero or negative
        """
        terminal = self.terminal_station_id
        if terminal is not None and section.up_station_id != terminal:
            raise InvalidUpStationError(section.up_station_id, terminal)

        # On an empty chain the up station is about to join the path too
        occupied = set(self.station_ids) if terminal is not None else {section.up_station_id}
        if section.down_station_id in occupied:
            raise DuplicateDownStationError(section.down_station_id)

        if section.distance <= 0:
            raise InvalidDistanceError(section.distance)

        self._sections.append(section)

    def remove_section(self, station_id: uuid.UUID) -> SectionT:
        """
        Detach the last section, provided ``station_id`` is the terminal.

        Returns:
            The removed section. Its up station is the new terminal.

        Raises:
            ChainTooShortToShrinkError: Chain has zero or one section
            NotTerminalStationError: Station is not the current terminal
        """
        if len(self._sections) <= 1:
            raise ChainTooShortToShrinkError(len(self._sections))

        terminal = self._sections[-1].down_station_id
        if station_id != terminal:
            raise NotTerminalStationError(station_id, terminal)

        return self._sections.pop()
