"""Domain errors raised by the registries and mapped to HTTP by the API layer."""

import uuid


class NotFoundError(Exception):
    """Base exception for unknown identifiers."""

    code = "NotFound"

    def __init__(self, entity: str, entity_id: uuid.UUID) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} '{entity_id}' not found.")


class LineNotFoundError(NotFoundError):
    """Raised when a line id does not resolve."""

    code = "LineNotFound"

    def __init__(self, line_id: uuid.UUID) -> None:
        super().__init__("Line", line_id)


class StationNotFoundError(NotFoundError):
    """Raised when a station id does not resolve."""

    def __init__(self, station_id: uuid.UUID) -> None:
        super().__init__("Station", station_id)


class StationInUseError(Exception):
    """Raised when deleting a station that a line's chain still references."""

    code = "StationInUse"

    def __init__(self, station_id: uuid.UUID, line_ids: list[uuid.UUID]) -> None:
        self.station_id = station_id
        self.line_ids = line_ids
        super().__init__(
            f"Station '{station_id}' is part of {len(line_ids)} line(s) and cannot be deleted. "
            "Remove it from those lines first."
        )


class ChainConflictError(Exception):
    """Raised when a concurrent writer changed the line's chain first."""

    code = "ChainConflict"

    def __init__(self, line_id: uuid.UUID) -> None:
        self.line_id = line_id
        super().__init__(f"Line '{line_id}' was modified concurrently. Reload the line and retry.")
