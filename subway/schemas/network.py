"""Pydantic schemas for stations, lines and sections."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Largest value the BIGINT distance column can store
MAX_SECTION_DISTANCE = 2**63 - 1

# ==================== Helper Functions ====================


def _validate_not_blank(value: str) -> str:
    """
    Strip surrounding whitespace and reject blank strings - reusable helper.

    Args:
        value: Raw string

    Returns:
        Stripped string

    Raises:
        ValueError: If the string is empty after stripping
    """
    stripped = value.strip()
    if not stripped:
        msg = "Value must not be blank"
        raise ValueError(msg)
    return stripped


# ==================== Request Schemas ====================


class CreateStationRequest(BaseModel):
    """Request to register a station."""

    name: str = Field(..., min_length=1, max_length=255, description="Station name (not unique)")

    @field_validator("name")
    @classmethod
    def validate_name(cls, name: str) -> str:
        """Reject blank names using shared helper."""
        return _validate_not_blank(name)


class CreateLineRequest(BaseModel):
    """Request to create a line. The line starts with no sections."""

    name: str = Field(..., min_length=1, max_length=255, description="Line name")
    color: str = Field(..., min_length=1, max_length=50, description="Display color (e.g., 'green')")

    @field_validator("name", "color")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        """Reject blank values using shared helper."""
        return _validate_not_blank(value)


class UpdateLineRequest(BaseModel):
    """Request to update a line's metadata. Omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=255)
    color: str | None = Field(None, min_length=1, max_length=50)

    @field_validator("name", "color")
    @classmethod
    def validate_not_blank(cls, value: str | None) -> str | None:
        """Reject blank values if provided using shared helper."""
        return None if value is None else _validate_not_blank(value)


class AddSectionRequest(BaseModel):
    """
    Request to extend a line by one section.

    Only the storage ceiling is enforced here. A non-positive distance is a
    chain rule violation reported as 400, not a schema error.
    """

    up_station_id: UUID = Field(..., description="Must be the line's current terminal (unless the line is empty)")
    down_station_id: UUID = Field(..., description="Must not already be on the line")
    distance: int = Field(..., le=MAX_SECTION_DISTANCE, description="Section length; must be positive")


# ==================== Response Schemas ====================


class StationResponse(BaseModel):
    """Station identity."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class LineResponse(BaseModel):
    """Line with its stations in path order."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    color: str
    distance: int = Field(0, description="Sum of section distances along the line")
    stations: list[StationResponse] = Field(default_factory=list, description="Stations from upstream to terminal")


class ErrorResponse(BaseModel):
    """Error body returned for domain rule violations."""

    detail: str
    code: str
