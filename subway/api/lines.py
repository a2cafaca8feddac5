"""Lines API endpoints, including section management."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from subway.core.database import get_db
from subway.helpers.section_chain import SectionChain
from subway.models.network import Line
from subway.schemas.network import (
    AddSectionRequest,
    CreateLineRequest,
    ErrorResponse,
    LineResponse,
    StationResponse,
    UpdateLineRequest,
)
from subway.services.line_service import LineService, stations_in_order
from subway.services.section_service import SectionService

router = APIRouter(prefix="/lines", tags=["lines"])

NOT_FOUND = {404: {"model": ErrorResponse}}
CHAIN_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


def build_line_response(line: Line) -> LineResponse:
    """Build the line body with stations in path order. The chain must be loaded."""
    return LineResponse(
        id=line.id,
        name=line.name,
        color=line.color,
        distance=SectionChain(line.sections).total_distance,
        stations=[StationResponse.model_validate(station) for station in stations_in_order(line)],
    )


# ==================== Line Endpoints ====================


@router.post("", response_model=LineResponse, status_code=status.HTTP_201_CREATED)
async def create_line(
    request: CreateLineRequest,
    db: AsyncSession = Depends(get_db),
) -> LineResponse:
    """
    Create a line.

    The line starts without sections; its first section can join any two
    stations.

    Args:
        request: Line creation request
        db: Database session

    Returns:
        Created line
    """
    line = await LineService(db).create_line(request.name, request.color)
    return build_line_response(line)


@router.get("", response_model=list[LineResponse])
async def list_lines(db: AsyncSession = Depends(get_db)) -> list[LineResponse]:
    """List all lines with their stations in path order."""
    lines = await LineService(db).list_lines()
    return [build_line_response(line) for line in lines]


@router.get("/{line_id}", response_model=LineResponse, responses=NOT_FOUND)
async def get_line(
    line_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> LineResponse:
    """
    Get a line with its stations in path order.

    Raises:
        LineNotFoundError: 404 if the line does not exist
    """
    line = await LineService(db).get_line(line_id, load_chain=True)
    return build_line_response(line)


@router.patch("/{line_id}", response_model=LineResponse, responses=NOT_FOUND)
async def update_line(
    line_id: UUID,
    request: UpdateLineRequest,
    db: AsyncSession = Depends(get_db),
) -> LineResponse:
    """
    Update a line's name and/or color.

    Raises:
        LineNotFoundError: 404 if the line does not exist
    """
    line = await LineService(db).update_line(line_id, request)
    return build_line_response(line)


@router.delete("/{line_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
async def delete_line(
    line_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    """
    Delete a line and all of its sections. Stations are kept.

    Raises:
        LineNotFoundError: 404 if the line does not exist
    """
    await LineService(db).delete_line(line_id)


# ==================== Section Endpoints ====================


@router.post("/{line_id}/sections", response_model=LineResponse, responses=CHAIN_ERRORS)
async def add_section(
    line_id: UUID,
    request: AddSectionRequest,
    db: AsyncSession = Depends(get_db),
) -> LineResponse:
    """
    Extend a line at its terminal station.

    Args:
        line_id: Line UUID
        request: Up station, down station and distance of the new section
        db: Database session

    Returns:
        The line with its updated station order

    Raises:
        SectionChainError: 400 if the up station is not the terminal, the down
            station is already on the line, or the distance is not positive
        NotFoundError: 404 if the line or either station does not exist
    """
    line = await SectionService(db).add_section(
        line_id,
        request.up_station_id,
        request.down_station_id,
        request.distance,
    )
    return build_line_response(line)


@router.delete("/{line_id}/sections", response_model=LineResponse, responses=CHAIN_ERRORS)
async def remove_section(
    line_id: UUID,
    station_id: UUID = Query(..., description="The line's current terminal station"),
    db: AsyncSession = Depends(get_db),
) -> LineResponse:
    """
    Remove the last section of a line.

    Raises:
        SectionChainError: 400 if the line has a single section or the station
            is not the terminal
        NotFoundError: 404 if the line or station does not exist
    """
    line = await SectionService(db).remove_section(line_id, station_id)
    return build_line_response(line)
