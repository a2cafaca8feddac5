"""Stations API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from subway.core.database import get_db
from subway.models.network import Station
from subway.schemas.network import CreateStationRequest, ErrorResponse, StationResponse
from subway.services.station_service import StationService

router = APIRouter(prefix="/stations", tags=["stations"])

NOT_FOUND = {404: {"model": ErrorResponse}}


@router.post("", response_model=StationResponse, status_code=status.HTTP_201_CREATED)
async def create_station(
    request: CreateStationRequest,
    db: AsyncSession = Depends(get_db),
) -> Station:
    """
    Register a station.

    Args:
        request: Station creation request
        db: Database session

    Returns:
        Created station
    """
    return await StationService(db).create_station(request.name)


@router.get("", response_model=list[StationResponse])
async def list_stations(db: AsyncSession = Depends(get_db)) -> list[Station]:
    """List all stations."""
    return await StationService(db).list_stations()


@router.get("/{station_id}", response_model=StationResponse, responses=NOT_FOUND)
async def get_station(
    station_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Station:
    """
    Get a single station.

    Raises:
        StationNotFoundError: 404 if the station does not exist
    """
    return await StationService(db).get_station(station_id)


@router.delete(
    "/{station_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**NOT_FOUND, 409: {"model": ErrorResponse}},
)
async def delete_station(
    station_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    """
    Delete a station.

    Stations still on a line cannot be deleted; remove them from the line first.

    Raises:
        StationNotFoundError: 404 if the station does not exist
        StationInUseError: 409 if a line passes through the station
    """
    await StationService(db).delete_station(station_id)
