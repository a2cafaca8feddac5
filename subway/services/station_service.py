"""Station registry service."""

import uuid

import structlog
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from subway.core.errors import StationInUseError, StationNotFoundError
from subway.models.network import Section, Station

logger = structlog.get_logger(__name__)


class StationService:
    """Service for registering and resolving stations."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize the station service.

        Args:
            db: Database session
        """
        self.db = db

    async def create_station(self, name: str) -> Station:
        """
        Register a new station. Names are not required to be unique.

        Args:
            name: Station name

        Returns:
            Created station
        """
        station = Station(name=name)
        self.db.add(station)
        await self.db.commit()
        await self.db.refresh(station)

        logger.info("station_created", station_id=str(station.id), name=station.name)
        return station

    async def list_stations(self) -> list[Station]:
        """List all stations, oldest first."""
        result = await self.db.execute(select(Station).order_by(Station.created_at, Station.name))
        return list(result.scalars().all())

    async def get_station(self, station_id: uuid.UUID) -> Station:
        """
        Resolve a station by ID.

        Raises:
            StationNotFoundError: If no station has this ID
        """
        if not (station := await self.db.get(Station, station_id)):
            raise StationNotFoundError(station_id)
        return station

    async def delete_station(self, station_id: uuid.UUID) -> None:
        """
        Delete a station that no line references.

        Raises:
            StationNotFoundError: If no station has this ID
            StationInUseError: If any line's chain passes through the station
        """
        station = await self.get_station(station_id)

        result = await self.db.execute(
            select(Section.line_id)
            .where(or_(Section.up_station_id == station_id, Section.down_station_id == station_id))
            .distinct()
        )
        if line_ids := list(result.scalars().all()):
            raise StationInUseError(station_id, line_ids)

        await self.db.delete(station)
        await self.db.commit()

        logger.info("station_deleted", station_id=str(station_id))
