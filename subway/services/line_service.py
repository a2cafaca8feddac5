"""Line registry and line query service."""

import uuid

import structlog
from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from subway.core.errors import LineNotFoundError
from subway.core.telemetry import service_span
from subway.helpers.section_chain import SectionChain
from subway.models.network import Line, Section, Station
from subway.schemas.network import UpdateLineRequest

logger = structlog.get_logger(__name__)


def _with_chain(query: Select[tuple[Line]]) -> Select[tuple[Line]]:
    """Eager load a line's sections and both stations of every section."""
    return query.options(
        selectinload(Line.sections).selectinload(Section.up_station),
        selectinload(Line.sections).selectinload(Section.down_station),
    )


def stations_in_order(line: Line) -> list[Station]:
    """
    Project a line's chain onto its stations, upstream first.

    Requires the chain to be loaded (see ``LineService.get_line``). An empty
    chain yields an empty list.
    """
    if SectionChain(line.sections).is_empty:
        return []
    return [line.sections[0].up_station, *(section.down_station for section in line.sections)]


class LineService:
    """Service for managing lines and reading their station order."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize the line service.

        Args:
            db: Database session
        """
        self.db = db

    async def create_line(self, name: str, color: str) -> Line:
        """
        Create a line with an empty chain.

        Args:
            name: Line name
            color: Display color

        Returns:
            Created line with its (empty) chain loaded
        """
        line = Line(name=name, color=color)
        self.db.add(line)
        await self.db.commit()

        logger.info("line_created", line_id=str(line.id), name=name, color=color)
        return await self.get_line(line.id, load_chain=True)

    async def list_lines(self) -> list[Line]:
        """List all lines with their chains loaded, oldest first."""
        result = await self.db.execute(_with_chain(select(Line)).order_by(Line.created_at, Line.name))
        return list(result.scalars().all())

    async def get_line(
        self,
        line_id: uuid.UUID,
        *,
        load_chain: bool = False,
        for_update: bool = False,
    ) -> Line:
        """
        Resolve a line by ID.

        Args:
            line_id: Line UUID
            load_chain: Whether to eager load sections and their stations
            for_update: Whether to take a row lock on the line for the
                rest of the transaction (ignored by SQLite)

        Returns:
            Line object, refreshed from the database

        Raises:
            LineNotFoundError: If no line has this ID
        """
        query = select(Line).where(Line.id == line_id).execution_options(populate_existing=True)
        if load_chain:
            query = _with_chain(query)
        if for_update:
            query = query.with_for_update()

        result = await self.db.execute(query)

        if not (line := result.scalar_one_or_none()):
            raise LineNotFoundError(line_id)

        return line

    async def update_line(self, line_id: uuid.UUID, request: UpdateLineRequest) -> Line:
        """
        Update line metadata. The chain is untouched.

        Raises:
            LineNotFoundError: If no line has this ID
        """
        line = await self.get_line(line_id)

        if request.name is not None:
            line.name = request.name
        if request.color is not None:
            line.color = request.color

        await self.db.commit()

        logger.info("line_updated", line_id=str(line_id))
        return await self.get_line(line_id, load_chain=True)

    async def delete_line(self, line_id: uuid.UUID) -> None:
        """
        Delete a line together with its chain.

        Raises:
            LineNotFoundError: If no line has this ID
        """
        line = await self.get_line(line_id, load_chain=True)

        await self.db.delete(line)
        await self.db.commit()

        logger.info("line_deleted", line_id=str(line_id))

    async def get_ordered_stations(self, line_id: uuid.UUID) -> list[Station]:
        """
        Return the line's stations in path order.

        Raises:
            LineNotFoundError: If no line has this ID
        """
        with service_span("get_ordered_stations", "line-service", line_id=str(line_id)) as span:
            line = await self.get_line(line_id, load_chain=True)
            stations = stations_in_order(line)
            span.set_attribute("line.station_count", len(stations))
            return stations
