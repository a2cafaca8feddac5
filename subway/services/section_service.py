"""Section chain mutations for a line."""

import uuid

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from subway.core.errors import ChainConflictError, NotFoundError
from subway.core.locks import line_lock
from subway.core.telemetry import service_span
from subway.helpers.section_chain import SectionChain, SectionChainError
from subway.models.network import Line, Section
from subway.services.line_service import LineService
from subway.services.station_service import StationService

logger = structlog.get_logger(__name__)


class SectionService:
    """
    Service for growing and shrinking a line's section chain.

    Every mutation runs under the line's in-process lock and a row lock on
    the line, and validates the whole request before touching the chain. A
    rejected request rolls the transaction back and re-raises the typed error
    for the API layer to map.
    """

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize the section service.

        Args:
            db: Database session
        """
        self.db = db
        self.line_service = LineService(db)
        self.station_service = StationService(db)

    async def add_section(
        self,
        line_id: uuid.UUID,
        up_station_id: uuid.UUID,
        down_station_id: uuid.UUID,
        distance: int,
    ) -> Line:
        """
        Extend the line at its terminal.

        Args:
            line_id: Line UUID
            up_station_id: Must equal the line's terminal unless the line is empty
            down_station_id: Must not already be on the line
            distance: Must be positive

        Returns:
            The line with its updated chain loaded

        Raises:
            LineNotFoundError: Unknown line
            StationNotFoundError: Unknown up or down station
            SectionChainError: Chain rule violated (see helpers.section_chain)
            ChainConflictError: A concurrent writer won the race
        """
        async with line_lock(line_id):
            with service_span("add_section", "section-service", line_id=str(line_id)) as span:
                try:
                    line = await self.line_service.get_line(line_id, load_chain=True, for_update=True)
                    await self.station_service.get_station(up_station_id)
                    await self.station_service.get_station(down_station_id)

                    chain = SectionChain(line.sections)
                    chain.add_section(
                        Section(
                            sequence=len(chain),
                            up_station_id=up_station_id,
                            down_station_id=down_station_id,
                            distance=distance,
                        )
                    )
                    await self.db.commit()
                except (NotFoundError, SectionChainError):
                    await self.db.rollback()
                    raise
                except IntegrityError:
                    await self.db.rollback()
                    raise ChainConflictError(line_id) from None

                span.set_attribute("chain.length", len(chain))

        logger.info(
            "section_added",
            line_id=str(line_id),
            up_station_id=str(up_station_id),
            down_station_id=str(down_station_id),
            distance=distance,
        )
        return await self.line_service.get_line(line_id, load_chain=True)

    async def remove_section(self, line_id: uuid.UUID, station_id: uuid.UUID) -> Line:
        """
        Detach the last section of the line.

        Args:
            line_id: Line UUID
            station_id: Must be the line's current terminal

        Returns:
            The line with its updated chain loaded

        Raises:
            LineNotFoundError: Unknown line
            StationNotFoundError: Unknown station
            SectionChainError: Chain rule violated (see helpers.section_chain)
            ChainConflictError: A concurrent writer won the race
        """
        async with line_lock(line_id):
            with service_span("remove_section", "section-service", line_id=str(line_id)) as span:
                try:
                    line = await self.line_service.get_line(line_id, load_chain=True, for_update=True)
                    await self.station_service.get_station(station_id)

                    chain = SectionChain(line.sections)
                    new_terminal_station_id = chain.remove_section(station_id).up_station_id
                    await self.db.commit()
                except (NotFoundError, SectionChainError):
                    await self.db.rollback()
                    raise
                except IntegrityError:
                    await self.db.rollback()
                    raise ChainConflictError(line_id) from None

                span.set_attribute("chain.length", len(chain))

        logger.info(
            "section_removed",
            line_id=str(line_id),
            station_id=str(station_id),
            new_terminal_station_id=str(new_terminal_station_id),
        )
        return await self.line_service.get_line(line_id, load_chain=True)
