"""Metro network models: stations, lines and the sections chaining them."""

import uuid

from sqlalchemy import BigInteger, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from subway.models.base import BaseModel


class Station(BaseModel):
    """A station. The id is its only identity; names may repeat."""

    __tablename__ = "stations"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        """String representation of the station."""
        return f"<Station(id={self.id}, name={self.name})>"


class Line(BaseModel):
    """A metro line owning one ordered chain of sections."""

    __tablename__ = "lines"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    color: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    # Relationships
    sections: Mapped[list["Section"]] = relationship(
        back_populates="line",
        cascade="all, delete-orphan",
        order_by="Section.sequence",
    )

    def __repr__(self) -> str:
        """String representation of the line."""
        return f"<Line(id={self.id}, name={self.name}, color={self.color})>"


class Section(BaseModel):
    """Directed, distance-weighted edge between two stations on a line."""

    __tablename__ = "sections"

    line_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("lines.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sequence: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    up_station_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("stations.id", ondelete="RESTRICT"),
        nullable=False,
    )
    down_station_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("stations.id", ondelete="RESTRICT"),
        nullable=False,
    )
    distance: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
    )

    # Relationships
    line: Mapped[Line] = relationship(back_populates="sections")
    up_station: Mapped[Station] = relationship(foreign_keys=[up_station_id])
    down_station: Mapped[Station] = relationship(foreign_keys=[down_station_id])

    __table_args__ = (
        UniqueConstraint("line_id", "sequence", name="uq_section_line_sequence"),
        UniqueConstraint("line_id", "down_station_id", name="uq_section_line_down_station"),
    )

    def __repr__(self) -> str:
        """String representation of the section."""
        return (
            f"<Section(line={self.line_id}, seq={self.sequence}, "
            f"{self.up_station_id}->{self.down_station_id}, distance={self.distance})>"
        )
