import enum
import uuid

from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from plotkeeper.database import Base
from plotkeeper.models._common import utcnow


class RowStatus(str, enum.Enum):
    # No transition graph: any status may follow any other.
    PLANNED = "planned"
    PLANTED = "planted"
    GROWING = "growing"
    HARVESTED = "harvested"
    REMOVED = "removed"


class Row(Base):
    __tablename__ = "rows"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    plot_id = Column(Uuid, ForeignKey("plots.id", ondelete="CASCADE"), nullable=True, index=True)
    name = Column(String(200), nullable=False)
    variety = Column(String(200), nullable=True)
    planted_date = Column(Date, nullable=True)
    expected_harvest = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
    position = Column(Integer, nullable=False, default=0)
    status = Column(
        Enum(RowStatus, name="row_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=RowStatus.PLANNED,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    plot = relationship("Plot")

    def __repr__(self):
        return f"<Row(id={self.id}, name='{self.name}', position={self.position})>"
