"""User-defined custom fields for rows: the schema and the per-row values."""
import enum
import uuid

from sqlalchemy import (
    JSON, Boolean, Column, DateTime, Enum, ForeignKey, Integer,
    String, UniqueConstraint, Uuid,
)
from sqlalchemy.orm import relationship

from plotkeeper.database import Base
from plotkeeper.models._common import utcnow


class FieldType(str, enum.Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    DROPDOWN = "dropdown"
    CHECKBOX = "checkbox"


class RowFieldDefinition(Base):
    __tablename__ = "row_field_definitions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    field_type = Column(
        Enum(FieldType, name="row_field_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    options = Column(JSON, nullable=True)  # dropdown choices, e.g. ["Drip", "Sprinkler"]
    is_required = Column(Boolean, nullable=False, default=False)
    display_order = Column(Integer, nullable=False, default=0, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return f"<RowFieldDefinition(id={self.id}, name='{self.name}', type={self.field_type})>"


class RowFieldValue(Base):
    """One value per (row, field definition) pair."""

    __tablename__ = "row_field_values"
    __table_args__ = (
        UniqueConstraint("row_id", "field_id", name="uq_row_field_value"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    row_id = Column(Uuid, ForeignKey("rows.id", ondelete="CASCADE"), nullable=False, index=True)
    field_id = Column(Uuid, ForeignKey("row_field_definitions.id", ondelete="CASCADE"), nullable=False, index=True)
    value = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    field_definition = relationship("RowFieldDefinition")
