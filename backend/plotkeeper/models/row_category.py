import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from plotkeeper.database import Base
from plotkeeper.models._common import DEFAULT_CATEGORY_COLOR, utcnow


class RowCategory(Base):
    __tablename__ = "row_categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    color = Column(String(7), nullable=False, default=DEFAULT_CATEGORY_COLOR)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return f"<RowCategory(id={self.id}, name='{self.name}')>"


class RowCategoryAssignment(Base):
    """Many-to-many link between a row and a row category."""

    __tablename__ = "row_category_assignments"
    __table_args__ = (
        UniqueConstraint("row_id", "category_id", name="uq_row_category_assignment"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    row_id = Column(Uuid, ForeignKey("rows.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Uuid, ForeignKey("row_categories.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    category = relationship("RowCategory")
