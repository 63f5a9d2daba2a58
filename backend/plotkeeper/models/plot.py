"""Plots and the categories they can be tagged with."""
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from plotkeeper.database import Base
from plotkeeper.models._common import DEFAULT_CATEGORY_COLOR, utcnow


class PlotCategory(Base):
    __tablename__ = "plot_categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    color = Column(String(7), nullable=False, default=DEFAULT_CATEGORY_COLOR)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return f"<PlotCategory(id={self.id}, name='{self.name}')>"


class Plot(Base):
    """A named land area. Rows are removed by the database when their plot goes."""

    __tablename__ = "plots"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=True)
    category_id = Column(Uuid, ForeignKey("plot_categories.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    category = relationship("PlotCategory")

    def __repr__(self):
        return f"<Plot(id={self.id}, name='{self.name}')>"
