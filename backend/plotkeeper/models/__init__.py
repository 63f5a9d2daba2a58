"""All SQLAlchemy models – re-exported for Alembic and app use."""

from plotkeeper.models.plot import Plot, PlotCategory
from plotkeeper.models.row import Row, RowStatus
from plotkeeper.models.row_category import RowCategory, RowCategoryAssignment
from plotkeeper.models.row_field import FieldType, RowFieldDefinition, RowFieldValue

__all__ = [
    "Plot", "PlotCategory",
    "Row", "RowStatus",
    "RowCategory", "RowCategoryAssignment",
    "FieldType", "RowFieldDefinition", "RowFieldValue",
]
