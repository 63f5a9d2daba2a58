from plotkeeper.services.batch import WriteBatch
from plotkeeper.services.categories import PlotCategoryStore, RowCategoryStore
from plotkeeper.services.category_assignments import CategoryAssignmentStore
from plotkeeper.services.dashboard import dashboard_stats
from plotkeeper.services.field_definitions import FieldDefinitionStore
from plotkeeper.services.field_values import FieldValueStore, InvalidFieldValue
from plotkeeper.services.plots import PlotStore
from plotkeeper.services.rows import RowAggregator

__all__ = [
    "WriteBatch",
    "PlotCategoryStore", "RowCategoryStore",
    "CategoryAssignmentStore",
    "dashboard_stats",
    "FieldDefinitionStore",
    "FieldValueStore", "InvalidFieldValue",
    "PlotStore",
    "RowAggregator",
]
