from plotkeeper.routers.categories import plot_categories_router, row_categories_router
from plotkeeper.routers.dashboard import router as dashboard_router
from plotkeeper.routers.plots import router as plots_router
from plotkeeper.routers.row_fields import router as row_fields_router
from plotkeeper.routers.rows import router as rows_router

__all__ = [
    "plot_categories_router", "row_categories_router", "dashboard_router",
    "plots_router", "row_fields_router", "rows_router",
]
