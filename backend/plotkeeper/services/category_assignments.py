"""Store for the many-to-many link between rows and row categories."""
from typing import Iterable, List
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from plotkeeper.models import RowCategory, RowCategoryAssignment
from plotkeeper.services.batch import WriteBatch


class CategoryAssignmentStore:
    def __init__(self, session: Session):
        self.session = session

    def get_categories_for_row(self, row_id: UUID) -> List[RowCategory]:
        stmt = (
            select(RowCategory)
            .join(RowCategoryAssignment, RowCategoryAssignment.category_id == RowCategory.id)
            .where(RowCategoryAssignment.row_id == row_id)
            .order_by(RowCategory.name)
        )
        return list(self.session.scalars(stmt))

    def set_categories_for_row(self, row_id: UUID, category_ids: Iterable[UUID]) -> None:
        """Replace the row's assignments with exactly `category_ids`.

        Delete and insert run in one write batch, so readers never see the
        row without categories half way through.
        """
        unique_ids = list(dict.fromkeys(category_ids))
        with WriteBatch(self.session, "set row categories"):
            self.session.execute(
                delete(RowCategoryAssignment).where(RowCategoryAssignment.row_id == row_id)
            )
            self.session.add_all(
                RowCategoryAssignment(row_id=row_id, category_id=category_id)
                for category_id in unique_ids
            )

    def get_row_ids_for_category(self, category_id: UUID) -> List[UUID]:
        stmt = select(RowCategoryAssignment.row_id).where(
            RowCategoryAssignment.category_id == category_id
        )
        return list(self.session.scalars(stmt))

    def assign_category(self, row_id: UUID, category_id: UUID) -> RowCategoryAssignment:
        assignment = RowCategoryAssignment(row_id=row_id, category_id=category_id)
        with WriteBatch(self.session, "assign row category"):
            self.session.add(assignment)
        self.session.refresh(assignment)
        return assignment

    def remove_category(self, row_id: UUID, category_id: UUID) -> None:
        with WriteBatch(self.session, "remove row category"):
            self.session.execute(
                delete(RowCategoryAssignment).where(
                    RowCategoryAssignment.row_id == row_id,
                    RowCategoryAssignment.category_id == category_id,
                )
            )
