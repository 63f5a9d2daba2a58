"""Store for custom row field definitions (the schema side of custom fields)."""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from plotkeeper.models import FieldType, RowFieldDefinition
from plotkeeper.models._common import utcnow
from plotkeeper.services.batch import WriteBatch

_UPDATABLE = ("name", "field_type", "options", "is_required", "display_order")


class FieldDefinitionStore:
    def __init__(self, session: Session):
        self.session = session

    def list(self) -> List[RowFieldDefinition]:
        stmt = select(RowFieldDefinition).order_by(
            RowFieldDefinition.display_order, RowFieldDefinition.created_at
        )
        return list(self.session.scalars(stmt))

    def get(self, field_id: UUID) -> Optional[RowFieldDefinition]:
        return self.session.get(RowFieldDefinition, field_id)

    def create(
        self,
        name: str,
        field_type: FieldType,
        options: Optional[List[str]] = None,
        is_required: bool = False,
        display_order: Optional[int] = None,
    ) -> RowFieldDefinition:
        """Create a definition. Without a display order it is appended after
        the existing ones."""
        if display_order is None:
            display_order = self.session.scalar(select(func.count(RowFieldDefinition.id)))
        definition = RowFieldDefinition(
            name=name,
            field_type=FieldType(field_type),
            options=options,
            is_required=is_required,
            display_order=display_order,
        )
        with WriteBatch(self.session, "create field definition"):
            self.session.add(definition)
        self.session.refresh(definition)
        return definition

    def update(self, field_id: UUID, **changes) -> Optional[RowFieldDefinition]:
        # Switching field_type away from dropdown does not clear options;
        # callers send options=[] alongside the new type.
        definition = self.get(field_id)
        if definition is None:
            return None
        with WriteBatch(self.session, "update field definition"):
            for key, value in changes.items():
                if key in _UPDATABLE:
                    setattr(definition, key, value)
            definition.updated_at = utcnow()
        self.session.refresh(definition)
        return definition

    def delete(self, field_id: UUID) -> None:
        with WriteBatch(self.session, "delete field definition"):
            self.session.execute(delete(RowFieldDefinition).where(RowFieldDefinition.id == field_id))

    def move(self, field_id: UUID, direction: str) -> List[RowFieldDefinition]:
        """Swap a definition's display order with its neighbour.

        Moving the first definition up or the last one down changes nothing.
        Returns the definitions in their new order.
        """
        if direction not in ("up", "down"):
            raise ValueError(f"direction must be 'up' or 'down', not {direction!r}")

        definitions = self.list()
        index = next((i for i, d in enumerate(definitions) if d.id == field_id), None)
        if index is None:
            return definitions

        neighbour = index - 1 if direction == "up" else index + 1
        if neighbour < 0 or neighbour >= len(definitions):
            return definitions

        moving, swapping = definitions[index], definitions[neighbour]
        now = utcnow()
        with WriteBatch(self.session, "move field definition"):
            moving.display_order, swapping.display_order = neighbour, index
            moving.updated_at = swapping.updated_at = now
        return self.list()
