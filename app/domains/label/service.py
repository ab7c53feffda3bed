"""Label service layer."""

from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.exceptions.entities import InvalidLabelProjectError
from app.schemas.label import LabelCreate, LabelUpdate
from app.store import EntityStore
from models.label import Label


class LabelService:
    """Service class for label business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.store = EntityStore(db)

    async def get_labels_list(self, project_id: UUID | None = None) -> List[Label]:
        """Get labels sorted by name; with ``project_id``, only those usable in that project."""
        labels = await self.store.labels.list(order_by=[Label.name.asc()])
        if project_id is None:
            return labels
        return [label for label in labels if label.project_id in (None, project_id)]

    async def create_label(self, label_data: LabelCreate) -> Label:
        """Create a label, global or scoped to an existing project."""
        if label_data.project_id:
            project = await self.store.projects.find_by_id(label_data.project_id)
            if not project:
                raise InvalidLabelProjectError()

        return await self.store.labels.create(
            name=label_data.name,
            color=label_data.color or settings.default_label_color,
            project_id=label_data.project_id,
        )

    async def update_label(self, label_id: UUID, label_data: LabelUpdate) -> Label:
        """Update name and/or color of a label."""
        update_data = {
            field: value
            for field, value in label_data.model_dump(exclude_unset=True).items()
            if value is not None
        }
        return await self.store.labels.update(label_id, **update_data)

    async def delete_label(self, label_id: UUID) -> bool:
        """Delete a label and detach it from every task."""
        await self.store.labels.delete(label_id)
        return True
