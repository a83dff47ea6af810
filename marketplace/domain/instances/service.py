"""Instance service - Create, read, update and delete retreat/program instances"""

import logging
import math
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Program, ProgramInstance, Retreat, RetreatInstance
from .schemas import InstanceCreate, InstanceListResponse, InstanceResponse, InstanceUpdate

logger = logging.getLogger(__name__)

# instance type -> (parent model, instance model, parent foreign key)
INSTANCE_MODELS = {
    "retreat": (Retreat, RetreatInstance, "retreat_id"),
    "program": (Program, ProgramInstance, "program_id"),
}

UPDATE_FIELDS = {
    "startDate": "start_date",
    "endDate": "end_date",
    "duration": "duration",
    "itinerary": "itinerary",
    "availableSlots": "available_slots",
    "isFull": "is_full",
    "notes": "notes",
}


def is_full_for(available_slots: int, is_full: bool) -> bool:
    """An instance with no slots left is full regardless of the flag"""
    return available_slots == 0 or bool(is_full)


def to_response(instance, parent_key: str) -> InstanceResponse:
    return InstanceResponse(
        id=instance.id,
        parent_id=getattr(instance, parent_key),
        start_date=instance.start_date,
        end_date=instance.end_date,
        duration=instance.duration,
        itinerary=instance.itinerary,
        available_slots=instance.available_slots,
        is_full=instance.is_full,
        notes=instance.notes,
    )


class InstanceService:
    """Service layer for instance business logic"""

    def __init__(self, db: Session):
        self.db = db

    def _models(self, instance_type: str):
        if instance_type not in INSTANCE_MODELS:
            raise HTTPException(status_code=400, detail=f"Unknown instance type: {instance_type}")
        return INSTANCE_MODELS[instance_type]

    def create_instance(self, instance_type: str, data: InstanceCreate) -> InstanceResponse:
        parent_model, instance_model, parent_key = self._models(instance_type)

        parent = self.db.query(parent_model).filter(parent_model.id == data.parentId).first()
        if not parent:
            raise HTTPException(status_code=404, detail=f"{instance_type.capitalize()} not found")

        instance = instance_model(
            start_date=data.startDate,
            end_date=data.endDate,
            duration=data.duration,
            itinerary=data.itinerary,
            available_slots=data.availableSlots,
            is_full=is_full_for(data.availableSlots, data.isFull),
            notes=data.notes,
        )
        setattr(instance, parent_key, parent.id)

        try:
            self.db.add(instance)
            self.db.commit()
            self.db.refresh(instance)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to create {instance_type} instance: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to create {instance_type} instance")

        logger.info(f"✅ Created {instance_type} instance {instance.id} for {parent.id}")
        return to_response(instance, parent_key)

    def update_instance(self, instance_type: str, instance_id: str, data: InstanceUpdate) -> InstanceResponse:
        _parent_model, instance_model, parent_key = self._models(instance_type)

        instance = self._get_or_404(instance_type, instance_model, instance_id)

        for field, column in UPDATE_FIELDS.items():
            value = getattr(data, field)
            if value is not None:
                setattr(instance, column, value)

        if instance.end_date < instance.start_date:
            self.db.rollback()
            raise HTTPException(status_code=422, detail="endDate must not be before startDate")

        instance.is_full = is_full_for(instance.available_slots, instance.is_full)

        try:
            self.db.commit()
            self.db.refresh(instance)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to update {instance_type} instance {instance_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to update {instance_type} instance")

        return to_response(instance, parent_key)

    def get_instance(self, instance_type: str, instance_id: str) -> InstanceResponse:
        _parent_model, instance_model, parent_key = self._models(instance_type)
        return to_response(self._get_or_404(instance_type, instance_model, instance_id), parent_key)

    def list_instances(
        self, instance_type: str, parent_id: Optional[str] = None, page: int = 1, page_size: int = 10
    ) -> InstanceListResponse:
        """Paginated instances, optionally of one retreat/program"""
        _parent_model, instance_model, parent_key = self._models(instance_type)

        query = self.db.query(instance_model)
        if parent_id:
            query = query.filter(getattr(instance_model, parent_key) == parent_id)

        total = query.count()
        rows = (
            query.order_by(instance_model.start_date.desc(), instance_model.id)
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return InstanceListResponse(
            instances=[to_response(row, parent_key) for row in rows],
            total_pages=math.ceil(total / page_size),
            current_page=page,
            total_instances=total,
        )

    def delete_instance(self, instance_type: str, instance_id: str) -> None:
        """Delete an instance together with the price mods attached to it"""
        _parent_model, instance_model, _parent_key = self._models(instance_type)
        instance = self._get_or_404(instance_type, instance_model, instance_id)

        try:
            self.db.delete(instance)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to delete {instance_type} instance {instance_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to delete {instance_type} instance")

        logger.info(f"🗑️ Deleted {instance_type} instance {instance_id}")

    def _get_or_404(self, instance_type: str, instance_model, instance_id: str):
        instance = self.db.query(instance_model).filter(instance_model.id == instance_id).first()
        if not instance:
            raise HTTPException(status_code=404, detail=f"{instance_type.capitalize()} instance not found")
        return instance
