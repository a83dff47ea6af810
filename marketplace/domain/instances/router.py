"""Instance router - FastAPI endpoints for retreat/program instances"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ..pricing.schemas import InstanceType
from .schemas import InstanceCreate, InstanceListResponse, InstanceResponse, InstanceUpdate
from .service import InstanceService

router = APIRouter(prefix="/instances", tags=["Instances"])


def get_instance_service(db: Session = Depends(get_db)) -> InstanceService:
    """Dependency injection for InstanceService"""
    return InstanceService(db)


@router.post("/{instance_type}", response_model=InstanceResponse, status_code=201)
async def create_instance(
    instance_type: InstanceType,
    data: InstanceCreate,
    service: InstanceService = Depends(get_instance_service),
):
    """Create a dated instance; zero available slots marks it full"""
    return service.create_instance(instance_type, data)


@router.patch("/{instance_type}/{instance_id}", response_model=InstanceResponse)
async def update_instance(
    instance_type: InstanceType,
    instance_id: str,
    data: InstanceUpdate,
    service: InstanceService = Depends(get_instance_service),
):
    return service.update_instance(instance_type, instance_id, data)


@router.get("/{instance_type}", response_model=InstanceListResponse)
async def list_instances(
    instance_type: InstanceType,
    parentId: Optional[str] = Query(None, description="Only instances of this retreat/program"),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    service: InstanceService = Depends(get_instance_service),
):
    """Paginated instances, newest start date first"""
    return service.list_instances(instance_type, parentId, page, page_size)


@router.get("/{instance_type}/{instance_id}", response_model=InstanceResponse)
async def get_instance(
    instance_type: InstanceType,
    instance_id: str,
    service: InstanceService = Depends(get_instance_service),
):
    return service.get_instance(instance_type, instance_id)


@router.delete("/{instance_type}/{instance_id}")
async def delete_instance(
    instance_type: InstanceType,
    instance_id: str,
    service: InstanceService = Depends(get_instance_service),
):
    """Delete an instance and the price mods attached to it"""
    service.delete_instance(instance_type, instance_id)
    return {"message": f"{instance_type.capitalize()} instance deleted"}
