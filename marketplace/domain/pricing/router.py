"""Pricing router - FastAPI endpoints for price modifications"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ...shared.results import unwrap
from .schemas import (
    AllPriceModsResponse,
    InstanceType,
    PriceModCreate,
    PriceModResponse,
    PriceModUpdate,
    PriceQuote,
)
from .service import PriceModService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/price-mods", tags=["Price Mods"])


def get_price_mod_service(db: Session = Depends(get_db)) -> PriceModService:
    """Dependency injection for PriceModService"""
    return PriceModService(db)


# ============================================================================
# RESOLUTION
# ============================================================================


@router.get("/instances/{instance_type}/{instance_id}", response_model=AllPriceModsResponse)
async def get_all_price_mods(
    instance_type: InstanceType,
    instance_id: str,
    service: PriceModService = Depends(get_price_mod_service),
):
    """All price mods that apply to an instance, in precedence order"""
    result = service.get_all_price_mods(instance_id, instance_type)
    return AllPriceModsResponse(ok=result.ok, data=result.data, error=result.error)


@router.get("/instances/{instance_type}/{instance_id}/quote", response_model=PriceQuote)
async def quote_instance(
    instance_type: InstanceType,
    instance_id: str,
    service: PriceModService = Depends(get_price_mod_service),
):
    """Total price for an instance from its resolved price mods"""
    return unwrap(service.quote_instance(instance_id, instance_type))


@router.get("/retreats/{retreat_id}", response_model=list[PriceModResponse])
async def get_retreat_price_mods(
    retreat_id: str,
    service: PriceModService = Depends(get_price_mod_service),
):
    return unwrap(service.list_for_retreat(retreat_id))


@router.get("/retreat-instances/{retreat_instance_id}", response_model=list[PriceModResponse])
async def get_retreat_instance_price_mods(
    retreat_instance_id: str,
    service: PriceModService = Depends(get_price_mod_service),
):
    return unwrap(service.list_for_retreat_instance(retreat_instance_id))


@router.get("/program-instances/{program_instance_id}", response_model=list[PriceModResponse])
async def get_program_instance_price_mods(
    program_instance_id: str,
    service: PriceModService = Depends(get_price_mod_service),
):
    return unwrap(service.list_for_program_instance(program_instance_id))


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.post("", response_model=PriceModResponse, status_code=201)
async def create_price_mod(
    data: PriceModCreate,
    service: PriceModService = Depends(get_price_mod_service),
):
    """Create a price modification"""
    return unwrap(service.create_price_mod(data))


@router.get("/{price_mod_id}", response_model=PriceModResponse)
async def get_price_mod(
    price_mod_id: str,
    service: PriceModService = Depends(get_price_mod_service),
):
    return unwrap(service.get_price_mod(price_mod_id))


@router.patch("/{price_mod_id}", response_model=PriceModResponse)
async def update_price_mod(
    price_mod_id: str,
    data: PriceModUpdate,
    service: PriceModService = Depends(get_price_mod_service),
):
    """Update a price modification; null association ids disconnect"""
    return unwrap(service.update_price_mod(price_mod_id, data))


@router.delete("/{price_mod_id}")
async def delete_price_mod(
    price_mod_id: str,
    service: PriceModService = Depends(get_price_mod_service),
):
    unwrap(service.delete_price_mod(price_mod_id))
    return {"message": "Price modification deleted"}
