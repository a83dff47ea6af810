"""Search router - FastAPI endpoints for destination search"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...database import get_db
from ...services.geocoding import GeocodingError, NominatimGeocoder, get_geocoder
from ...shared.continents import list_continents
from .schemas import (
    PropertyResult,
    PropertySearchOptions,
    PropertySearchResults,
    SearchOptions,
    SearchResults,
)
from .service import SearchService, has_point

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["Search"])


def get_search_service(db: Session = Depends(get_db)) -> SearchService:
    """Dependency injection for SearchService"""
    return SearchService(db)


def search_options(
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    radius_miles: Optional[float] = Query(None, gt=0),
    page: Optional[int] = Query(None, ge=1),
    page_size: Optional[int] = Query(None, ge=1, le=100),
    category: Optional[str] = Query(None),
    continent: Optional[str] = Query(None),
) -> SearchOptions:
    return SearchOptions(
        latitude=latitude,
        longitude=longitude,
        radius_miles=radius_miles,
        page=page,
        page_size=page_size,
        category=category,
        continent=continent,
    )


async def resolve_place(
    place: Optional[str], latitude: Optional[float], longitude: Optional[float], geocoder: NominatimGeocoder
) -> tuple[Optional[float], Optional[float], bool]:
    """
    Coordinates to search around: explicit ones win, otherwise the geocoded
    place. The flag is False when a place was given but could not be found.
    """
    if not place or has_point(latitude, longitude):
        return latitude, longitude, True

    try:
        found = await geocoder.geocode(place)
    except GeocodingError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e

    if not found:
        return None, None, False
    logger.info(f"📍 Resolved '{place}' to ({found.latitude}, {found.longitude})")
    return found.latitude, found.longitude, True


# ============================================================================
# PROGRAMS / RETREATS
# ============================================================================


@router.get("/programs", response_model=SearchResults)
async def search_programs(
    place: Optional[str] = Query(None, description="Free-text destination to geocode"),
    options: SearchOptions = Depends(search_options),
    service: SearchService = Depends(get_search_service),
    geocoder: NominatimGeocoder = Depends(get_geocoder),
):
    """Published programs by continent, around a point, or paginated"""
    latitude, longitude, found = await resolve_place(place, options.latitude, options.longitude, geocoder)
    if not found and not options.continent:
        return SearchResults(ok=True, type="location", data=[])
    return service.search_programs(options.model_copy(update={"latitude": latitude, "longitude": longitude}))


@router.get("/retreats", response_model=SearchResults)
async def search_retreats(
    place: Optional[str] = Query(None, description="Free-text destination to geocode"),
    options: SearchOptions = Depends(search_options),
    service: SearchService = Depends(get_search_service),
    geocoder: NominatimGeocoder = Depends(get_geocoder),
):
    """Published retreats by continent, around a point, or paginated"""
    latitude, longitude, found = await resolve_place(place, options.latitude, options.longitude, geocoder)
    if not found and not options.continent:
        return SearchResults(ok=True, type="location", data=[])
    return service.search_retreats(options.model_copy(update={"latitude": latitude, "longitude": longitude}))


# ============================================================================
# PROPERTIES
# ============================================================================


@router.get("/properties", response_model=PropertySearchResults, response_model_exclude_none=True)
async def search_properties(
    place: Optional[str] = Query(None, description="Free-text destination to geocode"),
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    radius_miles: Optional[float] = Query(None, gt=0),
    limit: Optional[int] = Query(None, ge=1, le=100),
    include_host: bool = Query(False),
    include_images: bool = Query(False),
    include_programs: bool = Query(False),
    include_retreats: bool = Query(False),
    name_contains: Optional[str] = Query(None),
    continent: Optional[str] = Query(None),
    service: SearchService = Depends(get_search_service),
    geocoder: NominatimGeocoder = Depends(get_geocoder),
):
    """Properties grouped by country, ranked by distance, or listed by name"""
    latitude, longitude, found = await resolve_place(place, latitude, longitude, geocoder)
    if not found and not continent:
        return PropertySearchResults(ok=True, type="location", data=[])

    options = PropertySearchOptions(
        latitude=latitude,
        longitude=longitude,
        radius_miles=radius_miles,
        limit=limit,
        include_host=include_host,
        include_images=include_images,
        include_programs=include_programs,
        include_retreats=include_retreats,
        name_contains=name_contains,
        continent=continent,
    )
    return service.search_properties(options)


@router.get("/nearby", response_model=list[PropertyResult], response_model_exclude_none=True)
async def search_nearby_places(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    radius_miles: Optional[float] = Query(None, gt=0),
    service: SearchService = Depends(get_search_service),
):
    """Closest properties to a point"""
    try:
        if radius_miles is None:
            return service.search_nearby_places(latitude, longitude)
        return service.search_nearby_places(latitude, longitude, radius_miles)
    except SQLAlchemyError as e:
        logger.error(f"❌ Nearby search failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to search nearby places") from e


@router.get("/bounding-box", response_model=list[PropertyResult], response_model_exclude_none=True)
async def get_points_in_bounding_box(
    min_lat: float = Query(..., ge=-90, le=90),
    max_lat: float = Query(..., ge=-90, le=90),
    min_lon: float = Query(..., ge=-180, le=180),
    max_lon: float = Query(..., ge=-180, le=180),
    service: SearchService = Depends(get_search_service),
):
    """Properties whose coordinates fall inside the box"""
    if min_lat > max_lat or min_lon > max_lon:
        raise HTTPException(status_code=400, detail="Minimum bounds must not exceed maximum bounds")
    try:
        return service.get_points_in_bounding_box(min_lat, max_lat, min_lon, max_lon)
    except SQLAlchemyError as e:
        logger.error(f"❌ Bounding box search failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to search properties") from e


@router.get("/continents")
async def get_continents():
    return {"continents": list_continents()}
