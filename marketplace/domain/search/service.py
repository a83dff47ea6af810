"""Search service - Destination search over programs, retreats and properties"""

import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from ...config import (
    NEARBY_DEFAULT_RADIUS_MILES,
    NEARBY_RESULT_LIMIT,
    SEARCH_DEFAULT_PAGE_SIZE,
    SEARCH_DEFAULT_RADIUS_MILES,
)
from ...models import Property
from ...shared.geo import haversine_distance
from .grouping import bucket_by_country, group_by_country, group_by_property, paginate_items
from .repository import SearchRepository
from .schemas import (
    EntitySummary,
    HostSummary,
    ImageSummary,
    OfferingSummary,
    PropertyCountryGroup,
    PropertyResult,
    PropertySearchOptions,
    PropertySearchResults,
    SearchOptions,
    SearchResults,
)

logger = logging.getLogger(__name__)


def has_point(latitude: Optional[float], longitude: Optional[float]) -> bool:
    return latitude is not None and longitude is not None


def to_property_result(
    prop: Property, options: Optional[PropertySearchOptions] = None, distance: Optional[float] = None
) -> PropertyResult:
    """Flatten a Property row, touching only the relations the options ask for"""
    options = options or PropertySearchOptions()
    return PropertyResult(
        id=prop.id,
        name=prop.name,
        city=prop.city,
        country=prop.country,
        address=prop.address,
        lat=prop.lat,
        lng=prop.lng,
        host_id=prop.host_id,
        host=HostSummary.model_validate(prop.host) if options.include_host and prop.host else None,
        images=[ImageSummary.model_validate(i) for i in prop.images] if options.include_images else None,
        programs=(
            [OfferingSummary.model_validate(p) for p in prop.programs]
            if options.include_programs
            else None
        ),
        retreats=(
            [OfferingSummary.model_validate(r) for r in prop.retreats]
            if options.include_retreats
            else None
        ),
        distance=distance,
    )


class SearchService:
    """Service layer for destination search"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SearchRepository()

    # ------------------------------------------------------------------
    # Programs / retreats
    # ------------------------------------------------------------------

    def search_programs(self, options: SearchOptions) -> SearchResults:
        return self.execute_search(
            lambda opts: self.repo.query_programs(self.db, opts.category), options, "programs"
        )

    def search_retreats(self, options: SearchOptions) -> SearchResults:
        return self.execute_search(
            lambda opts: self.repo.query_retreats(self.db, opts.category), options, "retreats"
        )

    def execute_search(
        self, query_fn: Callable[[SearchOptions], list], options: SearchOptions, model_name: str
    ) -> SearchResults:
        """
        Fetch candidates with `query_fn` and shape them by option precedence:
        continent, then coordinates, then plain pagination.
        """
        try:
            items = [EntitySummary.model_validate(row) for row in query_fn(options)]

            if options.continent:
                return SearchResults(
                    ok=True, type="continent", data=group_by_country(items, options.continent)
                )

            if has_point(options.latitude, options.longitude):
                radius = options.radius_miles or SEARCH_DEFAULT_RADIUS_MILES
                return SearchResults(
                    ok=True,
                    type="location",
                    data=group_by_property(items, options.latitude, options.longitude, radius),
                )

            return SearchResults(
                ok=True,
                type="all",
                data=paginate_items(
                    items, options.page or 1, options.page_size or SEARCH_DEFAULT_PAGE_SIZE
                ),
            )
        except Exception as e:
            logger.error(f"❌ Error searching {model_name}: {e}")
            return SearchResults(ok=False, type="na", error=f"Failed to search {model_name}", data=[])

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def search_properties(self, options: PropertySearchOptions) -> PropertySearchResults:
        """
        Properties grouped by country (continent given), ranked by distance
        (coordinates given), or the first `limit` by name.
        """
        limit = options.limit or NEARBY_RESULT_LIMIT
        by_point = has_point(options.latitude, options.longitude)

        try:
            rows = self.repo.query_properties(
                self.db,
                name_contains=options.name_contains,
                with_coordinates_only=by_point and not options.continent,
                include_host=options.include_host,
                include_images=options.include_images,
                include_programs=options.include_programs,
                include_retreats=options.include_retreats,
            )

            if options.continent:
                groups = [
                    PropertyCountryGroup(
                        country=country,
                        properties=[to_property_result(p, options) for p in bucket],
                    )
                    for country, bucket in bucket_by_country(
                        rows, options.continent, country_of=lambda p: p.country
                    )
                ]
                return PropertySearchResults(ok=True, type="continent", data=groups)

            if by_point:
                radius = options.radius_miles or NEARBY_DEFAULT_RADIUS_MILES
                ranked = self._rank_by_distance(rows, options.latitude, options.longitude, radius)
                return PropertySearchResults(
                    ok=True,
                    type="location",
                    data=[to_property_result(p, options, d) for p, d in ranked[:limit]],
                )

            return PropertySearchResults(
                ok=True, type="all", data=[to_property_result(p, options) for p in rows[:limit]]
            )
        except Exception as e:
            logger.error(f"❌ Error searching properties: {e}")
            return PropertySearchResults(ok=False, type="na", error="Failed to search properties", data=[])

    def search_nearby_places(
        self,
        latitude: Optional[float],
        longitude: Optional[float],
        radius_miles: float = NEARBY_DEFAULT_RADIUS_MILES,
    ) -> list[PropertyResult]:
        """The closest properties within the radius, nearest first"""
        rows = self.repo.query_properties(self.db, with_coordinates_only=True)
        ranked = self._rank_by_distance(rows, latitude, longitude, radius_miles)
        return [to_property_result(p, distance=d) for p, d in ranked[:NEARBY_RESULT_LIMIT]]

    def get_points_in_bounding_box(
        self, min_lat: float, max_lat: float, min_lon: float, max_lon: float
    ) -> list[PropertyResult]:
        rows = self.repo.query_properties_in_bounding_box(self.db, min_lat, max_lat, min_lon, max_lon)
        return [to_property_result(p) for p in rows]

    @staticmethod
    def _rank_by_distance(
        rows: list[Property], latitude: Optional[float], longitude: Optional[float], radius: float
    ) -> list[tuple[Property, float]]:
        with_distance = [(p, haversine_distance(latitude, longitude, p.lat, p.lng)) for p in rows]
        within = [(p, d) for p, d in with_distance if d <= radius]
        within.sort(key=lambda pair: pair[1])
        return within
