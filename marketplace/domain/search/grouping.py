"""
Destination search grouping

Pure functions that shape an already-fetched list of retreats/programs for
the "browse by destination" pages: rank by distance and group by property,
group by country within a continent, or paginate.
"""

from typing import Callable, Optional

from ...shared.continents import short_name_to_continent
from ...shared.geo import haversine_distance
from .schemas import CountryGroup, EntitySummary, PropertyGroup


def _property_country(item) -> Optional[str]:
    return item.property.country if item.property else None


def format_location(city: Optional[str], country: Optional[str]) -> str:
    return ", ".join(part for part in (city, country) if part)


def group_by_property(
    items: list[EntitySummary], latitude: float, longitude: float, radius_miles: float
) -> list[PropertyGroup]:
    """
    Items within `radius_miles` of the point, nearest first, grouped by property.

    Groups appear in order of their nearest item; items without property
    coordinates are dropped.
    """
    with_distance = []
    for item in items:
        prop = item.property
        if prop is None or prop.lat is None or prop.lng is None:
            continue
        distance = haversine_distance(latitude, longitude, prop.lat, prop.lng)
        if distance <= radius_miles:
            with_distance.append(item.model_copy(update={"distance": distance}))

    with_distance.sort(key=lambda item: item.distance)

    groups: dict[str, PropertyGroup] = {}
    for item in with_distance:
        prop = item.property
        group = groups.get(prop.id)
        if group is None:
            groups[prop.id] = PropertyGroup(
                property_id=prop.id,
                property_name=prop.name or "Unnamed Property",
                property_location=format_location(prop.city, prop.country),
                items=[item],
            )
        else:
            group.items.append(item)

    return list(groups.values())


def bucket_by_country(
    items: list, continent: str, country_of: Callable = _property_country
) -> list[tuple[str, list]]:
    """
    (country, items) buckets for countries on `continent`, largest first.

    Equal-sized buckets keep the order their first item appeared in.
    """
    wanted = continent.strip().lower()
    buckets: dict[str, list] = {}
    for item in items:
        country = country_of(item)
        if not country:
            continue
        if short_name_to_continent(country).lower() != wanted:
            continue
        buckets.setdefault(country, []).append(item)

    return sorted(buckets.items(), key=lambda bucket: len(bucket[1]), reverse=True)


def group_by_country(items: list[EntitySummary], continent: str) -> list[CountryGroup]:
    return [
        CountryGroup(country=country, items=bucket)
        for country, bucket in bucket_by_country(items, continent)
    ]


def paginate_items(items: list, page: int, page_size: int) -> list:
    start = (page - 1) * page_size
    return items[start : start + page_size]
