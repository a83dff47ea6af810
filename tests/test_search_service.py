from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from marketplace.domain.search.repository import SearchRepository
from marketplace.domain.search.schemas import PropertySearchOptions, SearchOptions
from marketplace.domain.search.service import SearchService

TOKYO = (35.68, 139.69)


@pytest.fixture
def destinations(factory):
    """Published programs in Tokyo, Kyoto and Bangkok plus one draft"""
    host = factory.host(email="hosts@example.com")
    tokyo = factory.property(name="Tokyo Dojo", city="Tokyo", country="JP", lat=35.69, lng=139.70, host_id=host.id)
    kyoto = factory.property(name="Kyoto Temple Stay", city="Kyoto", country="JP", lat=35.01, lng=135.77)
    bangkok = factory.property(name="Bangkok Loft", city="Bangkok", country="TH", lat=13.75, lng=100.50)
    nowhere = factory.property(name="Unmapped Farm", country="FR")

    programs = {
        "zen": factory.program(tokyo, name="Zen Mornings", category="meditation"),
        "tea": factory.program(tokyo, name="Tea Ceremony", category="culture"),
        "temple": factory.program(kyoto, name="Temple Silence", category="meditation"),
        "muay": factory.program(bangkok, name="Muay Thai Camp", category="fitness"),
        "farm": factory.program(nowhere, name="Farm Yoga", category="yoga"),
    }
    factory.program(tokyo, name="Unfinished", status="draft")
    factory.image(program_id=programs["zen"].id, file_path="zen-2.jpg", order=2)
    factory.image(program_id=programs["zen"].id, file_path="zen-1.jpg", order=1)

    return {"host": host, "tokyo": tokyo, "kyoto": kyoto, "bangkok": bangkok, "programs": programs}


class TestExecuteSearch:
    def test_all_lists_published_only(self, db, destinations):
        result = SearchService(db).search_programs(SearchOptions())

        assert result.ok
        assert result.type == "all"
        assert len(result.data) == 5
        assert "Unfinished" not in {item.name for item in result.data}

    def test_category_filter(self, db, destinations):
        result = SearchService(db).search_programs(SearchOptions(category="meditation"))

        assert sorted(item.name for item in result.data) == ["Temple Silence", "Zen Mornings"]

    def test_pagination(self, db, destinations):
        service = SearchService(db)

        first = service.search_programs(SearchOptions(page=1, page_size=2))
        third = service.search_programs(SearchOptions(page=3, page_size=2))
        beyond = service.search_programs(SearchOptions(page=4, page_size=2))

        assert len(first.data) == 2
        assert len(third.data) == 1
        assert beyond.ok and beyond.data == []

    def test_location_uses_default_radius(self, db, destinations):
        result = SearchService(db).search_programs(
            SearchOptions(latitude=TOKYO[0], longitude=TOKYO[1])
        )

        assert result.type == "location"
        # Kyoto is roughly 225 miles out, beyond the 200 mile default
        assert [group.property_name for group in result.data] == ["Tokyo Dojo"]
        group = result.data[0]
        assert group.property_location == "Tokyo, JP"
        assert sorted(item.name for item in group.items) == ["Tea Ceremony", "Zen Mornings"]
        assert all(item.distance < 1 for item in group.items)

    def test_location_with_wider_radius(self, db, destinations):
        result = SearchService(db).search_programs(
            SearchOptions(latitude=TOKYO[0], longitude=TOKYO[1], radius_miles=300)
        )

        assert [group.property_name for group in result.data] == ["Tokyo Dojo", "Kyoto Temple Stay"]

    def test_images_follow_display_order(self, db, destinations):
        result = SearchService(db).search_programs(SearchOptions(category="meditation"))

        zen = next(item for item in result.data if item.name == "Zen Mornings")
        assert [image.file_path for image in zen.images] == ["zen-1.jpg", "zen-2.jpg"]

    def test_continent_groups_largest_country_first(self, db, destinations):
        result = SearchService(db).search_programs(SearchOptions(continent="Asia"))

        assert result.type == "continent"
        assert [(group.country, len(group.items)) for group in result.data] == [("JP", 3), ("TH", 1)]

    def test_continent_wins_over_coordinates(self, db, destinations):
        result = SearchService(db).search_programs(
            SearchOptions(continent="Europe", latitude=TOKYO[0], longitude=TOKYO[1])
        )

        assert result.type == "continent"
        assert [group.country for group in result.data] == ["FR"]

    def test_retreats_use_their_own_table(self, db, destinations, factory):
        factory.retreat(destinations["bangkok"], name="Island Detox", category="detox")

        result = SearchService(db).search_retreats(SearchOptions(continent="Asia"))

        assert [(group.country, [i.name for i in group.items]) for group in result.data] == [
            ("TH", ["Island Detox"])
        ]

    def test_failure_is_reported_not_raised(self, db):
        with patch.object(
            SearchRepository,
            "query_programs",
            side_effect=OperationalError("SELECT", {}, Exception("database is locked")),
        ):
            result = SearchService(db).search_programs(SearchOptions())

        assert not result.ok
        assert result.type == "na"
        assert result.error == "Failed to search programs"
        assert result.data == []


class TestSearchProperties:
    def test_all_sorted_by_name(self, db, destinations):
        result = SearchService(db).search_properties(PropertySearchOptions())

        assert result.type == "all"
        assert [p.name for p in result.data] == [
            "Bangkok Loft",
            "Kyoto Temple Stay",
            "Tokyo Dojo",
            "Unmapped Farm",
        ]
        assert all(p.host is None and p.images is None for p in result.data)

    def test_limit_and_name_filter(self, db, destinations):
        service = SearchService(db)

        assert len(service.search_properties(PropertySearchOptions(limit=2)).data) == 2
        named = service.search_properties(PropertySearchOptions(name_contains="temple"))
        assert [p.name for p in named.data] == ["Kyoto Temple Stay"]

    def test_location_ranks_within_nearby_radius(self, db, destinations):
        result = SearchService(db).search_properties(
            PropertySearchOptions(latitude=TOKYO[0], longitude=TOKYO[1])
        )

        assert result.type == "location"
        assert [p.name for p in result.data] == ["Tokyo Dojo"]
        assert result.data[0].distance < 1

    def test_location_nearest_first(self, db, destinations):
        result = SearchService(db).search_properties(
            PropertySearchOptions(latitude=TOKYO[0], longitude=TOKYO[1], radius_miles=5000)
        )

        assert [p.name for p in result.data] == ["Tokyo Dojo", "Kyoto Temple Stay", "Bangkok Loft"]
        distances = [p.distance for p in result.data]
        assert distances == sorted(distances)

    def test_continent_groups(self, db, destinations):
        result = SearchService(db).search_properties(PropertySearchOptions(continent="asia"))

        assert result.type == "continent"
        assert [(g.country, [p.name for p in g.properties]) for g in result.data] == [
            ("JP", ["Kyoto Temple Stay", "Tokyo Dojo"]),
            ("TH", ["Bangkok Loft"]),
        ]

    def test_include_flags(self, db, destinations):
        result = SearchService(db).search_properties(
            PropertySearchOptions(
                name_contains="Tokyo",
                include_host=True,
                include_images=True,
                include_programs=True,
                include_retreats=True,
            )
        )

        tokyo = result.data[0]
        assert tokyo.host.email == "hosts@example.com"
        assert tokyo.images == []
        assert tokyo.retreats == []
        assert sorted(p.name for p in tokyo.programs) == ["Tea Ceremony", "Unfinished", "Zen Mornings"]

    def test_failure_is_reported_not_raised(self, db):
        with patch.object(SearchRepository, "query_properties", side_effect=RuntimeError("boom")):
            result = SearchService(db).search_properties(PropertySearchOptions())

        assert not result.ok
        assert result.type == "na"
        assert result.error == "Failed to search properties"


class TestNearbyAndBoundingBox:
    def test_nearby_default_radius(self, db, destinations):
        places = SearchService(db).search_nearby_places(*TOKYO)

        assert [p.name for p in places] == ["Tokyo Dojo"]

    def test_nearby_caps_result_count(self, db, factory):
        for i in range(12):
            factory.property(name=f"Cabin {i:02d}", lat=46.0 + i * 0.01, lng=7.0)

        places = SearchService(db).search_nearby_places(46.0, 7.0)

        assert len(places) == 10
        assert places[0].name == "Cabin 00"

    def test_nearby_without_point_finds_nothing(self, db, destinations):
        assert SearchService(db).search_nearby_places(None, None) == []

    def test_bounding_box(self, db, destinations):
        # Japan's main islands, roughly
        places = SearchService(db).get_points_in_bounding_box(30.0, 46.0, 128.0, 146.0)

        assert [p.name for p in places] == ["Kyoto Temple Stay", "Tokyo Dojo"]
