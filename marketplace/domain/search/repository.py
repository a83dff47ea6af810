"""Search repository - Database queries feeding destination search"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Program, Property, Retreat


class SearchRepository:
    """Repository for search database operations"""

    @staticmethod
    def query_programs(db: Session, category: Optional[str] = None) -> list[Program]:
        """Published programs with their property and ordered images"""
        query = (
            db.query(Program)
            .options(joinedload(Program.property), selectinload(Program.images))
            .filter(Program.status == "published")
        )
        if category:
            query = query.filter(Program.category == category)
        return query.order_by(Program.created_at.desc(), Program.id).all()

    @staticmethod
    def query_retreats(db: Session, category: Optional[str] = None) -> list[Retreat]:
        """Published retreats with their property and ordered images"""
        query = (
            db.query(Retreat)
            .options(joinedload(Retreat.property), selectinload(Retreat.images))
            .filter(Retreat.status == "published")
        )
        if category:
            query = query.filter(Retreat.category == category)
        return query.order_by(Retreat.created_at.desc(), Retreat.id).all()

    @staticmethod
    def query_properties(
        db: Session,
        name_contains: Optional[str] = None,
        with_coordinates_only: bool = False,
        include_host: bool = False,
        include_images: bool = False,
        include_programs: bool = False,
        include_retreats: bool = False,
    ) -> list[Property]:
        """Properties, eagerly loading only the relations the caller asked for"""
        query = db.query(Property)

        if include_host:
            query = query.options(joinedload(Property.host))
        if include_images:
            query = query.options(selectinload(Property.images))
        if include_programs:
            query = query.options(selectinload(Property.programs))
        if include_retreats:
            query = query.options(selectinload(Property.retreats))

        if name_contains:
            query = query.filter(Property.name.ilike(f"%{name_contains}%"))

        if with_coordinates_only:
            query = query.filter(Property.lat.isnot(None), Property.lng.isnot(None))

        return query.order_by(Property.name, Property.id).all()

    @staticmethod
    def query_properties_in_bounding_box(
        db: Session, min_lat: float, max_lat: float, min_lon: float, max_lon: float
    ) -> list[Property]:
        return (
            db.query(Property)
            .filter(
                Property.lat >= min_lat,
                Property.lat <= max_lat,
                Property.lng >= min_lon,
                Property.lng <= max_lon,
            )
            .order_by(Property.name, Property.id)
            .all()
        )
