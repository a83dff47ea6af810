"""Pricing service - Price mod resolution, ordering and CRUD"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import PriceMod
from ...shared.results import ActionResult, ErrorKind
from .calculator import calculate_price
from .ordering import DEFAULT_ORDERING, PriceModOrdering, derive_source
from .repository import PriceModRepository
from .schemas import (
    RELATION_FIELDS,
    SCALAR_FIELDS,
    AllPriceMods,
    PriceModCreate,
    PriceModLookup,
    PriceModRelations,
    PriceModResponse,
    PriceModUpdate,
    PriceModWithSource,
    PriceQuote,
    RelatedIds,
)

logger = logging.getLogger(__name__)

INSTANCE_TYPES = ("retreat", "program")


def attached_columns(price_mod: PriceMod) -> list[str]:
    """Foreign key columns currently set on a price mod"""
    return [column for _field, column in RELATION_FIELDS.values() if getattr(price_mod, column)]


class PriceModService:
    """Service layer for price modification business logic"""

    def __init__(self, db: Session, ordering: Optional[PriceModOrdering] = None):
        self.db = db
        self.repo = PriceModRepository()
        self.ordering = ordering or DEFAULT_ORDERING

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve_related_ids(self, instance_id: str, instance_type: str) -> RelatedIds:
        """
        Walk instance -> retreat/program -> property.

        An unknown instance id yields a RelatedIds with every field None;
        callers check `.found`. Data-layer errors propagate.
        """
        if instance_type == "retreat":
            row = self.repo.get_retreat_instance_chain(self.db, instance_id)
        elif instance_type == "program":
            row = self.repo.get_program_instance_chain(self.db, instance_id)
        else:
            raise ValueError(f"Unknown instance type: {instance_type}")

        if not row:
            logger.info(f"🔍 No {instance_type} instance with id {instance_id}")
            return RelatedIds()

        instance, parent, property_id = row
        return RelatedIds(instance_id=instance, parent_id=parent, property_id=property_id)

    def collect_price_mods(self, ids: PriceModLookup) -> list[PriceModWithSource]:
        """Every price mod attached to any of the ids, tagged with its source"""
        if ids.is_empty():
            return []

        rows = self.repo.find_attached_to_any(self.db, **ids.model_dump())
        return [
            PriceModWithSource(
                **PriceModResponse.model_validate(row).model_dump(), source=derive_source(row)
            )
            for row in rows
        ]

    def sort_price_mods(self, price_mods: list[PriceModWithSource]) -> list[PriceModWithSource]:
        return self.ordering.sort(price_mods)

    def get_all_price_mods(self, instance_id: str, instance_type: str) -> ActionResult:
        """Resolved and ordered price mods for a retreat or program instance"""
        if instance_type not in INSTANCE_TYPES:
            return ActionResult.failure(
                f"Instance type must be one of: {', '.join(INSTANCE_TYPES)}", ErrorKind.VALIDATION
            )

        try:
            ids = self.resolve_related_ids(instance_id, instance_type)
            if not ids.found:
                return ActionResult.failure(f"{instance_type} instance not found", ErrorKind.NOT_FOUND)

            is_retreat = instance_type == "retreat"
            lookup = PriceModLookup(
                property_id=ids.property_id,
                retreat_id=ids.parent_id if is_retreat else None,
                program_id=None if is_retreat else ids.parent_id,
                retreat_instance_id=ids.instance_id if is_retreat else None,
                program_instance_id=None if is_retreat else ids.instance_id,
            )
            price_mods = self.sort_price_mods(self.collect_price_mods(lookup))

            return ActionResult.success(
                AllPriceMods(
                    all_price_mods=price_mods,
                    property_id=ids.property_id,
                    retreat_id=ids.parent_id if is_retreat else None,
                    program_id=None if is_retreat else ids.parent_id,
                )
            )
        except Exception as e:
            logger.error(
                f"❌ Error fetching price modifications for {instance_type} instance {instance_id}: {e}"
            )
            return ActionResult.failure("Failed to fetch price modifications", ErrorKind.DATA_LAYER)

    def quote_instance(self, instance_id: str, instance_type: str) -> ActionResult:
        """Total price for one booking of an instance, from its resolved price mods"""
        result = self.get_all_price_mods(instance_id, instance_type)
        if not result.ok:
            return result

        price_mods = result.data.all_price_mods
        currencies = sorted({mod.currency for mod in price_mods})
        if len(currencies) > 1:
            logger.warning(f"⚠️ Mixed currencies on {instance_type} instance {instance_id}: {currencies}")
            return ActionResult.failure(
                f"Price modifications use more than one currency: {', '.join(currencies)}",
                ErrorKind.VALIDATION,
            )
        currency = currencies[0] if currencies else "USD"
        return ActionResult.success(
            PriceQuote(
                instance_id=instance_id,
                currency=currency,
                total_price=calculate_price(price_mods),
                price_mods=price_mods,
            )
        )

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def get_price_mod(self, price_mod_id: str) -> ActionResult:
        try:
            price_mod = self.repo.get_price_mod_by_id(self.db, price_mod_id)
        except SQLAlchemyError as e:
            logger.error(f"❌ Error fetching price modification {price_mod_id}: {e}")
            return ActionResult.failure("Failed to fetch price modification", ErrorKind.DATA_LAYER)

        if not price_mod:
            return ActionResult.failure("Price modification not found", ErrorKind.NOT_FOUND)
        return ActionResult.success(PriceModResponse.model_validate(price_mod))

    def list_for_retreat(self, retreat_id: str) -> ActionResult:
        return self._list(self.repo.list_by_retreat, retreat_id)

    def list_for_retreat_instance(self, retreat_instance_id: str) -> ActionResult:
        return self._list(self.repo.list_by_retreat_instance, retreat_instance_id)

    def list_for_program_instance(self, program_instance_id: str) -> ActionResult:
        return self._list(self.repo.list_by_program_instance, program_instance_id)

    def _list(self, query, entity_id: str) -> ActionResult:
        try:
            rows = query(self.db, entity_id)
        except SQLAlchemyError as e:
            logger.error(f"❌ Error fetching price modifications for {entity_id}: {e}")
            return ActionResult.failure("Failed to fetch price modifications", ErrorKind.DATA_LAYER)
        return ActionResult.success([PriceModResponse.model_validate(row) for row in rows])

    def create_price_mod(self, data: PriceModCreate) -> ActionResult:
        """Create a price mod attached to at most one owner"""
        relations = PriceModRelations.for_create(data)
        touched = relations.touched()
        if len(touched) > 1:
            return ActionResult.failure(
                f"A price modification can be attached to only one owner, got: {', '.join(touched)}",
                ErrorKind.VALIDATION,
            )

        price_mod = PriceMod(**{column: getattr(data, field) for field, column in SCALAR_FIELDS.items()})
        relations.apply(price_mod)

        try:
            price_mod = self.repo.save_price_mod(self.db, price_mod)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error creating price modification: {e}")
            return ActionResult.failure("Failed to create price modification", ErrorKind.DATA_LAYER)

        logger.info(f"✅ Created price mod {price_mod.id} ({', '.join(touched) or 'unattached'})")
        return ActionResult.success(PriceModResponse.model_validate(price_mod))

    def update_price_mod(self, price_mod_id: str, data: PriceModUpdate) -> ActionResult:
        """Partial update of the fields sent; null clears nullable scalars and disconnects associations"""
        try:
            price_mod = self.repo.get_price_mod_by_id(self.db, price_mod_id)
        except SQLAlchemyError as e:
            logger.error(f"❌ Error fetching price modification {price_mod_id}: {e}")
            return ActionResult.failure("Failed to update price modification", ErrorKind.DATA_LAYER)

        if not price_mod:
            return ActionResult.failure("Price modification not found", ErrorKind.NOT_FOUND)

        for field, column in SCALAR_FIELDS.items():
            if field in data.model_fields_set:
                setattr(price_mod, column, getattr(data, field))

        relations = PriceModRelations.for_update(data)
        relations.apply(price_mod)

        attached = attached_columns(price_mod)
        if len(attached) > 1:
            self.db.rollback()
            return ActionResult.failure(
                f"A price modification can be attached to only one owner, got: {', '.join(attached)}",
                ErrorKind.VALIDATION,
            )

        try:
            price_mod = self.repo.save_price_mod(self.db, price_mod)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error updating price modification {price_mod_id}: {e}")
            return ActionResult.failure("Failed to update price modification", ErrorKind.DATA_LAYER)

        logger.info(f"✅ Updated price mod {price_mod.id} (relations: {', '.join(relations.touched()) or 'unchanged'})")
        return ActionResult.success(PriceModResponse.model_validate(price_mod))

    def delete_price_mod(self, price_mod_id: str) -> ActionResult:
        try:
            price_mod = self.repo.get_price_mod_by_id(self.db, price_mod_id)
            if not price_mod:
                return ActionResult.failure("Price modification not found", ErrorKind.NOT_FOUND)
            self.repo.delete_price_mod(self.db, price_mod)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error deleting price modification {price_mod_id}: {e}")
            return ActionResult.failure("Failed to delete price modification", ErrorKind.DATA_LAYER)

        logger.info(f"🗑️ Deleted price mod {price_mod_id}")
        return ActionResult.success()
