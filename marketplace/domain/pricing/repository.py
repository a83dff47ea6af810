"""Pricing repository - Database operations for price modifications"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...models import PriceMod, Program, ProgramInstance, Retreat, RetreatInstance


class PriceModRepository:
    """Repository for price mod database operations"""

    @staticmethod
    def get_retreat_instance_chain(db: Session, instance_id: str) -> Optional[tuple]:
        """(instance id, retreat id, property id) for a retreat instance"""
        return (
            db.query(RetreatInstance.id, RetreatInstance.retreat_id, Retreat.property_id)
            .outerjoin(Retreat, RetreatInstance.retreat_id == Retreat.id)
            .filter(RetreatInstance.id == instance_id)
            .first()
        )

    @staticmethod
    def get_program_instance_chain(db: Session, instance_id: str) -> Optional[tuple]:
        """(instance id, program id, property id) for a program instance"""
        return (
            db.query(ProgramInstance.id, ProgramInstance.program_id, Program.property_id)
            .outerjoin(Program, ProgramInstance.program_id == Program.id)
            .filter(ProgramInstance.id == instance_id)
            .first()
        )

    @staticmethod
    def find_attached_to_any(
        db: Session,
        property_id: Optional[str] = None,
        retreat_id: Optional[str] = None,
        program_id: Optional[str] = None,
        retreat_instance_id: Optional[str] = None,
        program_instance_id: Optional[str] = None,
    ) -> list[PriceMod]:
        """Price mods matching ANY of the given association ids, in one query"""
        conditions = []
        if property_id:
            conditions.append(PriceMod.property_id == property_id)
        if retreat_id:
            conditions.append(PriceMod.retreat_id == retreat_id)
        if program_id:
            conditions.append(PriceMod.program_id == program_id)
        if retreat_instance_id:
            conditions.append(PriceMod.retreat_instance_id == retreat_instance_id)
        if program_instance_id:
            conditions.append(PriceMod.program_instance_id == program_instance_id)

        if not conditions:
            return []

        return db.query(PriceMod).filter(or_(*conditions)).all()

    @staticmethod
    def get_price_mod_by_id(db: Session, price_mod_id: str) -> Optional[PriceMod]:
        return db.query(PriceMod).filter(PriceMod.id == price_mod_id).first()

    @staticmethod
    def list_by_retreat(db: Session, retreat_id: str) -> list[PriceMod]:
        return (
            db.query(PriceMod)
            .filter(PriceMod.retreat_id == retreat_id)
            .order_by(PriceMod.created_at.desc())
            .all()
        )

    @staticmethod
    def list_by_retreat_instance(db: Session, retreat_instance_id: str) -> list[PriceMod]:
        return (
            db.query(PriceMod)
            .filter(PriceMod.retreat_instance_id == retreat_instance_id)
            .order_by(PriceMod.created_at.desc())
            .all()
        )

    @staticmethod
    def list_by_program_instance(db: Session, program_instance_id: str) -> list[PriceMod]:
        return (
            db.query(PriceMod)
            .filter(PriceMod.program_instance_id == program_instance_id)
            .order_by(PriceMod.created_at.desc())
            .all()
        )

    @staticmethod
    def save_price_mod(db: Session, price_mod: PriceMod) -> PriceMod:
        """Insert or flush changes to a price mod"""
        db.add(price_mod)
        db.commit()
        db.refresh(price_mod)
        return price_mod

    @staticmethod
    def delete_price_mod(db: Session, price_mod: PriceMod) -> None:
        db.delete(price_mod)
        db.commit()
