"""Pricing domain schemas - Pydantic models for price modifications"""

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

PRICE_MOD_TYPES = ("BASE_PRICE", "BASE_MOD", "ADDON", "FEE", "TAX", "FIXED", "PERCENT")
PRICE_MOD_UNITS = ("FIXED", "PERCENT")

# Update fields backed by NOT NULL columns; an explicit null is rejected
NON_NULLABLE_UPDATE_FIELDS = ("name", "type", "currency", "value", "unit", "roomType")

InstanceType = Literal["retreat", "program"]
PriceModSource = Literal["instance", "retreat", "program", "property"]


def _validate_type(v):
    if v is not None and v not in PRICE_MOD_TYPES:
        raise ValueError(f"type must be one of {', '.join(PRICE_MOD_TYPES)}")
    return v


def _validate_unit(v):
    if v is not None and v not in PRICE_MOD_UNITS:
        raise ValueError("unit must be FIXED or PERCENT")
    return v


class PriceModCreate(BaseModel):
    """Schema for creating a price modification"""

    name: str = Field("Price", min_length=2)
    desc: Optional[str] = "Additional description to show in a tooltip"
    type: str = "BASE_PRICE"
    currency: str = "USD"
    value: int = 0
    unit: str = "FIXED"
    dateStart: Optional[datetime] = None
    dateEnd: Optional[datetime] = None
    guestMin: Optional[int] = None
    guestMax: Optional[int] = None
    roomType: str = "all"
    hostId: Optional[str] = None
    propertyId: Optional[str] = None
    programId: Optional[str] = None
    retreatId: Optional[str] = None
    retreatInstanceId: Optional[str] = None
    programInstanceId: Optional[str] = None

    @field_validator("type")
    @classmethod
    def validate_type(cls, v):
        return _validate_type(v)

    @field_validator("unit")
    @classmethod
    def validate_unit(cls, v):
        return _validate_unit(v)


class PriceModUpdate(BaseModel):
    """
    Schema for partially updating a price modification.

    Scalar fields are applied when sent; an explicit null clears the
    nullable ones (desc, dates, guest bounds).

    Association ids follow three states: omitted (leave alone), a string
    (connect) or an explicit null (disconnect).
    """

    name: Optional[str] = Field(None, min_length=2)
    desc: Optional[str] = None
    type: Optional[str] = None
    currency: Optional[str] = None
    value: Optional[int] = None
    unit: Optional[str] = None
    dateStart: Optional[datetime] = None
    dateEnd: Optional[datetime] = None
    guestMin: Optional[int] = None
    guestMax: Optional[int] = None
    roomType: Optional[str] = None
    hostId: Optional[str] = None
    propertyId: Optional[str] = None
    programId: Optional[str] = None
    retreatId: Optional[str] = None
    retreatInstanceId: Optional[str] = None
    programInstanceId: Optional[str] = None

    @field_validator("type")
    @classmethod
    def validate_type(cls, v):
        return _validate_type(v)

    @field_validator("unit")
    @classmethod
    def validate_unit(cls, v):
        return _validate_unit(v)

    @model_validator(mode="after")
    def reject_null_required_fields(self):
        nulled = [f for f in NON_NULLABLE_UPDATE_FIELDS if f in self.model_fields_set and getattr(self, f) is None]
        if nulled:
            raise ValueError(f"{', '.join(nulled)} cannot be null")
        return self


# Request field -> ORM column for the scalar attributes
SCALAR_FIELDS = {
    "name": "name",
    "desc": "desc",
    "type": "type",
    "currency": "currency",
    "value": "value",
    "unit": "unit",
    "dateStart": "date_start",
    "dateEnd": "date_end",
    "guestMin": "guest_min",
    "guestMax": "guest_max",
    "roomType": "room_type",
}

# Relation name -> (request field, ORM foreign key column)
RELATION_FIELDS = {
    "host": ("hostId", "host_id"),
    "property": ("propertyId", "property_id"),
    "program": ("programId", "program_id"),
    "retreat": ("retreatId", "retreat_id"),
    "retreat_instance": ("retreatInstanceId", "retreat_instance_id"),
    "program_instance": ("programInstanceId", "program_instance_id"),
}


class Connect(BaseModel):
    id: str


class Disconnect(BaseModel):
    disconnect: Literal[True] = True


RelationOp = Union[Connect, Disconnect]


class PriceModRelations(BaseModel):
    """Which associations a create/update touches, and how"""

    host: Optional[RelationOp] = None
    property: Optional[RelationOp] = None
    program: Optional[RelationOp] = None
    retreat: Optional[RelationOp] = None
    retreat_instance: Optional[RelationOp] = None
    program_instance: Optional[RelationOp] = None

    @classmethod
    def for_create(cls, data: PriceModCreate) -> "PriceModRelations":
        ops = {}
        for relation, (field, _column) in RELATION_FIELDS.items():
            value = getattr(data, field)
            if value:
                ops[relation] = Connect(id=value)
        return cls(**ops)

    @classmethod
    def for_update(cls, data: PriceModUpdate) -> "PriceModRelations":
        ops = {}
        for relation, (field, _column) in RELATION_FIELDS.items():
            if field not in data.model_fields_set:
                continue
            value = getattr(data, field)
            ops[relation] = Connect(id=value) if value else Disconnect()
        return cls(**ops)

    def apply(self, price_mod) -> None:
        """Write the connect/disconnect operations onto a PriceMod row"""
        for relation, (_field, column) in RELATION_FIELDS.items():
            op = getattr(self, relation)
            if op is None:
                continue
            setattr(price_mod, column, op.id if isinstance(op, Connect) else None)

    def touched(self) -> list[str]:
        return [relation for relation in RELATION_FIELDS if getattr(self, relation) is not None]


class PriceModLookup(BaseModel):
    """Ids whose attached price mods should be collected"""

    property_id: Optional[str] = None
    retreat_id: Optional[str] = None
    program_id: Optional[str] = None
    retreat_instance_id: Optional[str] = None
    program_instance_id: Optional[str] = None

    def is_empty(self) -> bool:
        return not any(self.model_dump().values())


class RelatedIds(BaseModel):
    """Ancestor chain of a retreat/program instance"""

    instance_id: Optional[str] = None
    parent_id: Optional[str] = None
    property_id: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.instance_id is not None


class PriceModResponse(BaseModel):
    """Schema for price modification response"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    desc: Optional[str] = None
    type: str
    currency: str
    value: int
    unit: str
    date_start: Optional[datetime] = None
    date_end: Optional[datetime] = None
    guest_min: Optional[int] = None
    guest_max: Optional[int] = None
    room_type: str
    host_id: Optional[str] = None
    property_id: Optional[str] = None
    program_id: Optional[str] = None
    retreat_id: Optional[str] = None
    retreat_instance_id: Optional[str] = None
    program_instance_id: Optional[str] = None
    created_at: Optional[datetime] = None


class PriceModWithSource(PriceModResponse):
    source: PriceModSource


class AllPriceMods(BaseModel):
    all_price_mods: list[PriceModWithSource]
    property_id: Optional[str] = None
    retreat_id: Optional[str] = None
    program_id: Optional[str] = None


class AllPriceModsResponse(BaseModel):
    ok: bool
    data: Optional[AllPriceMods] = None
    error: Optional[str] = None


class PriceQuote(BaseModel):
    instance_id: str
    currency: str
    total_price: float
    price_mods: list[PriceModWithSource]
