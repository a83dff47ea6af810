import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_id():
    """Generate an opaque string primary key"""
    return str(uuid.uuid4())


class Host(Base):
    __tablename__ = "hosts"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    properties = relationship("Property", back_populates="host")
    price_mods = relationship("PriceMod", back_populates="host")


class Property(Base):
    __tablename__ = "properties"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    desc_short = Column(Text, nullable=True)
    address = Column(String(500), nullable=True)
    city = Column(String(255), nullable=True)
    country = Column(String(8), nullable=True, index=True)  # ISO alpha-2 code, e.g. "JP"
    lat = Column(Float, nullable=True, index=True)
    lng = Column(Float, nullable=True, index=True)
    type = Column(String(50), nullable=True)
    status = Column(String(20), default="published", nullable=False)
    host_id = Column(String(36), ForeignKey("hosts.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    host = relationship("Host", back_populates="properties")
    retreats = relationship("Retreat", back_populates="property")
    programs = relationship("Program", back_populates="property")
    images = relationship(
        "Image", back_populates="property", order_by="Image.order", foreign_keys="Image.property_id"
    )
    price_mods = relationship("PriceMod", back_populates="property")


class Retreat(Base):
    __tablename__ = "retreats"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=True, index=True)
    desc = Column(Text, nullable=True)
    booking_type = Column(String(50), nullable=True)
    status = Column(String(20), default="draft", nullable=False, index=True)  # draft, published
    min_guests = Column(Integer, default=1)
    max_guests = Column(Integer, default=-1)  # -1 means no limit
    property_id = Column(String(36), ForeignKey("properties.id"), nullable=False)
    host_id = Column(String(36), ForeignKey("hosts.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    property = relationship("Property", back_populates="retreats")
    instances = relationship("RetreatInstance", back_populates="retreat", cascade="all, delete-orphan")
    images = relationship(
        "Image", back_populates="retreat", order_by="Image.order", foreign_keys="Image.retreat_id"
    )
    price_mods = relationship("PriceMod", back_populates="retreat")


class Program(Base):
    __tablename__ = "programs"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=True, index=True)
    desc = Column(Text, nullable=True)
    booking_type = Column(String(50), nullable=True)
    status = Column(String(20), default="draft", nullable=False, index=True)
    min_guests = Column(Integer, default=1)
    max_guests = Column(Integer, default=-1)
    property_id = Column(String(36), ForeignKey("properties.id"), nullable=False)
    host_id = Column(String(36), ForeignKey("hosts.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    property = relationship("Property", back_populates="programs")
    instances = relationship("ProgramInstance", back_populates="program", cascade="all, delete-orphan")
    images = relationship(
        "Image", back_populates="program", order_by="Image.order", foreign_keys="Image.program_id"
    )
    price_mods = relationship("PriceMod", back_populates="program")


class RetreatInstance(Base):
    __tablename__ = "retreat_instances"

    id = Column(String(36), primary_key=True, default=generate_id)
    retreat_id = Column(String(36), ForeignKey("retreats.id"), nullable=False, index=True)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    duration = Column(Integer, default=0)
    itinerary = Column(Text, nullable=True)
    available_slots = Column(Integer, default=0, nullable=False)
    # Must be true whenever available_slots == 0 (enforced by InstanceService)
    is_full = Column(Boolean, default=False, nullable=False)
    verified_by = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    retreat = relationship("Retreat", back_populates="instances")
    price_mods = relationship("PriceMod", back_populates="retreat_instance", cascade="all, delete")


class ProgramInstance(Base):
    __tablename__ = "program_instances"

    id = Column(String(36), primary_key=True, default=generate_id)
    program_id = Column(String(36), ForeignKey("programs.id"), nullable=False, index=True)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    duration = Column(Integer, default=0)
    itinerary = Column(Text, nullable=True)
    available_slots = Column(Integer, default=0, nullable=False)
    is_full = Column(Boolean, default=False, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    program = relationship("Program", back_populates="instances")
    price_mods = relationship("PriceMod", back_populates="program_instance", cascade="all, delete")


class Image(Base):
    __tablename__ = "images"

    id = Column(String(36), primary_key=True, default=generate_id)
    file_path = Column(String(500), nullable=False)
    desc = Column(String(255), nullable=True)
    order = Column(Integer, default=0, nullable=False)
    property_id = Column(String(36), ForeignKey("properties.id"), nullable=True)
    retreat_id = Column(String(36), ForeignKey("retreats.id"), nullable=True)
    program_id = Column(String(36), ForeignKey("programs.id"), nullable=True)

    property = relationship("Property", back_populates="images", foreign_keys=[property_id])
    retreat = relationship("Retreat", back_populates="images", foreign_keys=[retreat_id])
    program = relationship("Program", back_populates="images", foreign_keys=[program_id])


class PriceMod(Base):
    """
    A price adjustment rule attached to at most one of host, property, program,
    retreat, retreat instance or program instance.

    `value` is a currency amount or a percentage depending on `unit`.
    """

    __tablename__ = "price_mods"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False, default="Price")
    desc = Column(Text, nullable=True)
    type = Column(String(20), nullable=False, default="BASE_PRICE")  # BASE_PRICE, BASE_MOD, ADDON, FEE, TAX
    currency = Column(String(3), nullable=False, default="USD")
    value = Column(Integer, nullable=False, default=0)
    unit = Column(String(10), nullable=False, default="FIXED")  # FIXED or PERCENT
    date_start = Column(DateTime, nullable=True)
    date_end = Column(DateTime, nullable=True)
    guest_min = Column(Integer, nullable=True)
    guest_max = Column(Integer, nullable=True)
    room_type = Column(String(50), nullable=False, default="all")
    host_id = Column(String(36), ForeignKey("hosts.id"), nullable=True, index=True)
    property_id = Column(String(36), ForeignKey("properties.id"), nullable=True, index=True)
    program_id = Column(String(36), ForeignKey("programs.id"), nullable=True, index=True)
    retreat_id = Column(String(36), ForeignKey("retreats.id"), nullable=True, index=True)
    retreat_instance_id = Column(
        String(36), ForeignKey("retreat_instances.id"), nullable=True, index=True
    )
    program_instance_id = Column(
        String(36), ForeignKey("program_instances.id"), nullable=True, index=True
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    host = relationship("Host", back_populates="price_mods")
    property = relationship("Property", back_populates="price_mods")
    program = relationship("Program", back_populates="price_mods")
    retreat = relationship("Retreat", back_populates="price_mods")
    retreat_instance = relationship("RetreatInstance", back_populates="price_mods")
    program_instance = relationship("ProgramInstance", back_populates="price_mods")
