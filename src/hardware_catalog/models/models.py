from sqlalchemy import (
    Boolean,
    Column,
    Integer,
    Numeric,
    String,
    Text,
    CheckConstraint,
    UniqueConstraint,
    ForeignKey,
    Enum as SAEnum,
    DateTime,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.types import TypeDecorator
from datetime import datetime
import enum

Base = declarative_base()

MAX_RATING = 5


class HardwareType(enum.Enum):
    GRAPHICS_CARD = "GRAPHICS_CARD"
    PROCESSOR = "PROCESSOR"
    MOTHERBOARD = "MOTHERBOARD"
    RAM = "RAM"
    SSD = "SSD"
    HDD = "HDD"
    POWER_SUPPLY = "POWER_SUPPLY"
    CASE = "CASE"
    COOLER = "COOLER"
    FAN = "FAN"


class TagList(TypeDecorator):
    """List of tags stored as one comma separated text column.

    NULL is loaded as ``None``; callers decide how to present a missing value.
    Plain strings are bound unchanged so LIKE/equality filters work on the
    raw column.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None or isinstance(value, str):
            return value
        return ",".join(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return value.split(",") if value else []


def _next_version(current):
    return 0 if current is None else current + 1


class HardwareRecord(Base):
    __tablename__ = "hardware"
    id = Column(Integer, primary_key=True, index=True)
    version = Column(Integer, nullable=False)
    name = Column(String, nullable=False, index=True)
    manufacturer = Column(String, nullable=False)
    type = Column(SAEnum(HardwareType), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    rating = Column(Integer, nullable=False)
    in_stock = Column(Boolean, nullable=False, default=False)
    tags = Column(TagList, nullable=True)
    created = Column(DateTime, default=datetime.now, nullable=False)
    updated = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    images = relationship("Image", back_populates="hardware", order_by="Image.id")

    # version_id_col turns every flush of a dirty record into
    # UPDATE ... WHERE id = :id AND version = :loaded_version
    __mapper_args__ = {
        "version_id_col": version,
        "version_id_generator": _next_version,
    }

    __table_args__ = (
        UniqueConstraint("name", name="uq_hardware_name"),
        CheckConstraint("price >= 0", name="ck_hardware_price_non_negative"),
        CheckConstraint(f"rating >= 1 AND rating <= {MAX_RATING}", name="ck_hardware_rating_range"),
    )

    def __repr__(self):
        return f"<HardwareRecord id={self.id} name={self.name!r} version={self.version}>"


class Image(Base):
    __tablename__ = "image"
    id = Column(Integer, primary_key=True, index=True)
    caption = Column(String, nullable=False)
    content_type = Column(String, nullable=True)
    hardware_id = Column(Integer, ForeignKey("hardware.id"), nullable=False, index=True)

    hardware = relationship("HardwareRecord", back_populates="images")
