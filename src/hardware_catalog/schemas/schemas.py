from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal
from ..models import HardwareType, MAX_RATING  # Import from models, not define locally


class ImageCreate(BaseModel):
    caption: str = Field(..., min_length=1, max_length=32)
    content_type: Optional[str] = Field(None, max_length=16)

    model_config = ConfigDict(
        json_schema_extra={"example": {"caption": "Front", "content_type": "image/png"}}
    )


class Image(ImageCreate):
    id: int

    model_config = ConfigDict(from_attributes=True, frozen=True)


class HardwareBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: HardwareType
    manufacturer: str = Field(..., min_length=1, max_length=30)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    rating: int = Field(..., ge=1, le=MAX_RATING)
    in_stock: bool = False
    tags: Optional[list[str]] = None

    @field_validator("tags")
    @classmethod
    def tags_unique(cls, v):
        if v is not None and len(set(v)) != len(v):
            raise ValueError("tags must be unique")
        return v


class HardwareCreate(HardwareBase):
    images: list[ImageCreate] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "GeForce RTX 4090",
                "type": "GRAPHICS_CARD",
                "manufacturer": "NVIDIA",
                "price": "1599.99",
                "rating": 5,
                "in_stock": True,
                "tags": ["gaming", "high-speed"],
                "images": [{"caption": "Front", "content_type": "image/png"}],
            }
        }
    )


class HardwareUpdate(HardwareBase):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "GeForce RTX 4090 Ti",
                "type": "GRAPHICS_CARD",
                "manufacturer": "NVIDIA",
                "price": "1799.99",
                "rating": 5,
                "in_stock": False,
                "tags": ["gaming"],
            }
        }
    )


class Hardware(HardwareBase):
    id: int
    version: int
    tags: list[str] = Field(default_factory=list)
    created: datetime
    updated: datetime

    model_config = ConfigDict(
        from_attributes=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "version": 0,
                "name": "GeForce RTX 4090",
                "type": "GRAPHICS_CARD",
                "manufacturer": "NVIDIA",
                "price": "1599.99",
                "rating": 5,
                "in_stock": True,
                "tags": ["gaming", "high-speed"],
                "created": "2025-11-13T12:00:00",
                "updated": "2025-11-13T12:00:00",
            }
        },
    )


class HardwareWithImages(Hardware):
    images: list[Image] = Field(default_factory=list)


class HardwareList(BaseModel):
    items: list[Hardware]
    page: int
    size: int
    total: int

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "items": [
                    {
                        "id": 1,
                        "version": 0,
                        "name": "GeForce RTX 4090",
                        "type": "GRAPHICS_CARD",
                        "manufacturer": "NVIDIA",
                        "price": "1599.99",
                        "rating": 5,
                        "in_stock": True,
                        "tags": ["gaming"],
                        "created": "2025-11-13T12:00:00",
                        "updated": "2025-11-13T12:00:00",
                    }
                ],
                "page": 0,
                "size": 5,
                "total": 1,
            }
        }
    )
