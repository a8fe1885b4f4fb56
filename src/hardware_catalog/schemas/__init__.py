"""Schemas package re-exports for easy imports from `hardware_catalog.schemas`."""
from .schemas import (
    Hardware,
    HardwareBase,
    HardwareCreate,
    HardwareUpdate,
    HardwareWithImages,
    HardwareList,
    Image,
    ImageCreate,
)

__all__ = [
    "Hardware",
    "HardwareBase",
    "HardwareCreate",
    "HardwareUpdate",
    "HardwareWithImages",
    "HardwareList",
    "Image",
    "ImageCreate",
]
