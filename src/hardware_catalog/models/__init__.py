"""Models package re-exports for easy imports from `hardware_catalog.models`."""
from .models import Base, HardwareRecord, HardwareType, Image, TagList, MAX_RATING

__all__ = ["Base", "HardwareRecord", "HardwareType", "Image", "TagList", "MAX_RATING"]
