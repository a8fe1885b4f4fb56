"""Value types shared by the query builder and the services."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, TypeVar

from .. import config
from .exceptions import VersionInvalidError

T = TypeVar("T")

# Flat field-name -> value mapping received from a client; never persisted.
SearchCriteria = Mapping[str, Any]


def _to_int(value, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class Pageable:
    """Zero-based page request. ``size == 0`` means "return every match"."""

    number: int = 0
    size: int = config.DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.number < 0:
            raise ValueError(f"page number must be >= 0, got {self.number}")
        if self.size < 0:
            raise ValueError(f"page size must be >= 0, got {self.size}")

    @property
    def offset(self) -> int:
        return self.number * self.size

    @classmethod
    def create(cls, number=None, size=None) -> Pageable:
        """Build a page request from raw query-string values.

        Missing or unparseable values fall back to the first page and the
        default size; sizes above ``MAX_PAGE_SIZE`` are clamped.
        """
        page_number = max(_to_int(number, 0), 0)
        page_size = _to_int(size, config.DEFAULT_PAGE_SIZE)
        if page_size < 0:
            page_size = config.DEFAULT_PAGE_SIZE
        page_size = min(page_size, config.MAX_PAGE_SIZE)
        return cls(number=page_number, size=page_size)


@dataclass(frozen=True)
class Slice(Generic[T]):
    content: list[T] = field(default_factory=list)
    total_elements: int = 0


@dataclass(frozen=True)
class VersionToken:
    """Wire form of a record version: the digits wrapped in double quotes."""

    PATTERN = re.compile(r'"(\d{1,3})"')

    value: int

    @classmethod
    def parse(cls, raw) -> VersionToken:
        match = cls.PATTERN.fullmatch(raw) if isinstance(raw, str) else None
        if match is None:
            raise VersionInvalidError(raw)
        return cls(int(match.group(1)))

    def __str__(self) -> str:
        return f'"{self.value}"'
