"""Translate search criteria and page requests into SQLAlchemy queries."""
from __future__ import annotations

import logging
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation

from sqlalchemy import Boolean, DateTime, Enum as SAEnum, Integer, or_, not_
from sqlalchemy.orm import Query, Session, joinedload

from ..models import HardwareRecord, HardwareType
from .types import Pageable, SearchCriteria

logger = logging.getLogger(__name__)

# Criteria keys that map straight onto a record column
SEARCH_FIELDS = {
    "id": HardwareRecord.id,
    "version": HardwareRecord.version,
    "name": HardwareRecord.name,
    "manufacturer": HardwareRecord.manufacturer,
    "type": HardwareRecord.type,
    "price": HardwareRecord.price,
    "rating": HardwareRecord.rating,
    "in_stock": HardwareRecord.in_stock,
    "tags": HardwareRecord.tags,
    "created": HardwareRecord.created,
    "updated": HardwareRecord.updated,
}

# Criteria keys that select records carrying this tag
TAG_LITERALS = ("DDR4", "gaming", "high-speed", "reliable")

_BOOLEAN_LITERALS = {"true": True, "1": True, "false": False, "0": False}

_SKIP = object()

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


def _parse_rating(value):
    # leading integer only: "3.5" and "3 stars" both read as 3
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    return int(match.group()) if match else None


def _parse_price(value):
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return price if price.is_finite() else None


def _coerce(attribute, value):
    """Convert a query-string value to the column's Python type.

    Returns ``_SKIP`` when the value cannot be converted.
    """
    if not isinstance(value, str):
        return value
    column_type = attribute.expression.type
    try:
        if isinstance(column_type, Boolean):
            return _BOOLEAN_LITERALS[value.strip().lower()]
        if isinstance(column_type, SAEnum):
            return HardwareType[value]
        if isinstance(column_type, Integer):
            return int(value)
        if isinstance(column_type, DateTime):
            return datetime.fromisoformat(value)
    except (KeyError, ValueError):
        return _SKIP
    return value


def has_tag(tag: str):
    """Predicate: the comma separated tag column contains ``tag``."""
    tags = HardwareRecord.tags
    return or_(
        tags == tag,
        tags.like(f"{tag},%"),
        tags.like(f"%,{tag}"),
        tags.like(f"%,{tag},%"),
    )


class CriteriaQueryBuilder:
    """Builds record queries; performs no validation of its own.

    Values that cannot be parsed for their column are dropped from the
    filter instead of failing, which the read service relies on.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def build_by_id(self, id: int, include_images: bool = False) -> Query:
        query = self.db.query(HardwareRecord)
        if include_images:
            query = query.options(joinedload(HardwareRecord.images))
        return query.filter(HardwareRecord.id == id)

    def build(self, criteria: SearchCriteria, pageable: Pageable) -> Query:
        logger.debug("build: criteria=%s, pageable=%s", criteria, pageable)
        predicates = []

        name = criteria.get("name")
        if isinstance(name, str):
            predicates.append(HardwareRecord.name.ilike(f"%{name}%"))

        if "rating" in criteria:
            rating = _parse_rating(criteria["rating"])
            if rating is not None:
                predicates.append(HardwareRecord.rating >= rating)

        if "price" in criteria:
            price = _parse_price(criteria["price"])
            if price is not None:
                predicates.append(HardwareRecord.price <= price)

        for key, value in criteria.items():
            if key in ("name", "rating", "price"):
                continue
            predicate = self._equality(key, value)
            if predicate is not None:
                predicates.append(predicate)

        query = self.db.query(HardwareRecord)
        if predicates:
            query = query.filter(*predicates)
        query = query.order_by(HardwareRecord.id)
        logger.debug("build: sql=%s", query)

        if pageable.size == 0:
            return query
        logger.debug("build: limit=%d, offset=%d", pageable.size, pageable.offset)
        return query.offset(pageable.offset).limit(pageable.size)

    @staticmethod
    def count(query: Query) -> int:
        """Number of rows matching ``query``'s filters, ignoring pagination."""
        # paging has to go before the ordering can be cleared
        return query.limit(None).offset(None).order_by(None).count()

    def _equality(self, key, value):
        if key in TAG_LITERALS:
            wanted = _BOOLEAN_LITERALS.get(str(value).strip().lower())
            if wanted is None:
                return None
            return has_tag(key) if wanted else or_(HardwareRecord.tags.is_(None), not_(has_tag(key)))
        attribute = SEARCH_FIELDS.get(key)
        if attribute is None:
            logger.debug("build: no column for criteria key %r", key)
            return None
        coerced = _coerce(attribute, value)
        if coerced is _SKIP:
            logger.debug("build: ignoring %s=%r", key, value)
            return None
        return attribute == coerced
