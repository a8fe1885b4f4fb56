"""Read access to hardware records."""
from __future__ import annotations

import logging
import re
from typing import Optional

from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import set_committed_value

from ..models import HardwareRecord, HardwareType
from .exceptions import NotFoundError
from .query_builder import CriteriaQueryBuilder, SEARCH_FIELDS, TAG_LITERALS
from .types import Pageable, SearchCriteria, Slice

logger = logging.getLogger(__name__)


class ReadService:
    """The only read path for hardware records.

    Owns the not-found semantics: an unknown identity, an empty result page
    and an invalid criteria set all raise :class:`NotFoundError`.
    """

    ID_PATTERN = re.compile(r"^[1-9]\d{0,10}$")

    def __init__(self, db: Session, query_builder: Optional[CriteriaQueryBuilder] = None) -> None:
        self.db = db
        self.query_builder = query_builder or CriteriaQueryBuilder(db)

    def find_by_id(self, id: int, include_images: bool = False) -> HardwareRecord:
        logger.debug("find_by_id: id=%s, include_images=%s", id, include_images)
        record = self.query_builder.build_by_id(id, include_images=include_images).first()
        if record is None:
            logger.debug("find_by_id: id=%s not found", id)
            raise NotFoundError(f"no hardware with id {id}")
        _normalize_tags(record)
        if include_images:
            logger.debug("find_by_id: images=%s", record.images)
        return record

    def find(self, criteria: Optional[SearchCriteria], pageable: Pageable) -> Slice[HardwareRecord]:
        logger.debug("find: criteria=%s, pageable=%s", criteria, pageable)
        if not criteria:
            return self.find_all(pageable)

        if not self._check_keys(criteria) or not self._check_type(criteria):
            raise NotFoundError("invalid search criteria")

        query = self.query_builder.build(criteria, pageable)
        records = query.all()
        if not records:
            logger.debug("find: no hardware found")
            raise NotFoundError(f"no hardware found for {dict(criteria)}, page {pageable.number}")
        return self._create_slice(records, self.query_builder.count(query))

    def find_all(self, pageable: Pageable) -> Slice[HardwareRecord]:
        query = self.query_builder.build({}, pageable)
        records = query.all()
        if not records:
            raise NotFoundError(f"invalid page {pageable.number}")
        return self._create_slice(records, self.query_builder.count(query))

    def _create_slice(self, records, total_elements: int) -> Slice[HardwareRecord]:
        for record in records:
            _normalize_tags(record)
        logger.debug("create_slice: %d of %d records", len(records), total_elements)
        return Slice(content=records, total_elements=total_elements)

    def _check_keys(self, criteria: SearchCriteria) -> bool:
        valid = True
        for key in criteria:
            if key not in SEARCH_FIELDS and key not in TAG_LITERALS:
                logger.debug("check_keys: invalid search criteria key %r", key)
                valid = False
        return valid

    def _check_type(self, criteria: SearchCriteria) -> bool:
        value = criteria.get("type")
        if value is None:
            return True
        if isinstance(value, HardwareType):
            return True
        logger.debug("check_type: type=%s", value)
        return value in HardwareType.__members__


def _normalize_tags(record: HardwareRecord) -> None:
    # committed value: a missing tag list must not mark the row dirty
    if record.tags is None:
        set_committed_value(record, "tags", [])
