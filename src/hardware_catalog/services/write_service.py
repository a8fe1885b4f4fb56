"""Create, update and delete hardware records.

Uniqueness of ``name`` is checked before insert, updates are guarded by the
record version, and a delete removes the record and its images in one
transaction.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import exists
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from .. import schemas
from ..models import HardwareRecord, Image
from ..notifier import LogNotifier, Notification, Notifier
from .exceptions import NameExistsError, NotFoundError, VersionOutdatedError
from .read_service import ReadService
from .types import VersionToken

logger = logging.getLogger(__name__)

# Fields a client may change on update; images are only written on create
MUTABLE_FIELDS = ("name", "manufacturer", "type", "price", "rating", "in_stock", "tags")


class WriteService:
    def __init__(
        self,
        db: Session,
        read_service: Optional[ReadService] = None,
        notifier: Optional[Notifier] = None,
    ) -> None:
        self.db = db
        self.read_service = read_service or ReadService(db)
        self.notifier = notifier or LogNotifier()

    def create(self, record: schemas.HardwareCreate) -> int:
        """Persist a new record with its images and return the new id.

        Raises NameExistsError if a record with the same name exists. The
        creation notification is sent after the commit and cannot fail the
        call.
        """
        logger.debug("create: record=%s", record)
        if self._name_exists(record.name):
            raise NameExistsError(record.name)

        db_record = HardwareRecord(
            **record.model_dump(exclude={"images"}),
            images=[Image(**image.model_dump()) for image in record.images],
        )
        self.db.add(db_record)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            # a concurrent create may have taken the name after our check
            if self._name_exists(record.name):
                raise NameExistsError(record.name) from exc
            raise
        self.db.refresh(db_record)
        logger.debug("create: id=%s", db_record.id)

        self._notify_created(db_record)
        return db_record.id

    def update(self, id: int, record: schemas.HardwareBase, version: str) -> int:
        """Merge ``record`` onto the stored row and return the new version.

        ``version`` is the quoted wire token, e.g. ``'"3"'``. A token lower
        than the stored version is rejected; an equal or higher one is
        accepted.
        """
        logger.debug("update: id=%s, record=%s, version=%s", id, record, version)
        token = VersionToken.parse(version)

        db_record = self.read_service.find_by_id(id)
        if token.value < db_record.version:
            logger.debug("update: version %d < stored version %d", token.value, db_record.version)
            raise VersionOutdatedError(token.value)

        changes = record.model_dump(exclude_unset=True)
        for field in MUTABLE_FIELDS:
            if field in changes:
                setattr(db_record, field, changes[field])
        db_record.updated = datetime.now()

        try:
            self.db.commit()
        except StaleDataError as exc:
            # another writer bumped the version between our read and write
            self.db.rollback()
            raise VersionOutdatedError(token.value) from exc
        except IntegrityError as exc:
            self.db.rollback()
            name = changes.get("name")
            if name is not None and self._name_exists(name, exclude_id=id):
                raise NameExistsError(name) from exc
            raise

        logger.debug("update: new version=%d", db_record.version)
        return db_record.version

    def delete(self, id: int) -> bool:
        """Delete a record and its images; False if there was nothing to delete."""
        logger.debug("delete: id=%s", id)
        try:
            db_record = self.read_service.find_by_id(id, include_images=True)
        except NotFoundError:
            db_record = None
        image_ids = [image.id for image in db_record.images] if db_record is not None else []

        try:
            for image_id in image_ids:
                self.db.query(Image).filter(Image.id == image_id).delete()
            deleted = self.db.query(HardwareRecord).filter(HardwareRecord.id == id).delete()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.debug("delete: id=%s, images=%d, deleted=%d", id, len(image_ids), deleted)
        return deleted > 0

    def _name_exists(self, name: str, exclude_id: Optional[int] = None) -> bool:
        condition = HardwareRecord.name == name
        if exclude_id is not None:
            condition = condition & (HardwareRecord.id != exclude_id)
        return self.db.query(exists().where(condition)).scalar()

    def _notify_created(self, db_record: HardwareRecord) -> None:
        notification = Notification(
            subject=f"new record {db_record.id}",
            body=f"{db_record.name} has been created",
        )
        try:
            self.notifier.send(notification)
        except Exception:
            logger.exception("create: notification for id=%s failed", db_record.id)
