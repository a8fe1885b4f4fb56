"""Services package re-exports for easy imports from `hardware_catalog.services`."""
from .types import Pageable, SearchCriteria, Slice, VersionToken
from .exceptions import CatalogError, NotFoundError, NameExistsError, VersionInvalidError, VersionOutdatedError
from .query_builder import CriteriaQueryBuilder, SEARCH_FIELDS, TAG_LITERALS
from .read_service import ReadService
from .write_service import WriteService, MUTABLE_FIELDS

__all__ = [
    "Pageable",
    "SearchCriteria",
    "Slice",
    "VersionToken",
    "CatalogError",
    "NotFoundError",
    "NameExistsError",
    "VersionInvalidError",
    "VersionOutdatedError",
    "CriteriaQueryBuilder",
    "SEARCH_FIELDS",
    "TAG_LITERALS",
    "ReadService",
    "WriteService",
    "MUTABLE_FIELDS",
]
