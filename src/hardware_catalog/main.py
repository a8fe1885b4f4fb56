import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Depends, Response, status, Header, Path, Request, BackgroundTasks
from sqlalchemy.orm import Session

from . import models, schemas, database, config
from .background import BackgroundNotifier
from .notifier import Notifier, get_notifier
from .services import (
    Pageable,
    ReadService,
    WriteService,
    VersionToken,
    NotFoundError,
    NameExistsError,
    VersionInvalidError,
    VersionOutdatedError,
)

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Hardware Catalog")

# Create tables on startup; there is no migration tooling
models.Base.metadata.create_all(bind=database.engine)

ID_PATTERN = ReadService.ID_PATTERN.pattern

PAGING_PARAMS = ("page", "size")


def get_read_service(db: Session = Depends(database.get_db)) -> ReadService:
    return ReadService(db)


def get_write_service(
    background_tasks: BackgroundTasks,
    db: Session = Depends(database.get_db),
    notifier: Notifier = Depends(get_notifier),
) -> WriteService:
    return WriteService(db, notifier=BackgroundNotifier(notifier, background_tasks))


@app.get(
    "/hardware/{hardware_id}",
    response_model=schemas.HardwareWithImages,
    response_model_exclude_unset=True,
    responses={
        200: {
            "description": "Hardware record, ETag carries its version",
            "content": {"application/json": {"example": schemas.Hardware.model_config["json_schema_extra"]["example"]}},
        },
        304: {"description": "Not Modified - If-None-Match equals the current version"},
        404: {"description": "Not Found", "content": {"application/json": {"example": {"detail": "Hardware not found"}}}},
    },
)
def read_hardware(
    response: Response,
    hardware_id: str = Path(..., pattern=ID_PATTERN),
    images: bool = False,
    if_none_match: Optional[str] = Header(None),
    service: ReadService = Depends(get_read_service),
):
    """Retrieve a hardware record by id. Pass `?images=true` to include its images."""
    try:
        record = service.find_by_id(int(hardware_id), include_images=images)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Hardware not found")

    etag = str(VersionToken(record.version))
    if if_none_match == etag:
        return Response(status_code=status.HTTP_304_NOT_MODIFIED)
    response.headers["ETag"] = etag

    data = schemas.Hardware.model_validate(record).model_dump()
    if images:
        data["images"] = [schemas.Image.model_validate(image).model_dump() for image in record.images]
    return data


@app.get(
    "/hardware/",
    response_model=schemas.HardwareList,
    responses={
        200: {
            "description": "Page of matching hardware",
            "content": {"application/json": {"example": schemas.HardwareList.model_config["json_schema_extra"]["example"]}},
        },
        404: {"description": "Nothing matched, or the criteria were invalid", "content": {"application/json": {"example": {"detail": "invalid search criteria"}}}},
    },
)
def search_hardware(
    request: Request,
    page: Optional[str] = None,
    size: Optional[str] = None,
    service: ReadService = Depends(get_read_service),
):
    """Search hardware. Every query parameter other than `page` and `size` is a
    search criterion: `name` matches substrings, `rating` is a minimum, `price`
    a maximum, other fields match exactly. `page` is zero based; `size=0`
    returns every match.
    """
    criteria = {k: v for k, v in request.query_params.items() if k not in PAGING_PARAMS}
    pageable = Pageable.create(page, size)
    try:
        result = service.find(criteria, pageable)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    items = [schemas.Hardware.model_validate(record) for record in result.content]
    return {"items": items, "page": pageable.number, "size": pageable.size, "total": result.total_elements}


@app.post(
    "/hardware/",
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Hardware created, Location header points to it"},
        422: {"description": "Name exists or invalid payload", "content": {"application/json": {"example": {"detail": "hardware name 'GeForce RTX 4090' already exists"}}}},
    },
)
def create_hardware(hardware: schemas.HardwareCreate, service: WriteService = Depends(get_write_service)):
    """Create a hardware record together with its images.

    - Returns 201 and a Location header on success.
    - Returns 422 if the `name` already exists.
    """
    try:
        hardware_id = service.create(hardware)
    except NameExistsError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": f"/hardware/{hardware_id}"})


@app.put(
    "/hardware/{hardware_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        204: {"description": "Updated, ETag carries the new version"},
        404: {"description": "Not Found", "content": {"application/json": {"example": {"detail": "Hardware not found"}}}},
        412: {"description": "Version in If-Match is malformed or outdated", "content": {"application/json": {"example": {"detail": "version 0 is outdated"}}}},
        422: {"description": "Name exists or invalid payload"},
        428: {"description": "If-Match header missing", "content": {"application/json": {"example": {"detail": "Header If-Match missing"}}}},
    },
)
def update_hardware(
    hardware: schemas.HardwareUpdate,
    hardware_id: str = Path(..., pattern=ID_PATTERN),
    if_match: Optional[str] = Header(None),
    service: WriteService = Depends(get_write_service),
):
    """Update a hardware record. The `If-Match` header must carry the version
    from the last read, e.g. `"0"`.
    """
    if if_match is None:
        raise HTTPException(status_code=status.HTTP_428_PRECONDITION_REQUIRED, detail="Header If-Match missing")
    try:
        version = service.update(int(hardware_id), hardware, if_match)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Hardware not found")
    except (VersionInvalidError, VersionOutdatedError) as e:
        raise HTTPException(status_code=status.HTTP_412_PRECONDITION_FAILED, detail=str(e))
    except NameExistsError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers={"ETag": str(VersionToken(version))})


@app.delete(
    "/hardware/{hardware_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={204: {"description": "Deleted, or there was nothing to delete"}},
)
def delete_hardware(hardware_id: str = Path(..., pattern=ID_PATTERN), service: WriteService = Depends(get_write_service)):
    """Delete a hardware record and its images. Deleting twice is not an error."""
    deleted = service.delete(int(hardware_id))
    logger.info("delete_hardware: id=%s deleted=%s", hardware_id, deleted)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
