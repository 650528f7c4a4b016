"""
Inventory routes - device registration, lookup, updates and photos
"""

import logging
from typing import List, Optional, Tuple, Union

from fastapi import APIRouter, Depends, File, Request, Response, UploadFile
from fastapi.responses import FileResponse
from starlette.datastructures import UploadFile as StarletteUploadFile

from inventory_api.dependencies import get_photos, get_store
from inventory_api.errors import NotFoundError, ValidationError
from inventory_api.models import DeletedDevice, Device, DeviceUpdate, ErrorResponse
from inventory_api.photos import PhotoStore
from inventory_api.store import InventoryStore

router = APIRouter(tags=["Inventory"])
logger = logging.getLogger(__name__)

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Not found"}}

_PHOTO_FORM_SCHEMA = {
    "type": "object",
    "properties": {
        "inventory_name": {"type": "string"},
        "description": {"type": "string"},
        "photo": {"type": "string", "format": "binary"},
    },
}

# Both form uploads and JSON bodies are accepted for device fields
_DEVICE_BODY = {
    "requestBody": {
        "content": {
            "multipart/form-data": {"schema": _PHOTO_FORM_SCHEMA},
            "application/x-www-form-urlencoded": {"schema": _PHOTO_FORM_SCHEMA},
            "application/json": {"schema": DeviceUpdate.model_json_schema()},
        }
    }
}


def _has_upload(upload: Optional[StarletteUploadFile]) -> bool:
    # Browsers submit an empty file part when no file was chosen
    return isinstance(upload, StarletteUploadFile) and bool(upload.filename)


async def _store_upload(photos: PhotoStore, upload: StarletteUploadFile) -> str:
    content = await upload.read()
    return photos.save(content, upload.filename)


def _text(value) -> Optional[str]:
    if value is None or isinstance(value, StarletteUploadFile):
        return None
    return str(value)


async def _read_device_fields(
    request: Request,
) -> Tuple[DeviceUpdate, Optional[StarletteUploadFile]]:
    """Read device fields from a JSON body or a (multipart) form."""
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise ValidationError("Invalid JSON body")
        if not isinstance(body, dict):
            raise ValidationError("JSON body must be an object")
        return (
            DeviceUpdate(
                inventory_name=_text(body.get("inventory_name")),
                description=_text(body.get("description")),
            ),
            None,
        )

    form = await request.form()
    upload = form.get("photo")
    return (
        DeviceUpdate(
            inventory_name=_text(form.get("inventory_name")),
            description=_text(form.get("description")),
        ),
        upload if _has_upload(upload) else None,
    )


@router.post(
    "/register",
    response_model=Device,
    status_code=201,
    responses={400: {"model": ErrorResponse, "description": "Missing inventory_name"}},
    openapi_extra=_DEVICE_BODY,
)
async def register_device(
    request: Request,
    store: InventoryStore = Depends(get_store),
    photos: PhotoStore = Depends(get_photos),
) -> Device:
    """
    Register a new device.

    Accepts a multipart form with the device name, an optional
    description and an optional photo file, or the same fields
    (without a photo) as JSON.
    """
    fields, upload = await _read_device_fields(request)
    if not fields.inventory_name:
        raise ValidationError("inventory_name is required")

    photo_file = await _store_upload(photos, upload) if upload else None

    return store.create(
        inventory_name=fields.inventory_name,
        description=fields.description or "",
        photo=photo_file,
    )


@router.get("/inventory", response_model=List[Device])
async def list_devices(store: InventoryStore = Depends(get_store)) -> List[Device]:
    """List all registered devices."""
    return store.list()


@router.get("/inventory/{item_id}", response_model=Device, responses=NOT_FOUND)
async def get_device(
    item_id: int,
    store: InventoryStore = Depends(get_store),
) -> Device:
    """Get a device by id."""
    return store.get(item_id)


@router.put(
    "/inventory/{item_id}",
    response_model=Device,
    responses=NOT_FOUND,
    openapi_extra=_DEVICE_BODY,
)
async def update_device(
    item_id: int,
    request: Request,
    store: InventoryStore = Depends(get_store),
    photos: PhotoStore = Depends(get_photos),
) -> Device:
    """
    Update a device.

    Only non-empty fields are applied. A new photo replaces the stored
    one, and the previous file is removed from disk.
    """
    existing = store.get(item_id)
    fields, upload = await _read_device_fields(request)

    new_photo = await _store_upload(photos, upload) if upload else None

    updated = store.update(
        item_id,
        inventory_name=fields.inventory_name,
        description=fields.description,
        photo=new_photo,
    )

    if new_photo and existing.photo and existing.photo != new_photo:
        photos.delete(existing.photo)

    return updated


@router.delete(
    "/inventory/{item_id}",
    response_model=Union[DeletedDevice, Device],
    responses=NOT_FOUND,
)
async def delete_device(
    item_id: int,
    store: InventoryStore = Depends(get_store),
    photos: PhotoStore = Depends(get_photos),
) -> Union[DeletedDevice, Device]:
    """
    Delete a device together with its photo file.

    The in-memory backend returns the deleted device; the relational
    backend returns ``{"ok": true, "deleted_id": <id>}``.
    """
    device = store.delete(item_id)
    photos.delete(device.photo)

    if store.delete_receipt:
        return DeletedDevice(ok=True, deleted_id=device.id)
    return device


@router.get(
    "/inventory/{item_id}/photo",
    response_class=FileResponse,
    responses={
        200: {"content": {"image/*": {}}, "description": "Photo file"},
        **NOT_FOUND,
    },
)
async def get_device_photo(
    item_id: int,
    store: InventoryStore = Depends(get_store),
    photos: PhotoStore = Depends(get_photos),
) -> Response:
    """Download the photo of a device."""
    device = store.get(item_id)
    if not device.photo:
        raise NotFoundError()

    if not photos.exists(device.photo):
        logger.warning(f"Photo {device.photo} of device {item_id} missing on disk")
        return Response(status_code=404)

    return FileResponse(photos.resolve(device.photo))


@router.put(
    "/inventory/{item_id}/photo",
    response_model=Device,
    responses={
        400: {"model": ErrorResponse, "description": "No photo attached"},
        **NOT_FOUND,
    },
)
async def replace_device_photo(
    item_id: int,
    photo: Optional[UploadFile] = File(None),
    store: InventoryStore = Depends(get_store),
    photos: PhotoStore = Depends(get_photos),
) -> Device:
    """Replace the photo of a device, removing the previous file."""
    existing = store.get(item_id)

    if not _has_upload(photo):
        raise ValidationError("photo is required")

    new_photo = await _store_upload(photos, photo)
    updated = store.update(item_id, photo=new_photo)

    if existing.photo and existing.photo != new_photo:
        photos.delete(existing.photo)

    return updated
