"""
Search route - name substring search and exact id lookup
"""

from typing import Any, Dict, List, Union

from fastapi import APIRouter, Depends, Request

from inventory_api.dependencies import get_store
from inventory_api.errors import NotFoundError, ValidationError
from inventory_api.models import Device, ErrorResponse, SearchRequest
from inventory_api.store import InventoryStore

router = APIRouter(tags=["Search"])

TRUTHY = ("1", "true", "yes", "on")


def _is_set(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return value is not None and str(value).strip().lower() in TRUTHY


async def _read_search_fields(request: Request) -> Dict[str, Any]:
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise ValidationError("Invalid JSON body")
        return body if isinstance(body, dict) else {}

    form = await request.form()
    return dict(form)


@router.post(
    "/search",
    response_model=Union[List[Device], Dict[str, Any]],
    responses={
        400: {"model": ErrorResponse, "description": "No query given"},
        404: {"model": ErrorResponse, "description": "No device with that id"},
    },
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": SearchRequest.model_json_schema()},
                "application/x-www-form-urlencoded": {
                    "schema": SearchRequest.model_json_schema()
                },
            }
        }
    },
)
async def search_devices(
    request: Request,
    store: InventoryStore = Depends(get_store),
) -> Union[List[Device], Dict[str, Any]]:
    """
    Search devices.

    With ``query``: every device whose name contains it, ignoring case.
    With ``id``: that single device; the photo reference is included
    only when ``has_photo`` is truthy.
    """
    fields = await _read_search_fields(request)

    if "query" in fields or "id" not in fields:
        query = fields.get("query")
        if not query:
            raise ValidationError("query is required")
        return store.search(str(query))

    try:
        item_id = int(str(fields["id"]).strip())
    except ValueError:
        raise NotFoundError()

    device = store.find(item_id)
    if device is None:
        raise NotFoundError()

    if _is_set(fields.get("has_photo")):
        return device.model_dump()
    return device.model_dump(exclude={"photo"})
