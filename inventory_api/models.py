"""
Inventory API - Pydantic models used for responses and the OpenAPI schema
"""

from typing import Optional

from pydantic import BaseModel, Field


# Device Models
class Device(BaseModel):
    id: int
    inventory_name: str
    description: str = ""
    photo: Optional[str] = Field(
        default=None, description="Stored photo filename, if any"
    )


class DeviceUpdate(BaseModel):
    """Fields accepted by PUT /inventory/{id}. Empty values are ignored."""

    inventory_name: Optional[str] = None
    description: Optional[str] = None


class DeletedDevice(BaseModel):
    ok: bool = True
    deleted_id: int


# Search Models
class SearchRequest(BaseModel):
    """
    Search by name substring or by exact id.

    Sending ``query`` performs a case-insensitive substring search and
    returns a list. Sending ``id`` returns the single matching device,
    with its photo reference only when ``has_photo`` is set.
    """

    query: Optional[str] = Field(
        default=None, description="Substring of inventory_name"
    )
    id: Optional[int] = Field(default=None, description="Exact device id")
    has_photo: bool = Field(
        default=False, description="Include the photo reference (id search only)"
    )


class ErrorResponse(BaseModel):
    error: str
