"""
Request dependencies resolving the components attached to the app.
"""

from fastapi import Request

from inventory_api.photos import PhotoStore
from inventory_api.store import InventoryStore


def get_store(request: Request) -> InventoryStore:
    """
    Storage backend chosen at startup.

    Usage:
        @router.get("/example")
        async def example(store: InventoryStore = Depends(get_store)):
            ...
    """
    return request.app.state.store


def get_photos(request: Request) -> PhotoStore:
    return request.app.state.photos
