"""
Routers Package
"""

from inventory_api.routers.inventory import router as inventory_router
from inventory_api.routers.pages import router as pages_router
from inventory_api.routers.search import router as search_router

__all__ = [
    "inventory_router",
    "pages_router",
    "search_router",
]
