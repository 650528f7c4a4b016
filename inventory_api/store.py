"""
Device record storage.

``InventoryStore`` is the interface request handlers talk to. The
in-memory implementation lives here; the relational one is in
``inventory_api.db_store``.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from inventory_api.errors import NotFoundError
from inventory_api.models import Device

logger = logging.getLogger(__name__)


class InventoryStore(ABC):
    """Owns device records and assigns their ids."""

    # Answer deletions with {ok, deleted_id} instead of the removed record
    delete_receipt: bool = False

    def startup(self) -> None:
        """Prepare the backend before the server accepts requests."""

    @abstractmethod
    def create(
        self,
        inventory_name: str,
        description: str = "",
        photo: Optional[str] = None,
    ) -> Device:
        ...

    @abstractmethod
    def list(self) -> List[Device]:
        ...

    @abstractmethod
    def find(self, item_id: int) -> Optional[Device]:
        """Return the device with this id, or None."""

    def get(self, item_id: int) -> Device:
        device = self.find(item_id)
        if device is None:
            raise NotFoundError()
        return device

    @abstractmethod
    def update(
        self,
        item_id: int,
        inventory_name: Optional[str] = None,
        description: Optional[str] = None,
        photo: Optional[str] = None,
    ) -> Device:
        """
        Overwrite the fields given with a truthy value.

        Omitted or empty values keep what is stored, so a description
        cannot be cleared through an update.
        """

    @abstractmethod
    def delete(self, item_id: int) -> Device:
        """Remove the device and return it so its photo can be cleaned up."""

    @abstractmethod
    def search(self, query: str) -> List[Device]:
        """Case-insensitive substring match on inventory_name."""


class MemoryInventoryStore(InventoryStore):
    """
    Records kept in an ordered list for the lifetime of the process.

    Id assignment reads the highest id issued so far without locking, so
    two concurrent registrations can race.
    """

    def __init__(self) -> None:
        self._items: List[Device] = []
        self._last_id = 0

    def _next_id(self) -> int:
        current_max = max((item.id for item in self._items), default=0)
        return max(current_max, self._last_id) + 1

    def _locate(self, item_id: int) -> Device:
        for item in self._items:
            if item.id == item_id:
                return item
        raise NotFoundError()

    def create(
        self,
        inventory_name: str,
        description: str = "",
        photo: Optional[str] = None,
    ) -> Device:
        device = Device(
            id=self._next_id(),
            inventory_name=inventory_name,
            description=description or "",
            photo=photo or None,
        )
        self._items.append(device)
        self._last_id = device.id
        logger.info(f"Registered device {device.id} ({device.inventory_name})")
        return device.model_copy()

    def list(self) -> List[Device]:
        return [item.model_copy() for item in self._items]

    def find(self, item_id: int) -> Optional[Device]:
        try:
            return self._locate(item_id).model_copy()
        except NotFoundError:
            return None

    def update(
        self,
        item_id: int,
        inventory_name: Optional[str] = None,
        description: Optional[str] = None,
        photo: Optional[str] = None,
    ) -> Device:
        device = self._locate(item_id)

        if inventory_name:
            device.inventory_name = inventory_name
        if description:
            device.description = description
        if photo:
            device.photo = photo

        return device.model_copy()

    def delete(self, item_id: int) -> Device:
        device = self._locate(item_id)
        self._items.remove(device)
        logger.info(f"Deleted device {item_id}")
        return device

    def search(self, query: str) -> List[Device]:
        needle = query.lower()
        return [
            item.model_copy()
            for item in self._items
            if needle in item.inventory_name.lower()
        ]
