"""
Relational device storage backed by the ``inventory`` table.
"""

import logging
from typing import List, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from inventory_api.database import (
    build_session_factory,
    init_db,
    wait_for_database,
)
from inventory_api.db_models import InventoryItem
from inventory_api.errors import NotFoundError
from inventory_api.models import Device
from inventory_api.store import InventoryStore

logger = logging.getLogger(__name__)

# Largest value a BIGINT column can hold
MAX_ID = 2**63 - 1


def _to_device(item: InventoryItem) -> Device:
    return Device(**item.to_dict())


def _lookup(db: Session, item_id: int) -> Optional[InventoryItem]:
    # Ids outside the column range cannot match and would overflow the driver
    if not -MAX_ID <= item_id <= MAX_ID:
        return None
    return db.query(InventoryItem).filter(InventoryItem.id == item_id).first()


class SqlInventoryStore(InventoryStore):
    """
    Store records in a relational table.

    Each operation runs in its own session. Updates read and then write
    without a surrounding transaction across requests.
    """

    delete_receipt = True

    def __init__(
        self,
        engine: Engine,
        retry_interval: float = 2.0,
        retry_attempts: Optional[int] = None,
    ) -> None:
        self.engine = engine
        self.retry_interval = retry_interval
        self.retry_attempts = retry_attempts
        self.SessionLocal = build_session_factory(engine)

    def startup(self) -> None:
        wait_for_database(
            self.engine,
            interval=self.retry_interval,
            max_attempts=self.retry_attempts,
        )
        init_db(self.engine)

    def create(
        self,
        inventory_name: str,
        description: str = "",
        photo: Optional[str] = None,
    ) -> Device:
        with self.SessionLocal() as db:
            item = InventoryItem(
                inventory_name=inventory_name,
                description=description or "",
                photo=photo or None,
            )
            db.add(item)
            db.commit()
            db.refresh(item)
            logger.info(f"Registered device {item.id} ({item.inventory_name})")
            return _to_device(item)

    def list(self) -> List[Device]:
        with self.SessionLocal() as db:
            items = db.query(InventoryItem).order_by(InventoryItem.id).all()
            return [_to_device(item) for item in items]

    def find(self, item_id: int) -> Optional[Device]:
        with self.SessionLocal() as db:
            item = _lookup(db, item_id)
            return _to_device(item) if item else None

    def update(
        self,
        item_id: int,
        inventory_name: Optional[str] = None,
        description: Optional[str] = None,
        photo: Optional[str] = None,
    ) -> Device:
        with self.SessionLocal() as db:
            item = _lookup(db, item_id)
            if not item:
                raise NotFoundError()

            item.inventory_name = inventory_name or item.inventory_name
            item.description = description or item.description
            item.photo = photo or item.photo

            db.commit()
            db.refresh(item)
            return _to_device(item)

    def delete(self, item_id: int) -> Device:
        with self.SessionLocal() as db:
            item = _lookup(db, item_id)
            if not item:
                raise NotFoundError()

            device = _to_device(item)
            db.delete(item)
            db.commit()
            logger.info(f"Deleted device {item_id}")
            return device

    def search(self, query: str) -> List[Device]:
        with self.SessionLocal() as db:
            items = (
                db.query(InventoryItem)
                .filter(InventoryItem.inventory_name.ilike(f"%{query}%"))
                .order_by(InventoryItem.id)
                .all()
            )
            return [_to_device(item) for item in items]
