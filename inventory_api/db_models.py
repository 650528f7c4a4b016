"""
SQLAlchemy ORM models for the inventory database.
"""

from sqlalchemy import Column, Integer, String, Text

from inventory_api.database import Base


class InventoryItem(Base):
    """One inventoried device."""

    __tablename__ = "inventory"
    # Keep ids monotonic on SQLite as well
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    inventory_name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    photo = Column(String(255), nullable=True)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "inventory_name": self.inventory_name,
            "description": self.description or "",
            "photo": self.photo,
        }
