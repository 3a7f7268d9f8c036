"""Item model: the leaf level of the catalog."""

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studio_catalog.models.base import Base, TimestampMixin


class Item(Base, TimestampMixin):
    """Catalog item (a sellable service), ordered within its category."""

    __tablename__ = "catalog_items"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    category_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("catalog_categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)

    # Relationships
    category: Mapped["Category"] = relationship("Category", back_populates="items")

    def __repr__(self) -> str:
        return f"<Item(id={self.id!r}, name={self.name!r}, category_id={self.category_id!r})>"
