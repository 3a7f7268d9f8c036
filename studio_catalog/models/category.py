"""Category model, linked to its section through SectionCategory."""

from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studio_catalog.models.base import Base, TimestampMixin


class Category(Base, TimestampMixin):
    """Catalog category, ordered within its section."""

    __tablename__ = "catalog_categories"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)

    # Relationships
    section_link: Mapped[Optional["SectionCategory"]] = relationship(
        "SectionCategory",
        back_populates="category",
        uselist=False,
        cascade="all, delete-orphan",
    )
    items: Mapped[list["Item"]] = relationship("Item", back_populates="category")

    @property
    def section_id(self) -> Optional[str]:
        """Owning section ID, read through the join record."""
        return self.section_link.section_id if self.section_link else None

    def __repr__(self) -> str:
        return f"<Category(id={self.id!r}, name={self.name!r}, position={self.position!r})>"
