"""Section model: the root level of the catalog."""

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studio_catalog.models.base import Base, TimestampMixin


class Section(Base, TimestampMixin):
    """Top-level catalog section. Sections have no parent and are ordered globally."""

    __tablename__ = "catalog_sections"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)

    # Relationships
    section_categories: Mapped[list["SectionCategory"]] = relationship(
        "SectionCategory", back_populates="section"
    )

    def __repr__(self) -> str:
        return f"<Section(id={self.id!r}, name={self.name!r}, position={self.position!r})>"
