"""Join record linking a category to the section that owns it."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studio_catalog.models.base import Base, TimestampMixin


class SectionCategory(Base, TimestampMixin):
    """Association row; a category has exactly one (category_id is unique)."""

    __tablename__ = "section_categories"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    section_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("catalog_sections.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    category_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("catalog_categories.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    # Relationships
    section: Mapped["Section"] = relationship("Section", back_populates="section_categories")
    category: Mapped["Category"] = relationship("Category", back_populates="section_link")

    def __repr__(self) -> str:
        return (
            f"<SectionCategory(section_id={self.section_id!r}, "
            f"category_id={self.category_id!r})>"
        )
