"""Initial schema: catalog sections, categories, section_categories, items

Revision ID: 5c1e9a3f7b20
Revises:
Create Date: 2026-10-19 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e9a3f7b20"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp_columns(is_sqlite: bool) -> list[sa.Column]:
    # Use appropriate timestamp defaults
    if is_sqlite:
        default = sa.text("(datetime('now'))")
        timestamp_type = sa.DateTime()
    else:
        default = sa.text("now()")
        timestamp_type = sa.DateTime(timezone=True)
    return [
        sa.Column("created_at", timestamp_type, server_default=default, nullable=False),
        sa.Column("updated_at", timestamp_type, server_default=default, nullable=False),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    is_sqlite = bind.dialect.name == "sqlite"

    # Create sections table (root level)
    op.create_table(
        "catalog_sections",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False),
        *_timestamp_columns(is_sqlite),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_catalog_sections_position"), "catalog_sections", ["position"], unique=False)

    # Create categories table
    op.create_table(
        "catalog_categories",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        *_timestamp_columns(is_sqlite),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_catalog_categories_position"), "catalog_categories", ["position"], unique=False)

    # Create join table: one row per category
    op.create_table(
        "section_categories",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("section_id", sa.String(length=255), nullable=False),
        sa.Column("category_id", sa.String(length=255), nullable=False),
        *_timestamp_columns(is_sqlite),
        sa.ForeignKeyConstraint(
            ["section_id"],
            ["catalog_sections.id"],
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["category_id"],
            ["catalog_categories.id"],
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("category_id"),
    )
    op.create_index(op.f("ix_section_categories_section_id"), "section_categories", ["section_id"], unique=False)

    # Create items table
    op.create_table(
        "catalog_items",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("category_id", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False),
        *_timestamp_columns(is_sqlite),
        sa.ForeignKeyConstraint(
            ["category_id"],
            ["catalog_categories.id"],
            ondelete="RESTRICT",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_catalog_items_category_id"), "catalog_items", ["category_id"], unique=False)
    op.create_index(op.f("ix_catalog_items_position"), "catalog_items", ["position"], unique=False)


def downgrade() -> None:
    # Drop indexes
    op.drop_index(op.f("ix_catalog_items_position"), table_name="catalog_items")
    op.drop_index(op.f("ix_catalog_items_category_id"), table_name="catalog_items")
    op.drop_index(op.f("ix_section_categories_section_id"), table_name="section_categories")
    op.drop_index(op.f("ix_catalog_categories_position"), table_name="catalog_categories")
    op.drop_index(op.f("ix_catalog_sections_position"), table_name="catalog_sections")

    # Drop tables (children first)
    op.drop_table("catalog_items")
    op.drop_table("section_categories")
    op.drop_table("catalog_categories")
    op.drop_table("catalog_sections")
