"""Service layer for business logic and validation."""

from studio_catalog.services.catalog_service import CatalogService

__all__ = ["CatalogService"]
