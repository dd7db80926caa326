"""Reference data listings."""

from foodies.services.catalog.service import CatalogService


__all__ = ["CatalogService"]
