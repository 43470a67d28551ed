"""Catalog and layout configuration."""

from .catalog import (
    Catalog,
    CatalogError,
    FrameworkLayout,
    find_framework_root,
    load_catalog,
    reset_catalog,
    resolve_layout,
)

__all__ = [
    "Catalog",
    "CatalogError",
    "FrameworkLayout",
    "find_framework_root",
    "load_catalog",
    "reset_catalog",
    "resolve_layout",
]
