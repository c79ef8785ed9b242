"""Catalog of installable items and the capability probe."""

from freshbox.checker.catalog import Catalog, CatalogItem
from freshbox.checker.probe import (
    NOT_INSTALLED,
    ProbeResult,
    ProbeResults,
    is_installed,
    probe_all,
    probe_item,
)

__all__ = [
    "NOT_INSTALLED",
    "Catalog",
    "CatalogItem",
    "ProbeResult",
    "ProbeResults",
    "is_installed",
    "probe_all",
    "probe_item",
]
