"""Service layer."""

from .filter_service import FilterService, NameFilter

__all__ = [
    "FilterService",
    "NameFilter",
]
