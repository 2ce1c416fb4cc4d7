"""Application layer: ports, lookup helpers and errors. Depends only on domain."""

from keepintouch.application.categories import ensure_default_categories
from keepintouch.application.errors import EntityNotFoundError, get_entity_or_raise
from keepintouch.application.ports import (
    CategoryRepository,
    CheckInRepository,
    ContactRepository,
    KeyValueStorage,
)

__all__ = [
    "CategoryRepository",
    "CheckInRepository",
    "ContactRepository",
    "EntityNotFoundError",
    "KeyValueStorage",
    "ensure_default_categories",
    "get_entity_or_raise",
]
