"""
keepintouch core: clean-architecture layout.

- domain: value objects, entities (Contact, Category, CheckIn), collections. No outer dependencies.
- application: ports (repositories, key-value storage), lookup helpers, errors.
- infrastructure: adapters (in-memory and key-value repositories, Neo4j storage,
  JSON serializer, export/import, backups).
"""

from keepintouch.application import (
    CategoryRepository,
    CheckInRepository,
    ContactRepository,
    EntityNotFoundError,
    KeyValueStorage,
    get_entity_or_raise,
)
from keepintouch.domain import Category, CheckIn, Contact, ValidationError
from keepintouch.infrastructure import (
    InMemoryCategoryRepository,
    InMemoryCheckInRepository,
    InMemoryContactRepository,
    InMemoryStorage,
    JsonExporter,
    JsonImporter,
    KeyValueCategoryRepository,
    KeyValueCheckInRepository,
    KeyValueContactRepository,
    MalformedImportError,
    Neo4jStorage,
    PartialImportError,
    StorageQuotaExceededError,
)

__all__ = [
    "Category",
    "CategoryRepository",
    "CheckIn",
    "CheckInRepository",
    "Contact",
    "ContactRepository",
    "EntityNotFoundError",
    "InMemoryCategoryRepository",
    "InMemoryCheckInRepository",
    "InMemoryContactRepository",
    "InMemoryStorage",
    "JsonExporter",
    "JsonImporter",
    "KeyValueCategoryRepository",
    "KeyValueCheckInRepository",
    "KeyValueContactRepository",
    "KeyValueStorage",
    "MalformedImportError",
    "Neo4jStorage",
    "PartialImportError",
    "StorageQuotaExceededError",
    "ValidationError",
    "get_entity_or_raise",
]
