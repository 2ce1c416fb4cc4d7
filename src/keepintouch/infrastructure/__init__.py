"""Infrastructure layer: concrete implementations of application ports."""

from keepintouch.infrastructure.backup import BackupService, write_backup_file
from keepintouch.infrastructure.export import (
    ImportResult,
    JsonExporter,
    JsonImporter,
    MalformedImportError,
    PartialImportError,
    Snapshot,
)
from keepintouch.infrastructure.memory_repository import (
    InMemoryCategoryRepository,
    InMemoryCheckInRepository,
    InMemoryContactRepository,
    InMemoryRepository,
)
from keepintouch.infrastructure.persistence.keyvalue_repository import (
    KeyValueCategoryRepository,
    KeyValueCheckInRepository,
    KeyValueContactRepository,
    KeyValueRepository,
)
from keepintouch.infrastructure.persistence.neo4j_storage import (
    Neo4jStorage,
    ensure_storage_constraint,
)
from keepintouch.infrastructure.serializer import (
    EntitySerializer,
    JsonSerializer,
    SerializationError,
)
from keepintouch.infrastructure.storage import InMemoryStorage, StorageQuotaExceededError

__all__ = [
    "BackupService",
    "EntitySerializer",
    "ImportResult",
    "InMemoryCategoryRepository",
    "InMemoryCheckInRepository",
    "InMemoryContactRepository",
    "InMemoryRepository",
    "InMemoryStorage",
    "JsonExporter",
    "JsonImporter",
    "JsonSerializer",
    "KeyValueCategoryRepository",
    "KeyValueCheckInRepository",
    "KeyValueContactRepository",
    "KeyValueRepository",
    "MalformedImportError",
    "Neo4jStorage",
    "PartialImportError",
    "SerializationError",
    "Snapshot",
    "StorageQuotaExceededError",
    "ensure_storage_constraint",
    "write_backup_file",
]
