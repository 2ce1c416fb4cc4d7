"""Neo4j implementation of KeyValueStorage.
Each key is one (:StorageSlot {namespace, key, value}) node. The namespace
scopes a dataset, so several datasets can share one database.
"""

import logging
from datetime import datetime, timezone

from neo4j.exceptions import TransientError

from keepintouch.infrastructure.storage import (
    StorageQuotaExceededError,
    check_quota,
    entry_size,
)

logger = logging.getLogger(__name__)

_CONSTRAINT_QUERY = """
CREATE CONSTRAINT storage_slot_unique IF NOT EXISTS
FOR (s:StorageSlot) REQUIRE (s.namespace, s.key) IS UNIQUE
"""

_GET_QUERY = """
MATCH (s:StorageSlot {namespace: $namespace, key: $key})
RETURN s.value AS value
"""

_SET_QUERY = """
MERGE (s:StorageSlot {namespace: $namespace, key: $key})
SET s.value = $value, s.updated_at = $updated_at
"""

_REMOVE_QUERY = """
MATCH (s:StorageSlot {namespace: $namespace, key: $key})
DELETE s
"""

_CLEAR_QUERY = """
MATCH (s:StorageSlot {namespace: $namespace})
DELETE s
"""

_KEYS_QUERY = """
MATCH (s:StorageSlot {namespace: $namespace})
RETURN s.key AS key
ORDER BY s.key
"""

_OTHER_ENTRIES_QUERY = """
MATCH (s:StorageSlot {namespace: $namespace})
WHERE s.key <> $key
RETURN s.key AS key, s.value AS value
"""


def ensure_storage_constraint(driver) -> None:
    """Create unique constraint on StorageSlot(namespace, key) if missing."""
    with driver.session() as session:
        session.run(_CONSTRAINT_QUERY)


def _is_out_of_memory(error: TransientError) -> bool:
    return "OutOfMemory" in (getattr(error, "code", None) or "")


class Neo4jStorage:
    """Stores string values on StorageSlot nodes, scoped by namespace.
    quota_bytes, when set, caps the total UTF-8 size of the namespace's keys and values.
    """

    def __init__(
        self,
        driver: object,
        namespace: str = "default",
        quota_bytes: int | None = None,
    ) -> None:
        self._driver = driver
        self._namespace = namespace
        self._quota_bytes = quota_bytes

    def get_item(self, key: str) -> str | None:
        with self._driver.session() as session:
            record = session.run(_GET_QUERY, namespace=self._namespace, key=key).single()
        if not record:
            return None
        return record["value"]

    def set_item(self, key: str, value: str) -> None:
        with self._driver.session() as session:
            if self._quota_bytes is not None:
                result = session.run(
                    _OTHER_ENTRIES_QUERY, namespace=self._namespace, key=key
                )
                used_elsewhere = sum(
                    entry_size(rec["key"], rec["value"] or "") for rec in result
                )
                check_quota(self._quota_bytes, used_elsewhere, key, value)
            try:
                session.run(
                    _SET_QUERY,
                    namespace=self._namespace,
                    key=key,
                    value=value,
                    updated_at=datetime.now(timezone.utc).isoformat(),
                ).consume()
            except TransientError as e:
                if _is_out_of_memory(e):
                    logger.warning("Neo4j rejected write of %r: %s", key, e)
                    raise StorageQuotaExceededError() from e
                raise

    def remove_item(self, key: str) -> None:
        with self._driver.session() as session:
            session.run(_REMOVE_QUERY, namespace=self._namespace, key=key).consume()

    def clear(self) -> None:
        with self._driver.session() as session:
            session.run(_CLEAR_QUERY, namespace=self._namespace).consume()

    def keys(self) -> list[str]:
        with self._driver.session() as session:
            result = session.run(_KEYS_QUERY, namespace=self._namespace)
            return [rec["key"] for rec in result]
