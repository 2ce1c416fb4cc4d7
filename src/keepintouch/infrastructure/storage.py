"""In-memory key-value storage and the quota error shared by storage adapters."""

import logging

logger = logging.getLogger(__name__)


class StorageQuotaExceededError(Exception):
    """The store rejected a write because it would exceed its capacity."""

    def __init__(self, message: str = "Storage quota exceeded") -> None:
        super().__init__(message)


def entry_size(key: str, value: str) -> int:
    """Bytes an entry counts against a quota (UTF-8 key plus value)."""
    return len(key.encode("utf-8")) + len(value.encode("utf-8"))


def check_quota(quota_bytes: int | None, used_elsewhere: int, key: str, value: str) -> None:
    """Raise StorageQuotaExceededError if writing key=value would pass quota_bytes."""
    if quota_bytes is None:
        return
    needed = used_elsewhere + entry_size(key, value)
    if needed > quota_bytes:
        logger.warning(
            "Storage quota exceeded writing %r: %d > %d bytes", key, needed, quota_bytes
        )
        raise StorageQuotaExceededError(
            f"Storage quota exceeded: {needed} bytes needed, {quota_bytes} allowed"
        )


class InMemoryStorage:
    """Dict-backed KeyValueStorage. Not persisted; used in tests and as a scratch store.

    quota_bytes, when set, caps the total UTF-8 size of all keys and values.
    """

    def __init__(self, quota_bytes: int | None = None) -> None:
        self._items: dict[str, str] = {}
        self._quota_bytes = quota_bytes

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        used_elsewhere = sum(
            entry_size(k, v) for k, v in self._items.items() if k != key
        )
        check_quota(self._quota_bytes, used_elsewhere, key, value)
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def keys(self) -> list[str]:
        return list(self._items)
