"""Application ports (interfaces). Implemented by infrastructure adapters."""

from datetime import datetime
from typing import Protocol

from keepintouch.domain import (
    Category,
    CategoryCollection,
    CategoryId,
    CheckIn,
    CheckInCollection,
    CheckInId,
    CheckInStatus,
    Contact,
    ContactCollection,
    ContactId,
)


class ContactRepository(Protocol):
    """Persists and queries Contact aggregates."""

    def save(self, contact: Contact) -> None:
        """Insert, or replace the contact with the same id."""
        ...

    def find_by_id(self, contact_id: ContactId) -> Contact | None:
        """Return the contact with the given id, or None."""
        ...

    def find_all(self) -> ContactCollection:
        """Return a snapshot of all contacts (not a live view)."""
        ...

    def delete(self, contact_id: ContactId) -> None:
        """Remove the contact. No error if it does not exist."""
        ...

    def search(self, query: str) -> ContactCollection:
        """Return contacts whose name, email or phone contains query (case-insensitive)."""
        ...


class CategoryRepository(Protocol):
    """Persists and queries Category aggregates."""

    def save(self, category: Category) -> None:
        ...

    def find_by_id(self, category_id: CategoryId) -> Category | None:
        ...

    def find_all(self) -> CategoryCollection:
        ...

    def delete(self, category_id: CategoryId) -> None:
        ...


class CheckInRepository(Protocol):
    """Persists and queries CheckIn aggregates."""

    def save(self, check_in: CheckIn) -> None:
        ...

    def find_by_id(self, check_in_id: CheckInId) -> CheckIn | None:
        ...

    def find_all(self) -> CheckInCollection:
        ...

    def delete(self, check_in_id: CheckInId) -> None:
        ...

    def find_by_contact_id(self, contact_id: ContactId) -> CheckInCollection:
        ...

    def find_by_status(self, status: CheckInStatus) -> CheckInCollection:
        ...

    def find_by_date_range(self, start: datetime, end: datetime) -> CheckInCollection:
        """Check-ins scheduled between start and end, both inclusive."""
        ...


class KeyValueStorage(Protocol):
    """String key-value store consumed by the store-backed repositories."""

    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store value under key. May raise StorageQuotaExceededError."""
        ...

    def remove_item(self, key: str) -> None:
        ...

    def clear(self) -> None:
        ...

    def keys(self) -> list[str]:
        ...
