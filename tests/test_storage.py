"""Tests for InMemoryStorage and the key-value repositories' use of it."""

import pytest

from keepintouch.domain import (
    create_category,
    create_category_id,
    create_check_in_frequency,
    create_contact,
    create_contact_id,
)
from keepintouch.infrastructure import (
    InMemoryStorage,
    KeyValueCategoryRepository,
    KeyValueContactRepository,
    SerializationError,
    StorageQuotaExceededError,
)
from keepintouch.infrastructure.persistence.keyvalue_repository import (
    CATEGORIES_KEY,
    CONTACTS_KEY,
)
from keepintouch.infrastructure.storage import entry_size


def test_in_memory_storage_basic_operations() -> None:
    storage = InMemoryStorage()
    assert storage.get_item("a") is None
    storage.set_item("a", "1")
    storage.set_item("b", "2")
    assert storage.get_item("a") == "1"
    assert storage.keys() == ["a", "b"]
    storage.remove_item("a")
    storage.remove_item("a")
    assert storage.keys() == ["b"]
    storage.clear()
    assert storage.keys() == []


def test_entry_size_counts_utf8_bytes() -> None:
    assert entry_size("k", "é") == 3


def test_quota_rejects_oversized_write_and_keeps_old_value() -> None:
    storage = InMemoryStorage(quota_bytes=10)
    storage.set_item("k", "12345")
    with pytest.raises(StorageQuotaExceededError, match="quota exceeded"):
        storage.set_item("k", "1234567890")
    assert storage.get_item("k") == "12345"


def test_quota_counts_replaced_value_once() -> None:
    storage = InMemoryStorage(quota_bytes=10)
    storage.set_item("k", "123456789")
    storage.set_item("k", "987654321")
    assert storage.get_item("k") == "987654321"


def test_each_aggregate_uses_its_own_slot() -> None:
    storage = InMemoryStorage()
    contacts = KeyValueContactRepository(storage)
    categories = KeyValueCategoryRepository(storage)
    contacts.save(create_contact(create_contact_id(), "Alice"))
    categories.save(
        create_category(create_category_id(), "Family", create_check_in_frequency(1, "weeks"))
    )
    assert sorted(storage.keys()) == sorted([CONTACTS_KEY, CATEGORIES_KEY])
    assert '"name": "Alice"' in storage.get_item(CONTACTS_KEY)


def test_repository_save_propagates_quota_error() -> None:
    storage = InMemoryStorage(quota_bytes=50)
    contacts = KeyValueContactRepository(storage)
    with pytest.raises(StorageQuotaExceededError):
        contacts.save(create_contact(create_contact_id(), "Alice"))
    assert contacts.find_all().is_empty()


def test_corrupted_slot_raises_serialization_error() -> None:
    storage = InMemoryStorage()
    storage.set_item(CONTACTS_KEY, "{not json")
    with pytest.raises(SerializationError):
        KeyValueContactRepository(storage).find_all()


def test_empty_slot_reads_as_empty() -> None:
    storage = InMemoryStorage()
    storage.set_item(CONTACTS_KEY, "")
    assert KeyValueContactRepository(storage).find_all().is_empty()
