"""Repository contract tests, run against the in-memory and key-value implementations."""

from datetime import datetime, timedelta, timezone

import pytest

from keepintouch.application import (
    EntityNotFoundError,
    ensure_default_categories,
    get_entity_or_raise,
)
from keepintouch.domain import (
    CategoryCollection,
    CategoryId,
    CheckInCollection,
    CheckInStatus,
    ContactCollection,
    FrequencyUnit,
    create_category,
    create_category_id,
    create_check_in,
    create_check_in_frequency,
    create_check_in_id,
    create_contact,
    create_contact_id,
)
from keepintouch.domain.category import rebuild_category
from keepintouch.domain.checkin import complete_check_in
from keepintouch.domain.contact import create_email_address
from keepintouch.infrastructure import (
    InMemoryCategoryRepository,
    InMemoryCheckInRepository,
    InMemoryContactRepository,
    InMemoryStorage,
    KeyValueCategoryRepository,
    KeyValueCheckInRepository,
    KeyValueContactRepository,
)

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
DATE_SHAPED = "2025-01-01T00:00:00.000Z"


@pytest.fixture(params=["memory", "keyvalue"])
def repos(request):
    if request.param == "memory":
        return (
            InMemoryContactRepository(),
            InMemoryCategoryRepository(),
            InMemoryCheckInRepository(),
        )
    storage = InMemoryStorage()
    return (
        KeyValueContactRepository(storage),
        KeyValueCategoryRepository(storage),
        KeyValueCheckInRepository(storage),
    )


def _family():
    return create_category(
        create_category_id(), "Family", create_check_in_frequency(1, FrequencyUnit.WEEKS)
    )


def test_save_then_find_by_id(repos) -> None:
    _, categories, _ = repos
    family = _family()
    categories.save(family)
    found = categories.find_by_id(family.id)
    assert found == family
    assert found.name == "Family"


def test_find_by_id_missing_returns_none(repos) -> None:
    contacts, categories, check_ins = repos
    assert contacts.find_by_id(create_contact_id()) is None
    assert categories.find_by_id(create_category_id()) is None
    assert check_ins.find_by_id(create_check_in_id()) is None


def test_save_same_id_overwrites(repos) -> None:
    _, categories, _ = repos
    family = _family()
    categories.save(family)
    categories.save(rebuild_category(family, name="Relatives"))
    all_categories = categories.find_all()
    assert all_categories.size == 1
    assert categories.find_by_id(family.id).name == "Relatives"


def test_find_all_returns_typed_collection(repos) -> None:
    contacts, categories, check_ins = repos
    assert isinstance(contacts.find_all(), ContactCollection)
    assert isinstance(categories.find_all(), CategoryCollection)
    assert isinstance(check_ins.find_all(), CheckInCollection)
    assert contacts.find_all().is_empty()


def test_delete_is_idempotent(repos) -> None:
    _, categories, _ = repos
    family = _family()
    categories.save(family)
    categories.delete(family.id)
    categories.delete(family.id)
    assert categories.find_by_id(family.id) is None
    assert categories.find_all().is_empty()


def test_contact_search(repos) -> None:
    contacts, _, _ = repos
    alice = create_contact(
        create_contact_id(), "Alice", email=create_email_address("alice@example.com")
    )
    contacts.save(alice)
    contacts.save(create_contact(create_contact_id(), "Bob"))
    assert contacts.search("ALICE").map(lambda c: c.id) == [alice.id]
    assert contacts.search("").size == 2


def test_check_in_queries(repos) -> None:
    _, _, check_ins = repos
    contact_id = create_contact_id()
    scheduled = create_check_in(create_check_in_id(), contact_id, NOW)
    done = complete_check_in(
        create_check_in(create_check_in_id(), create_contact_id(), NOW + timedelta(days=10)),
        NOW,
    )
    check_ins.save(scheduled)
    check_ins.save(done)

    assert check_ins.find_by_contact_id(contact_id).map(lambda c: c.id) == [scheduled.id]
    assert check_ins.find_by_status(CheckInStatus.COMPLETED).map(lambda c: c.id) == [done.id]
    in_range = check_ins.find_by_date_range(NOW - timedelta(days=1), NOW + timedelta(days=1))
    assert in_range.map(lambda c: c.id) == [scheduled.id]


def test_get_entity_or_raise(repos) -> None:
    _, categories, _ = repos
    family = _family()
    categories.save(family)
    assert get_entity_or_raise(categories, family.id, "Category") == family
    missing = create_category_id()
    with pytest.raises(EntityNotFoundError, match="Category not found") as exc:
        get_entity_or_raise(categories, missing, "Category")
    assert exc.value.entity_id == missing.value


def test_ensure_default_categories_seeds_once(repos) -> None:
    _, categories, _ = repos
    seeded = ensure_default_categories(categories)
    assert seeded.size == 5
    again = ensure_default_categories(categories)
    assert again.size == 5
    assert {c.id for c in again} == {c.id for c in seeded}


def test_ensure_default_categories_keeps_existing(repos) -> None:
    _, categories, _ = repos
    categories.save(_family())
    assert ensure_default_categories(categories).size == 1


def test_date_shaped_text_reads_back_as_text(repos) -> None:
    contacts, categories, check_ins = repos
    family = _family()
    odd = create_category(create_category_id(), DATE_SHAPED, create_check_in_frequency(2, "days"))
    categories.save(family)
    categories.save(odd)
    contact = create_contact(create_contact_id(), DATE_SHAPED)
    contacts.save(contact)
    check_in = create_check_in(create_check_in_id(), contact.id, NOW, notes=DATE_SHAPED)
    check_ins.save(check_in)

    assert categories.find_all().size == 2
    assert categories.find_by_id(odd.id).name == DATE_SHAPED
    assert contacts.find_by_id(contact.id).name == DATE_SHAPED
    assert check_ins.find_by_id(check_in.id).notes == DATE_SHAPED


def test_id_of_another_aggregate_does_not_match(repos) -> None:
    contacts, _, _ = repos
    contact = create_contact(create_contact_id(), "Alice")
    contacts.save(contact)
    same_uuid = CategoryId(contact.id.value)

    assert contacts.find_by_id(same_uuid) is None
    contacts.delete(same_uuid)
    assert contacts.find_by_id(contact.id) == contact
