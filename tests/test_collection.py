"""Tests for the generic Collection and its entity subclasses."""

from datetime import datetime, timedelta, timezone

from keepintouch.domain import (
    CheckInStatus,
    Collection,
    ContactCollection,
    create_category,
    create_category_collection,
    create_category_id,
    create_check_in,
    create_check_in_collection,
    create_check_in_frequency,
    create_check_in_id,
    create_contact,
    create_contact_id,
)
from keepintouch.domain.checkin import complete_check_in
from keepintouch.domain.contact import (
    create_email_address,
    create_important_date,
    create_important_date_collection,
    create_phone_number,
)

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def test_collection_copies_input() -> None:
    items = [1, 2, 3]
    collection = Collection(items)
    items.append(4)
    assert collection.size == 3
    assert collection.to_array() == (1, 2, 3)


def test_collection_basic_queries() -> None:
    collection = Collection([1, 2, 3, 4])
    assert len(collection) == 4
    assert not collection.is_empty()
    assert Collection().is_empty()
    assert collection.find(lambda n: n > 2) == 3
    assert collection.find(lambda n: n > 10) is None
    assert collection.some(lambda n: n == 4)
    assert collection.every(lambda n: n > 0)
    assert not collection.every(lambda n: n > 1)
    assert collection.map(lambda n: n * 10) == [10, 20, 30, 40]
    assert list(collection) == [1, 2, 3, 4]


def test_collection_for_each_visits_in_order() -> None:
    seen = []
    Collection(["a", "b"]).for_each(seen.append)
    assert seen == ["a", "b"]


def test_filter_preserves_subclass() -> None:
    contacts = ContactCollection(
        [
            create_contact(create_contact_id(), "Alice"),
            create_contact(create_contact_id(), "Bob"),
        ]
    )
    filtered = contacts.filter(lambda c: c.name == "Bob")
    assert isinstance(filtered, ContactCollection)
    assert filtered.map(lambda c: c.name) == ["Bob"]
    assert contacts.size == 2


def test_collection_equality_is_by_type_and_items() -> None:
    assert Collection([1, 2]) == Collection([1, 2])
    assert Collection([1, 2]) != Collection([2, 1])
    assert Collection([]) != ContactCollection([])


def test_contact_search_matches_name_email_phone() -> None:
    alice = create_contact(
        create_contact_id(), "Alice Smith", email=create_email_address("alice@example.com")
    )
    bob = create_contact(
        create_contact_id(), "Bob", phone=create_phone_number("+12025551234")
    )
    contacts = ContactCollection([alice, bob])
    assert contacts.search("SMITH").to_array() == (alice,)
    assert contacts.search("example.com").to_array() == (alice,)
    assert contacts.search("555").to_array() == (bob,)
    assert contacts.search("  ") is contacts
    assert contacts.search("nobody").is_empty()


def test_category_find_by_name_case_insensitive() -> None:
    family = create_category(
        create_category_id(), "Family", create_check_in_frequency(1, "weeks")
    )
    categories = create_category_collection([family])
    assert categories.find_by_name(" family ") is family
    assert categories.find_by_name("Friends") is None


def test_check_in_collection_queries() -> None:
    contact_id = create_contact_id()
    early = create_check_in(create_check_in_id(), contact_id, NOW - timedelta(days=2))
    late = create_check_in(create_check_in_id(), create_contact_id(), NOW + timedelta(days=2))
    done = complete_check_in(
        create_check_in(create_check_in_id(), contact_id, NOW - timedelta(days=5)), NOW
    )
    check_ins = create_check_in_collection([late, early, done])

    assert check_ins.for_contact(contact_id).to_array() == (early, done)
    assert check_ins.with_status(CheckInStatus.COMPLETED).to_array() == (done,)
    assert check_ins.overdue(NOW).to_array() == (early,)
    assert check_ins.sorted_by_schedule().to_array() == (done, early, late)
    assert check_ins.scheduled_between(
        NOW - timedelta(days=2), NOW + timedelta(days=2)
    ).to_array() == (late, early)


def test_important_dates_upcoming() -> None:
    past = create_important_date(NOW - timedelta(days=1), "Anniversary")
    future = create_important_date(NOW + timedelta(days=1), "Birthday")
    dates = create_important_date_collection([past, future])
    assert dates.upcoming(NOW).to_array() == (future,)
