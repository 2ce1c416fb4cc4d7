"""In-memory implementations of the repository ports (no storage)."""

from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Generic, TypeVar

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

E = TypeVar("E")
I = TypeVar("I")  # noqa: E741
C = TypeVar("C")


class InMemoryRepository(Generic[E, I, C]):
    """Stores entities in a dict keyed by the id string. Order preserved by insertion.
    Built from an id extractor and a collection factory; find_all returns a new
    collection each call.
    """

    def __init__(
        self,
        id_of: Callable[[E], object],
        make_collection: Callable[[Iterable[E]], C],
    ) -> None:
        self._id_of = id_of
        self._make_collection = make_collection
        self._entities: dict[str, E] = {}

    def save(self, entity: E) -> None:
        self._entities[str(self._id_of(entity))] = entity

    def find_by_id(self, entity_id: I) -> E | None:
        entity = self._entities.get(str(entity_id))
        # Ids of different aggregates share the string form but never compare equal.
        if entity is None or self._id_of(entity) != entity_id:
            return None
        return entity

    def find_all(self) -> C:
        return self._make_collection(list(self._entities.values()))

    def delete(self, entity_id: I) -> None:
        if self.find_by_id(entity_id) is not None:
            del self._entities[str(entity_id)]

    def clear(self) -> None:
        """Drop everything. Test reset only; not part of the port."""
        self._entities.clear()


class InMemoryContactRepository(InMemoryRepository[Contact, ContactId, ContactCollection]):
    def __init__(self) -> None:
        super().__init__(lambda contact: contact.id, ContactCollection)

    def search(self, query: str) -> ContactCollection:
        return self.find_all().search(query)


class InMemoryCategoryRepository(
    InMemoryRepository[Category, CategoryId, CategoryCollection]
):
    def __init__(self) -> None:
        super().__init__(lambda category: category.id, CategoryCollection)


class InMemoryCheckInRepository(InMemoryRepository[CheckIn, CheckInId, CheckInCollection]):
    def __init__(self) -> None:
        super().__init__(lambda check_in: check_in.id, CheckInCollection)

    def find_by_contact_id(self, contact_id: ContactId) -> CheckInCollection:
        return self.find_all().for_contact(contact_id)

    def find_by_status(self, status: CheckInStatus) -> CheckInCollection:
        return self.find_all().with_status(status)

    def find_by_date_range(self, start: datetime, end: datetime) -> CheckInCollection:
        return self.find_all().scheduled_between(start, end)
