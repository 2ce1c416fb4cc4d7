"""Key-value-store-backed implementations of the repository ports.

Each aggregate lives in one storage slot as a JSON list. Every read loads and
decodes the whole slot; every write re-encodes and rewrites the whole slot, so
each operation is O(n) over the aggregate's entities. There is no transaction
or conflict check: two writers interleaving read-modify-write on one slot lose
the earlier write. Callers must keep to one writer at a time.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Generic, TypeVar

from keepintouch.application.ports import KeyValueStorage
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
from keepintouch.infrastructure.mappers import (
    category_from_dict,
    category_to_dict,
    check_in_from_dict,
    check_in_to_dict,
    contact_from_dict,
    contact_to_dict,
)
from keepintouch.infrastructure.serializer import EntitySerializer, JsonSerializer

logger = logging.getLogger(__name__)

CONTACTS_KEY = "contacts"
CATEGORIES_KEY = "categories"
CHECK_INS_KEY = "checkIns"

E = TypeVar("E")
I = TypeVar("I")  # noqa: E741
C = TypeVar("C")


class KeyValueRepository(Generic[E, I, C]):
    """Stores all entities of one aggregate under a single storage key."""

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str,
        serializer: EntitySerializer[E],
        id_of: Callable[[E], object],
        make_collection: Callable[[Iterable[E]], C],
    ) -> None:
        self._storage = storage
        self._key = key
        self._serializer = serializer
        self._id_of = id_of
        self._make_collection = make_collection

    def save(self, entity: E) -> None:
        entity_id = self._id_of(entity)
        entities = [e for e in self._load() if self._id_of(e) != entity_id]
        entities.append(entity)
        self._persist(entities)

    def find_by_id(self, entity_id: I) -> E | None:
        return next((e for e in self._load() if self._id_of(e) == entity_id), None)

    def find_all(self) -> C:
        return self._make_collection(self._load())

    def delete(self, entity_id: I) -> None:
        self._persist([e for e in self._load() if self._id_of(e) != entity_id])

    def _load(self) -> list[E]:
        data = self._storage.get_item(self._key)
        if not data:
            return []
        entities = self._serializer.deserialize_collection(data)
        logger.debug("Loaded %d entities from %r", len(entities), self._key)
        return entities

    def _persist(self, entities: list[E]) -> None:
        self._storage.set_item(self._key, self._serializer.serialize_collection(entities))
        logger.debug("Wrote %d entities to %r", len(entities), self._key)


class KeyValueContactRepository(KeyValueRepository[Contact, ContactId, ContactCollection]):
    def __init__(
        self, storage: KeyValueStorage, json_serializer: JsonSerializer | None = None
    ) -> None:
        super().__init__(
            storage,
            CONTACTS_KEY,
            EntitySerializer(contact_to_dict, contact_from_dict, json_serializer),
            lambda contact: contact.id,
            ContactCollection,
        )

    def search(self, query: str) -> ContactCollection:
        return self.find_all().search(query)


class KeyValueCategoryRepository(
    KeyValueRepository[Category, CategoryId, CategoryCollection]
):
    def __init__(
        self, storage: KeyValueStorage, json_serializer: JsonSerializer | None = None
    ) -> None:
        super().__init__(
            storage,
            CATEGORIES_KEY,
            EntitySerializer(category_to_dict, category_from_dict, json_serializer),
            lambda category: category.id,
            CategoryCollection,
        )


class KeyValueCheckInRepository(
    KeyValueRepository[CheckIn, CheckInId, CheckInCollection]
):
    def __init__(
        self, storage: KeyValueStorage, json_serializer: JsonSerializer | None = None
    ) -> None:
        super().__init__(
            storage,
            CHECK_INS_KEY,
            EntitySerializer(check_in_to_dict, check_in_from_dict, json_serializer),
            lambda check_in: check_in.id,
            CheckInCollection,
        )

    def find_by_contact_id(self, contact_id: ContactId) -> CheckInCollection:
        return self.find_all().for_contact(contact_id)

    def find_by_status(self, status: CheckInStatus) -> CheckInCollection:
        return self.find_all().with_status(status)

    def find_by_date_range(self, start: datetime, end: datetime) -> CheckInCollection:
        return self.find_all().scheduled_between(start, end)
