"""Application errors and lookup helpers shared by use cases."""

from typing import Protocol, TypeVar

E = TypeVar("E", covariant=True)


class EntityNotFoundError(LookupError):
    """A lookup required an entity that the repository does not hold."""

    def __init__(self, entity_name: str, entity_id: object) -> None:
        super().__init__(f"{entity_name} not found: {entity_id}")
        self.entity_name = entity_name
        self.entity_id = str(entity_id)


class _FindsById(Protocol[E]):
    def find_by_id(self, entity_id, /) -> E | None:
        ...


def get_entity_or_raise(repository: _FindsById[E], entity_id: object, entity_name: str) -> E:
    """Return repository.find_by_id(entity_id) or raise EntityNotFoundError."""
    entity = repository.find_by_id(entity_id)
    if entity is None:
        raise EntityNotFoundError(entity_name, entity_id)
    return entity
