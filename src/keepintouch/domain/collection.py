"""Generic immutable ordered collection over domain entities."""

from collections.abc import Callable, Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class Collection(Generic[T]):
    """
    Ordered, immutable container over entities of one type.
    The input is copied into a tuple, so later changes to the caller's list
    are not visible. filter() returns an instance of the calling subclass,
    built through _new(); subclasses whose constructor takes different
    arguments override _new().
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: tuple[T, ...] = tuple(items)

    @classmethod
    def _new(cls, items: Iterable[T]):
        return cls(items)

    @property
    def size(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash((type(self), self._items))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._items)!r})"

    def is_empty(self) -> bool:
        return not self._items

    def get_items(self) -> tuple[T, ...]:
        return self._items

    def for_each(self, callback: Callable[[T], object]) -> None:
        for item in self._items:
            callback(item)

    def find(self, predicate: Callable[[T], bool]) -> T | None:
        """Return the first item matching predicate, or None."""
        return next((item for item in self._items if predicate(item)), None)

    def some(self, predicate: Callable[[T], bool]) -> bool:
        return any(predicate(item) for item in self._items)

    def every(self, predicate: Callable[[T], bool]) -> bool:
        return all(predicate(item) for item in self._items)

    def map(self, transform: Callable[[T], U]) -> list[U]:
        return [transform(item) for item in self._items]

    def filter(self, predicate: Callable[[T], bool]):
        return self._new(item for item in self._items if predicate(item))

    def to_array(self) -> tuple[T, ...]:
        return self._items
