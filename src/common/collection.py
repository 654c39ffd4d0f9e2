"""Minimal ordered collection used to keep the selection pipeline declarative."""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, Iterator, List, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class Collection(Generic[T]):
    """Eager, order-preserving wrapper around a list.

    ``filter`` and ``map`` invoke their callback exactly once per item, in
    order, and return a new Collection; the receiver is never modified.
    """

    def __init__(self, items: Iterable[T] = ()):
        self._items: List[T] = list(items)

    @classmethod
    def create(cls, items: Iterable[T]) -> "Collection[T]":
        return cls(items)

    def filter(self, predicate: Callable[[T], Any]) -> "Collection[T]":
        return Collection(item for item in self._items if predicate(item))

    def map(self, fn: Callable[[T], U]) -> "Collection[U]":
        return Collection(fn(item) for item in self._items)

    def reduce(self, fn: Callable[[U, T], U], initial: U) -> U:
        acc = initial
        for item in self._items:
            acc = fn(acc, item)
        return acc

    def each(self, fn: Callable[[T], Any]) -> None:
        for item in self._items:
            fn(item)

    def is_empty(self) -> bool:
        return not self._items

    def to_list(self) -> List[T]:
        return list(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Collection({self._items!r})"
