"""Auxiliary per-individual data keyed by object identity."""

from __future__ import annotations

from typing import Callable, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")


class SideTable(Generic[T]):
    """
    Map from individual identity to algorithm-specific auxiliary data.

    The base fitness of an individual only holds its objective vector. Values
    such as crowding distance, grid cell or dominance score live here and are
    read only by the strategy owning the table. A reference to each individual
    is kept so that its ``id`` cannot be recycled while the entry exists.
    """

    def __init__(self) -> None:
        self._data: dict[int, tuple[object, T]] = {}

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, individual: object) -> bool:
        return id(individual) in self._data

    def __iter__(self) -> Iterator[object]:
        return (ind for ind, _ in self._data.values())

    def get(self, individual: object, default: T | None = None) -> T | None:
        entry = self._data.get(id(individual))
        return default if entry is None else entry[1]

    def __getitem__(self, individual: object) -> T:
        try:
            return self._data[id(individual)][1]
        except KeyError:
            raise KeyError(f"No auxiliary data for individual {individual!r}") from None

    def __setitem__(self, individual: object, value: T) -> None:
        self._data[id(individual)] = (individual, value)

    def set(self, individual: object, value: T) -> None:
        self[individual] = value

    def setdefault(self, individual: object, factory: Callable[[], T]) -> T:
        entry = self._data.get(id(individual))
        if entry is None:
            value = factory()
            self._data[id(individual)] = (individual, value)
            return value
        return entry[1]

    def discard(self, individual: object) -> None:
        self._data.pop(id(individual), None)

    def clear(self) -> None:
        self._data.clear()

    def retain(self, population: Iterable[object]) -> None:
        """Drop every entry whose individual is not in ``population``."""
        keep = {id(ind) for ind in population}
        for key in [k for k in self._data if k not in keep]:
            del self._data[key]


__all__ = ["SideTable"]
