"""In-memory entity store.

One ``EntityStore`` backs each entity collection (categories, products,
coupons, orders). It assigns monotonically increasing integer ids and
exposes a re-entrant lock so services can run read-check-write sequences
atomically with respect to other writers of the same collection.
"""

import threading
from typing import Callable, Generic, Iterator, TypeVar

T = TypeVar("T")


class EntityStore(Generic[T]):
    """Keyed collection with an atomic id counter.

    Ids start at 1 and are never reused, even after a record is removed.
    Records are returned in insertion order by ``all()``.
    """

    def __init__(self, name: str):
        self.name = name
        self.lock = threading.RLock()
        self._records: dict[int, T] = {}
        self._last_id = 0

    def add(self, build: Callable[[int], T]) -> T:
        """Assign the next id and store the record built for it.

        Args:
            build: Callable receiving the new id and returning the record.
                If it raises, the id is not consumed.

        Returns:
            The stored record.
        """
        with self.lock:
            new_id = self._last_id + 1
            record = build(new_id)
            self._records[new_id] = record
            self._last_id = new_id
            return record

    def get(self, record_id: int) -> T | None:
        with self.lock:
            return self._records.get(record_id)

    def all(self) -> list[T]:
        with self.lock:
            return list(self._records.values())

    def remove(self, record_id: int) -> T | None:
        with self.lock:
            return self._records.pop(record_id, None)

    def __contains__(self, record_id: object) -> bool:
        with self.lock:
            return record_id in self._records

    def __iter__(self) -> Iterator[T]:
        return iter(self.all())

    def __len__(self) -> int:
        with self.lock:
            return len(self._records)
