from __future__ import annotations

from typing import Iterator, List, Optional

from .models import ProcessRecord

DEFAULT_CAPACITY = 6


class ProcessQueue:
    """
    FIFO queue of process records backed by a circular buffer.

    Used for both the ready queue and the waiting (I/O) queue. The buffer
    doubles when full, so enqueue never fails. Besides FIFO removal it
    supports removing one specific record while keeping the others in
    their original order.

    When empty the queue always sits at ``front == rear == 0``.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError("queue capacity must be positive")
        self._slots: List[Optional[ProcessRecord]] = [None] * capacity
        self._front = 0
        self._rear = 0
        self._count = 0

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def front(self) -> int:
        return self._front

    @property
    def rear(self) -> int:
        return self._rear

    @property
    def count(self) -> int:
        return self._count

    def is_empty(self) -> bool:
        return self._count == 0

    def is_full(self) -> bool:
        return self._count == self.capacity

    def enqueue(self, record: ProcessRecord) -> None:
        if self.is_full():
            self._expand()
        self._slots[self._rear] = record
        self._rear = (self._rear + 1) % self.capacity
        self._count += 1

    def dequeue(self) -> Optional[ProcessRecord]:
        """
        Remove and return the front record, or None if the queue is empty.
        """
        if self.is_empty():
            return None

        record = self._slots[self._front]
        self._slots[self._front] = None
        self._front = (self._front + 1) % self.capacity
        self._count -= 1

        if self._count == 0:
            self._front = self._rear = 0
        return record

    def remove_specific(self, record: ProcessRecord) -> bool:
        """
        Remove the first slot holding exactly ``record`` (identity match).

        Every later record shifts one slot towards the front, so the rest
        of the queue keeps its order. Returns False if the record is absent.
        """
        offset = self._find(record)
        if offset is None:
            return False

        cap = self.capacity
        for i in range(offset, self._count - 1):
            self._slots[(self._front + i) % cap] = self._slots[(self._front + i + 1) % cap]

        self._rear = (self._rear - 1) % cap
        self._slots[self._rear] = None
        self._count -= 1

        if self._count == 0:
            self._front = self._rear = 0
        return True

    def peek(self) -> Optional[ProcessRecord]:
        if self.is_empty():
            return None
        return self._slots[self._front]

    def _find(self, record: ProcessRecord) -> Optional[int]:
        for offset, candidate in enumerate(self):
            if candidate is record:
                return offset
        return None

    def _expand(self) -> None:
        # Copy in FIFO order so the grown buffer starts at index 0.
        items = list(self)
        new_capacity = self.capacity * 2
        self._slots = items + [None] * (new_capacity - len(items))
        self._front = 0
        self._rear = len(items) % new_capacity
        self._count = len(items)

    def __len__(self) -> int:
        return self._count

    def __bool__(self) -> bool:
        return self._count > 0

    def __iter__(self) -> Iterator[ProcessRecord]:
        cap = self.capacity
        for i in range(self._count):
            yield self._slots[(self._front + i) % cap]

    def __contains__(self, record: object) -> bool:
        return any(candidate is record for candidate in self)

    def __repr__(self) -> str:
        pids = ", ".join(f"P{r.pid}" for r in self)
        return f"ProcessQueue([{pids}], capacity={self.capacity})"
