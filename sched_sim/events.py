from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional

from .errors import EventCapacityError
from .models import ProcessRecord


class EventKind(IntEnum):
    """
    Event types. The value doubles as the tie-break rank for events that
    share a timestamp: arrivals, then I/O completions, then CPU completions.
    """

    ARRIVAL = 1
    IO_COMPLETE = 2
    CPU_BURST_COMPLETE = 3


@dataclass(frozen=True, order=True)
class Event:
    time: int
    kind: EventKind
    seq: int
    process: ProcessRecord = field(compare=False)

    def __repr__(self) -> str:
        return f"Event(t={self.time}, {self.kind.name}, P{self.process.pid})"


class EventHeap:
    """
    Binary min-heap of events ordered by (time, kind, insertion order).

    The heap grows as needed unless ``capacity`` is given, in which case
    pushing past it raises EventCapacityError.
    """

    def __init__(self, capacity: Optional[int] = None):
        self.capacity = capacity
        self._heap: List[Event] = []
        self._counter = itertools.count()

    def push(self, time: int, kind: EventKind, process: ProcessRecord) -> Event:
        if self.capacity is not None and len(self._heap) >= self.capacity:
            raise EventCapacityError(self.capacity)
        event = Event(time=time, kind=kind, seq=next(self._counter), process=process)
        heapq.heappush(self._heap, event)
        return event

    def pop(self) -> Event:
        if not self._heap:
            raise IndexError("pop from an empty event heap")
        return heapq.heappop(self._heap)

    def peek(self) -> Optional[Event]:
        return self._heap[0] if self._heap else None

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
