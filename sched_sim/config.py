from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_QUANTUM = 3
DEFAULT_MAX_TIME = 1000


@dataclass(frozen=True)
class SimulationConfig:
    """
    Knobs for a single simulation run.

    quantum: Round Robin time slice (ignored by the other policies).
    max_time: simulated-time horizon; passing it aborts the run. None disables it.
    max_events: event heap capacity; None lets the heap grow.
    queue_capacity: initial ready/waiting queue capacity; None uses process count + 1.
    """

    quantum: int = DEFAULT_QUANTUM
    max_time: Optional[int] = DEFAULT_MAX_TIME
    max_events: Optional[int] = None
    queue_capacity: Optional[int] = None

    def __post_init__(self) -> None:
        if self.quantum <= 0:
            raise ValueError("quantum must be a positive integer")
        if self.max_time is not None and self.max_time <= 0:
            raise ValueError("max_time must be positive (or None for no horizon)")
        if self.max_events is not None and self.max_events <= 0:
            raise ValueError("max_events must be positive (or None for a growing heap)")
        if self.queue_capacity is not None and self.queue_capacity <= 0:
            raise ValueError("queue_capacity must be positive")
