from __future__ import annotations

from typing import Callable, Dict, Optional

from .models import ProcessRecord
from .process_queue import ProcessQueue


def _first_best(ready: ProcessQueue, better: Callable[[ProcessRecord, ProcessRecord], bool]) -> Optional[ProcessRecord]:
    """
    Scan the ready queue front to rear and return the first record that no
    later record beats. Ties keep the earlier record.
    """
    best: Optional[ProcessRecord] = None
    for record in ready:
        if best is None or better(record, best):
            best = record
    return best


def _shorter(a: ProcessRecord, b: ProcessRecord) -> bool:
    return a.remaining_cpu < b.remaining_cpu


def _higher_priority(a: ProcessRecord, b: ProcessRecord) -> bool:
    return a.priority > b.priority


class SchedulingPolicy:
    """
    Selection and preemption rules plugged into the simulation engine.

    Subclasses override the three hooks below; the engine owns everything
    else (event draining, accounting, I/O, occupancy).
    """

    key = ""
    name = ""
    preemptive = False
    uses_quantum = False

    def select_next(self, ready: ProcessQueue) -> Optional[ProcessRecord]:
        """
        Remove and return the process that should get the CPU next.
        """
        return ready.dequeue()

    def should_preempt(self, running: ProcessRecord, ready: ProcessQueue) -> bool:
        return False

    def next_run_length(self, record: ProcessRecord, quantum: int) -> int:
        """
        Run to the I/O request if it is still ahead, otherwise to completion.
        """
        if record.passed_io_point:
            return record.remaining_cpu
        return record.io_request_time - record.executed_time

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FCFSPolicy(SchedulingPolicy):
    key = "fcfs"
    name = "FCFS"


class SJFPolicy(SchedulingPolicy):
    """
    Shortest Job First (non-preemptive): pick the smallest remaining CPU time.
    """

    key = "sjf"
    name = "SJF (non-preemptive)"

    def select_next(self, ready: ProcessQueue) -> Optional[ProcessRecord]:
        best = _first_best(ready, _shorter)
        if best is not None:
            ready.remove_specific(best)
        return best


class SRTFPolicy(SJFPolicy):
    """
    Preemptive SJF: a strictly shorter ready job takes the CPU away.
    """

    key = "srtf"
    name = "SJF (preemptive)"
    preemptive = True

    def should_preempt(self, running: ProcessRecord, ready: ProcessQueue) -> bool:
        best = _first_best(ready, _shorter)
        return best is not None and best.remaining_cpu < running.remaining_cpu


class PriorityPolicy(SchedulingPolicy):
    """
    Non-preemptive priority scheduling; higher numeric priority wins.
    """

    key = "priority"
    name = "Priority (non-preemptive)"

    def select_next(self, ready: ProcessQueue) -> Optional[ProcessRecord]:
        best = _first_best(ready, _higher_priority)
        if best is not None:
            ready.remove_specific(best)
        return best


class PreemptivePriorityPolicy(PriorityPolicy):
    key = "ppriority"
    name = "Priority (preemptive)"
    preemptive = True

    def should_preempt(self, running: ProcessRecord, ready: ProcessQueue) -> bool:
        best = _first_best(ready, _higher_priority)
        return best is not None and best.priority > running.priority


class RoundRobinPolicy(SchedulingPolicy):
    """
    FIFO with a time quantum. A run ends at whichever comes first: the
    quantum, the I/O request, or completion.
    """

    key = "rr"
    name = "Round Robin"
    uses_quantum = True

    def next_run_length(self, record: ProcessRecord, quantum: int) -> int:
        return min(super().next_run_length(record, quantum), quantum)


POLICIES: Dict[str, SchedulingPolicy] = {
    policy.key: policy
    for policy in (
        FCFSPolicy(),
        SJFPolicy(),
        SRTFPolicy(),
        PriorityPolicy(),
        PreemptivePriorityPolicy(),
        RoundRobinPolicy(),
    )
}


def get_policy(key: str) -> SchedulingPolicy:
    key = key.lower()
    if key not in POLICIES:
        raise ValueError(f"Unknown algorithm '{key}' (choose from: {', '.join(POLICIES)})")
    return POLICIES[key]
