from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Sequence, Union

from .config import SimulationConfig
from .errors import SimulationHorizonError, SimulationStalledError
from .events import Event, EventHeap, EventKind
from .metrics import build_process_metrics, compute_system_metrics, derive_process_metrics
from .models import OccupancySlot, Process, ProcessRecord, ScheduledSlice, ScheduleResult
from .policies import SchedulingPolicy, get_policy
from .process_queue import ProcessQueue

logger = logging.getLogger(__name__)


class SimulationContext:
    """
    Everything one policy run mutates: process records, the ready and
    waiting queues, the event heap and the occupancy record.

    A context is used for exactly one run. Running another policy means
    building another context, which gives every process fresh state.
    """

    def __init__(
        self,
        processes: Sequence[Process],
        policy: SchedulingPolicy,
        config: Optional[SimulationConfig] = None,
    ):
        pids = [p.pid for p in processes]
        if len(set(pids)) != len(pids):
            raise ValueError("Process ids must be unique within a workload")

        self.policy = policy
        self.config = config or SimulationConfig()
        self.records: List[ProcessRecord] = [ProcessRecord(p) for p in processes]

        capacity = self.config.queue_capacity or len(self.records) + 1
        self.ready = ProcessQueue(capacity)
        self.waiting = ProcessQueue(capacity)
        self.events = EventHeap(self.config.max_events)

        self.occupancy: List[OccupancySlot] = []
        self.timeline: List[ScheduledSlice] = []

        self.now = 0
        self.completed = 0
        self.running: Optional[ProcessRecord] = None

        self._last_event_time = 0
        self._run_start = 0
        self._slice_start = 0
        # The CPU completion scheduled by the current dispatch. Any other
        # CPU completion event that fires is stale.
        self._pending: Optional[Event] = None
        self._finished = False

    def run(self) -> ScheduleResult:
        if self._finished:
            raise RuntimeError("A SimulationContext can only be run once")
        self._finished = True

        for record in self.records:
            self.events.push(record.arrival_time, EventKind.ARRIVAL, record)

        total = len(self.records)
        while self.events and self.completed < total:
            event = self.events.pop()
            self._advance_to(event.time)
            self._handle(event)

            # Events scheduled for "now" while draining (zero-length I/O)
            # are handled in the same pass.
            while self.events and self.events.peek().time == self.now:
                self._handle(self.events.pop())

            if self.policy.preemptive and self.running is not None and self.ready:
                self._check_preemption()

            if self.running is None and self.ready:
                self._dispatch()

        if self.completed < total:
            raise SimulationStalledError(self.now, self.completed, total)

        derive_process_metrics(self.records)
        return self._result()

    def _advance_to(self, now: int) -> None:
        max_time = self.config.max_time
        if max_time is not None and now > max_time:
            raise SimulationHorizonError(now, max_time)

        pid = self.running.pid if self.running is not None else None
        for t in range(self._last_event_time, now):
            self.occupancy.append(OccupancySlot(time=t, pid=pid))

        self._last_event_time = now
        self.now = now

    def _handle(self, event: Event) -> None:
        record = event.process

        if event.kind is EventKind.ARRIVAL:
            logger.debug("t=%d: P%d arrives", self.now, record.pid)
            self.ready.enqueue(record)

        elif event.kind is EventKind.CPU_BURST_COMPLETE:
            if event is not self._pending:
                logger.debug("t=%d: discarding stale completion for P%d", self.now, record.pid)
                return
            self._finish_run(record)

        elif event.kind is EventKind.IO_COMPLETE:
            logger.debug("t=%d: P%d finished I/O", self.now, record.pid)
            record.remaining_io = 0
            self.waiting.remove_specific(record)
            self.ready.enqueue(record)

    def _finish_run(self, record: ProcessRecord) -> None:
        self._charge()
        self._release_cpu()

        if record.at_io_point:
            logger.debug("t=%d: P%d blocks for %d units of I/O", self.now, record.pid, record.io_burst)
            self._mark_io_request(record)
            record.remaining_io = record.io_burst
            self.waiting.enqueue(record)
            self.events.push(self.now + record.remaining_io, EventKind.IO_COMPLETE, record)
        elif record.remaining_cpu > 0:
            logger.debug("t=%d: P%d quantum expired", self.now, record.pid)
            self.ready.enqueue(record)
        else:
            self._terminate(record)

    def _check_preemption(self) -> None:
        running = self.running
        self._charge()
        if not self.policy.should_preempt(running, self.ready):
            return

        logger.debug("t=%d: preempting P%d", self.now, running.pid)
        self._release_cpu()
        self.ready.enqueue(running)

    def _dispatch(self) -> None:
        record = self.policy.select_next(self.ready)
        if record is None:
            return

        if record.start_time < 0:
            record.start_time = self.now

        run = self.policy.next_run_length(record, self.config.quantum)
        if run <= 0:
            self._terminate(record)
            return

        logger.debug("t=%d: dispatching P%d for %d units", self.now, record.pid, run)
        self.running = record
        self._run_start = self.now
        self._slice_start = self.now
        self._pending = self.events.push(self.now + run, EventKind.CPU_BURST_COMPLETE, record)

    def _charge(self) -> None:
        """
        Bill the running process for the CPU it used since it was last charged.
        """
        elapsed = self.now - self._run_start
        self.running.executed_time += elapsed
        self.running.remaining_cpu -= elapsed
        self._run_start = self.now

    def _release_cpu(self) -> None:
        if self.now > self._slice_start:
            self.timeline.append(
                ScheduledSlice(pid=self.running.pid, start_time=self._slice_start, end_time=self.now)
            )
        self.running = None
        self._pending = None

    def _terminate(self, record: ProcessRecord) -> None:
        logger.debug("t=%d: P%d terminated", self.now, record.pid)
        record.completion_time = self.now
        self.completed += 1

    def _mark_io_request(self, record: ProcessRecord) -> None:
        t = self.now - 1
        if 0 <= t < len(self.occupancy):
            self.occupancy[t] = replace(self.occupancy[t], io_request=True)

    def _result(self) -> ScheduleResult:
        result = ScheduleResult(
            algorithm=self.policy.name,
            quantum=self.config.quantum if self.policy.uses_quantum else None,
            processes=build_process_metrics(self.records),
            occupancy=self.occupancy,
            timeline=self.timeline,
        )
        compute_system_metrics(result)
        return result


def simulate(
    processes: Sequence[Process],
    policy: Union[str, SchedulingPolicy],
    config: Optional[SimulationConfig] = None,
) -> ScheduleResult:
    """
    Run one scheduling policy over a workload and return its schedule.
    """
    if isinstance(policy, str):
        policy = get_policy(policy)
    return SimulationContext(processes, policy, config).run()
