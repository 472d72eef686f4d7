from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Process:
    """
    Workload descriptor for one process.

    A process runs ``cpu_burst`` units of CPU in total and is interrupted
    exactly once, after ``io_request_time`` units, for ``io_burst`` units
    of I/O. Higher ``priority`` values are more favored.
    """

    pid: int
    priority: int
    arrival_time: int
    cpu_burst: int
    io_burst: int
    io_request_time: int

    def __post_init__(self) -> None:
        if self.arrival_time < 0:
            raise ValueError(f"P{self.pid}: arrival_time must be >= 0")
        if self.cpu_burst < 2:
            raise ValueError(f"P{self.pid}: cpu_burst must be >= 2 to allow an I/O request")
        if self.io_burst < 0:
            raise ValueError(f"P{self.pid}: io_burst must be >= 0")
        if not 1 <= self.io_request_time <= self.cpu_burst - 1:
            raise ValueError(
                f"P{self.pid}: io_request_time must be between 1 and {self.cpu_burst - 1}"
            )


@dataclass(eq=False)
class ProcessRecord:
    """
    Mutable state of one process during a single simulation run.

    Records are created fresh for every run, so nothing leaks between
    policies. Equality is identity: queues and events refer to records,
    never to copies.
    """

    process: Process
    start_time: int = -1
    completion_time: int = 0
    waiting_time: int = 0
    turnaround_time: int = 0
    remaining_cpu: int = field(init=False)
    remaining_io: int = 0
    executed_time: int = 0

    def __post_init__(self) -> None:
        self.remaining_cpu = self.process.cpu_burst

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def priority(self) -> int:
        return self.process.priority

    @property
    def arrival_time(self) -> int:
        return self.process.arrival_time

    @property
    def cpu_burst(self) -> int:
        return self.process.cpu_burst

    @property
    def io_burst(self) -> int:
        return self.process.io_burst

    @property
    def io_request_time(self) -> int:
        return self.process.io_request_time

    @property
    def passed_io_point(self) -> bool:
        return self.executed_time >= self.io_request_time

    @property
    def at_io_point(self) -> bool:
        return self.executed_time == self.io_request_time

    def __repr__(self) -> str:
        return (
            f"ProcessRecord(P{self.pid}, executed={self.executed_time}, "
            f"remaining={self.remaining_cpu})"
        )


@dataclass(frozen=True)
class OccupancySlot:
    """
    What the CPU did during one simulated time unit.

    ``pid`` is None when the CPU was idle. ``io_request`` marks the last
    unit a process ran before blocking for I/O.
    """

    time: int
    pid: Optional[int] = None
    io_request: bool = False

    @property
    def idle(self) -> bool:
        return self.pid is None

    @property
    def label(self) -> str:
        if self.pid is None:
            return "Idle"
        if self.io_request:
            return f"P{self.pid}(I/O)"
        return f"P{self.pid}"


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int

    @property
    def length(self) -> int:
        return self.end_time - self.start_time


@dataclass
class ProcessMetrics:
    pid: int
    priority: int
    arrival_time: int
    cpu_burst: int
    io_burst: int
    io_request_time: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessMetrics] = field(default_factory=list)
    occupancy: List[OccupancySlot] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    system: Optional[SystemMetrics] = None

    def metrics_for(self, pid: int) -> ProcessMetrics:
        for m in self.processes:
            if m.pid == pid:
                return m
        raise KeyError(pid)
