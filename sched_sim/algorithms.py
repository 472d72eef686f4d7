from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .config import DEFAULT_QUANTUM, SimulationConfig
from .engine import simulate
from .models import Process, ScheduleResult


def _config(quantum: Optional[int], config: Optional[SimulationConfig]) -> SimulationConfig:
    if config is not None:
        if quantum is not None and quantum != config.quantum:
            raise ValueError("Pass the quantum either directly or through config, not both")
        return config
    return SimulationConfig(quantum=quantum if quantum is not None else DEFAULT_QUANTUM)


def schedule_fcfs(
    processes: List[Process], quantum: Optional[int] = None, config: Optional[SimulationConfig] = None
) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.
    """
    return simulate(processes, "fcfs", _config(quantum, config))


def schedule_sjf(
    processes: List[Process], quantum: Optional[int] = None, config: Optional[SimulationConfig] = None
) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    Whenever the CPU is free, the ready process with the least remaining
    CPU time runs next; ties go to the process queued first.
    """
    return simulate(processes, "sjf", _config(quantum, config))


def schedule_srtf(
    processes: List[Process], quantum: Optional[int] = None, config: Optional[SimulationConfig] = None
) -> ScheduleResult:
    """
    Shortest Remaining Time First (preemptive SJF).
    """
    return simulate(processes, "srtf", _config(quantum, config))


def schedule_priority(
    processes: List[Process], quantum: Optional[int] = None, config: Optional[SimulationConfig] = None
) -> ScheduleResult:
    """
    Static Priority scheduling (non-preemptive).

    Higher numeric priority value means higher priority. Ties go to the
    process queued first.
    """
    return simulate(processes, "priority", _config(quantum, config))


def schedule_preemptive_priority(
    processes: List[Process], quantum: Optional[int] = None, config: Optional[SimulationConfig] = None
) -> ScheduleResult:
    return simulate(processes, "ppriority", _config(quantum, config))


def schedule_rr(
    processes: List[Process], quantum: Optional[int] = None, config: Optional[SimulationConfig] = None
) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.
    """
    return simulate(processes, "rr", _config(quantum, config))


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "srtf": schedule_srtf,
    "priority": schedule_priority,
    "ppriority": schedule_preemptive_priority,
    "rr": schedule_rr,
}


def run_algorithm(
    name: str, processes: List[Process], quantum: Optional[int] = None, config: Optional[SimulationConfig] = None
) -> ScheduleResult:
    """
    Dispatch to the requested algorithm.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from: {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    return func(processes, quantum=quantum, config=config)


def run_all(
    processes: List[Process],
    names: Optional[Iterable[str]] = None,
    quantum: Optional[int] = None,
    config: Optional[SimulationConfig] = None,
) -> Dict[str, ScheduleResult]:
    """
    Run several algorithms over the same workload, each from a clean state.
    """
    names = list(names) if names is not None else list(ALGORITHMS)
    return {name: run_algorithm(name, processes, quantum=quantum, config=config) for name in names}
