from __future__ import annotations

from typing import Iterable, List

from .models import ProcessMetrics, ProcessRecord, ScheduleResult, SystemMetrics


def derive_process_metrics(records: Iterable[ProcessRecord]) -> None:
    """
    Fill in turnaround and waiting time once every process has terminated.

    Waiting time is the part of the turnaround spent neither on the CPU
    nor in I/O.
    """
    for r in records:
        r.turnaround_time = r.completion_time - r.arrival_time
        r.waiting_time = r.turnaround_time - r.cpu_burst - r.io_burst


def build_process_metrics(records: Iterable[ProcessRecord]) -> List[ProcessMetrics]:
    return [
        ProcessMetrics(
            pid=r.pid,
            priority=r.priority,
            arrival_time=r.arrival_time,
            cpu_burst=r.cpu_burst,
            io_burst=r.io_burst,
            io_request_time=r.io_request_time,
            start_time=r.start_time,
            completion_time=r.completion_time,
            waiting_time=r.waiting_time,
            turnaround_time=r.turnaround_time,
            response_time=r.start_time - r.arrival_time,
        )
        for r in records
    ]


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization from the occupancy record.
    """
    makespan = len(result.occupancy)
    cpu_busy_time = sum(1 for slot in result.occupancy if not slot.idle)

    throughput = len(result.processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )
    result.system = system
    return system


def summarize_process_metrics(processes: List[ProcessMetrics]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
        "avg_response": sum(p.response_time for p in processes) / n,
    }
