"""
Event-driven CPU scheduling simulator.

Runs a workload of processes, each with one CPU burst interrupted once for
I/O, under six classic scheduling policies and reports the CPU occupancy
timeline together with waiting and turnaround times.
"""

from .algorithms import ALGORITHMS, run_algorithm, run_all
from .config import SimulationConfig
from .engine import SimulationContext, simulate
from .errors import EventCapacityError, SimulationError, SimulationHorizonError, SimulationStalledError
from .models import OccupancySlot, Process, ProcessMetrics, ScheduleResult

__all__ = [
    "ALGORITHMS",
    "EventCapacityError",
    "OccupancySlot",
    "Process",
    "ProcessMetrics",
    "ScheduleResult",
    "SimulationConfig",
    "SimulationContext",
    "SimulationError",
    "SimulationHorizonError",
    "SimulationStalledError",
    "cli",
    "run_algorithm",
    "run_all",
    "simulate",
]
