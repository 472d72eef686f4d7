from __future__ import annotations


class SimulationError(RuntimeError):
    """
    A simulation run could not produce trustworthy results.

    Raised instead of silently truncating the run, so that a sizing
    problem never shows up as wrong metrics.
    """


class EventCapacityError(SimulationError):
    def __init__(self, capacity: int):
        super().__init__(f"Event heap capacity of {capacity} events exceeded")
        self.capacity = capacity


class SimulationHorizonError(SimulationError):
    def __init__(self, now: int, max_time: int):
        super().__init__(f"Simulated time {now} passed the horizon of {max_time} time units")
        self.now = now
        self.max_time = max_time


class SimulationStalledError(SimulationError):
    def __init__(self, now: int, completed: int, total: int):
        super().__init__(
            f"No events left at time {now} but only {completed} of {total} processes completed"
        )
        self.now = now
        self.completed = completed
        self.total = total
