from __future__ import annotations

import random
from typing import List, Optional

from .models import Process

DEFAULT_PROCESS_COUNT = 5


def generate_workload(count: int = DEFAULT_PROCESS_COUNT, seed: Optional[int] = None) -> List[Process]:
    """
    Build a random workload of ``count`` processes with pids 1..count.

    Ranges: priority 1-5, arrival 0-9, CPU burst 2-10, I/O burst 1-5, and an
    I/O request somewhere strictly inside the CPU burst. The same seed
    always yields the same workload.
    """
    if count < 0:
        raise ValueError("count must be >= 0")

    rng = random.Random(seed)
    processes: List[Process] = []
    for pid in range(1, count + 1):
        cpu_burst = rng.randint(2, 10)
        processes.append(
            Process(
                pid=pid,
                priority=rng.randint(1, 5),
                arrival_time=rng.randint(0, 9),
                cpu_burst=cpu_burst,
                io_burst=rng.randint(1, 5),
                io_request_time=rng.randint(1, cpu_burst - 1),
            )
        )
    return processes
