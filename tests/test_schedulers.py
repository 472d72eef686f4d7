from sched_sim.algorithms import (
    run_algorithm,
    schedule_fcfs,
    schedule_preemptive_priority,
    schedule_priority,
    schedule_rr,
    schedule_sjf,
    schedule_srtf,
)
from sched_sim.models import Process


def _pids(result):
    return [slot.pid for slot in result.occupancy]


def _io_marks(result):
    return [slot.time for slot in result.occupancy if slot.io_request]


def _sjf_procs():
    # Zero-length I/O: P1 blocks at 3, P2 at 1, each returning immediately.
    return [
        Process(1, priority=1, arrival_time=0, cpu_burst=4, io_burst=0, io_request_time=3),
        Process(2, priority=1, arrival_time=1, cpu_burst=2, io_burst=0, io_request_time=1),
    ]


def _priority_procs():
    return [
        Process(1, priority=1, arrival_time=0, cpu_burst=4, io_burst=1, io_request_time=2),
        Process(2, priority=5, arrival_time=1, cpu_burst=3, io_burst=1, io_request_time=1),
    ]


def test_fcfs_single_process_with_io():
    res = schedule_fcfs([Process(1, priority=1, arrival_time=0, cpu_burst=5, io_burst=2, io_request_time=2)])

    assert _pids(res) == [1, 1, None, None, 1, 1, 1]
    assert _io_marks(res) == [1]
    m = res.metrics_for(1)
    assert m.completion_time == 7
    assert m.waiting_time == 0
    assert m.turnaround_time == 7
    assert [(s.start_time, s.end_time) for s in res.timeline] == [(0, 2), (4, 7)]


def test_fcfs_does_not_preempt_for_arrivals():
    procs = [
        Process(1, priority=1, arrival_time=0, cpu_burst=6, io_burst=1, io_request_time=4),
        Process(2, priority=9, arrival_time=1, cpu_burst=2, io_burst=1, io_request_time=1),
    ]
    res = schedule_fcfs(procs)

    # P1 keeps the CPU until its own I/O request at t=4.
    assert _pids(res)[:4] == [1, 1, 1, 1]
    assert res.timeline[0].pid == 1 and res.timeline[0].end_time == 4
    assert res.timeline[1].pid == 2


def test_sjf_non_preemptive_scenario():
    res = schedule_sjf(_sjf_procs())

    assert _pids(res) == [1, 1, 1, 1, 2, 2]
    assert res.metrics_for(1).completion_time == 4
    assert res.metrics_for(2).completion_time == 6
    assert res.metrics_for(2).waiting_time == 3


def test_sjf_preemptive_scenario():
    res = schedule_srtf(_sjf_procs())

    assert _pids(res) == [1, 2, 2, 1, 1, 1]
    assert res.metrics_for(1).completion_time == 6
    assert res.metrics_for(2).completion_time == 3
    assert res.metrics_for(1).waiting_time == 2
    assert res.metrics_for(2).waiting_time == 0
    assert (res.timeline[0].pid, res.timeline[0].end_time) == (1, 1)


def test_srtf_ignores_completion_left_over_from_preempted_run():
    # P1's first dispatch schedules a completion at t=8. It is preempted at
    # t=1 and redispatched at t=3, so that event fires while P1 is running
    # again and must be discarded.
    procs = [
        Process(1, priority=1, arrival_time=0, cpu_burst=9, io_burst=0, io_request_time=8),
        Process(2, priority=1, arrival_time=1, cpu_burst=2, io_burst=0, io_request_time=1),
    ]
    res = schedule_srtf(procs)

    assert _pids(res) == [1, 2, 2] + [1] * 8
    assert res.metrics_for(1).completion_time == 11
    assert res.metrics_for(1).waiting_time == 2


def test_priority_non_preemptive():
    res = schedule_priority(_priority_procs())

    assert _pids(res) == [1, 1, 2, 1, 1, 2, 2]
    assert _io_marks(res) == [1, 2]
    assert res.metrics_for(1).completion_time == 5
    assert res.metrics_for(2).completion_time == 7
    assert res.metrics_for(2).waiting_time == 2


def test_priority_preemptive():
    res = schedule_preemptive_priority(_priority_procs())

    assert _pids(res) == [1, 2, 1, 2, 2, 1, 1]
    assert _io_marks(res) == [1, 2]
    assert res.metrics_for(2).completion_time == 5
    assert res.metrics_for(2).waiting_time == 0
    assert res.metrics_for(1).completion_time == 7
    assert res.metrics_for(1).waiting_time == 2


def test_rr_quantum_2():
    procs = [
        Process(1, priority=1, arrival_time=0, cpu_burst=6, io_burst=1, io_request_time=5),
        Process(2, priority=1, arrival_time=0, cpu_burst=3, io_burst=2, io_request_time=2),
    ]
    res = schedule_rr(procs, quantum=2)

    assert _pids(res) == [1, 1, 2, 2, 1, 1, 2, 1, None, 1]
    assert _io_marks(res) == [3, 7]
    assert res.quantum == 2
    assert all(s.length <= 2 for s in res.timeline)
    assert res.metrics_for(1).completion_time == 10
    assert res.metrics_for(1).waiting_time == 3
    assert res.metrics_for(2).completion_time == 7
    assert res.metrics_for(2).waiting_time == 2


def test_idle_until_first_arrival():
    res = schedule_fcfs([Process(1, priority=1, arrival_time=3, cpu_burst=2, io_burst=1, io_request_time=1)])

    assert _pids(res) == [None, None, None, 1, None, 1]
    assert res.metrics_for(1).start_time == 3
    assert res.metrics_for(1).response_time == 0
    assert res.system.cpu_busy_time == 2
    assert res.system.makespan == 6


def test_quantum_only_reported_for_round_robin():
    procs = _sjf_procs()
    assert run_algorithm("FCFS", procs).quantum is None
    assert run_algorithm("rr", procs, quantum=4).quantum == 4
