from collections import Counter

import pytest

from sched_sim.algorithms import ALGORITHMS, run_algorithm, run_all
from sched_sim.config import SimulationConfig
from sched_sim.engine import SimulationContext, simulate
from sched_sim.errors import EventCapacityError, SimulationHorizonError
from sched_sim.models import Process
from sched_sim.policies import FCFSPolicy, get_policy
from sched_sim.workload import generate_workload

SEEDS = range(12)


def _workloads():
    for seed in SEEDS:
        yield generate_workload(6, seed=seed)


@pytest.mark.parametrize("algorithm", list(ALGORITHMS))
def test_completion_and_metric_identities(algorithm):
    for procs in _workloads():
        res = run_algorithm(algorithm, procs, quantum=2)
        for p in res.processes:
            assert p.turnaround_time == p.completion_time - p.arrival_time
            assert p.completion_time >= p.arrival_time + p.cpu_burst + p.io_burst
            assert p.waiting_time == p.turnaround_time - p.cpu_burst - p.io_burst
            assert p.waiting_time >= 0
            assert p.start_time >= p.arrival_time


@pytest.mark.parametrize("algorithm", list(ALGORITHMS))
def test_work_is_conserved(algorithm):
    for procs in _workloads():
        res = run_algorithm(algorithm, procs, quantum=2)

        running = Counter(slot.pid for slot in res.occupancy if not slot.idle)
        assert running == {p.pid: p.cpu_burst for p in procs}
        assert [slot.time for slot in res.occupancy] == list(range(len(res.occupancy)))
        assert res.system.cpu_busy_time == sum(p.cpu_burst for p in procs)
        assert len(res.occupancy) == max(p.completion_time for p in res.processes)


@pytest.mark.parametrize("algorithm", list(ALGORITHMS))
def test_each_process_blocks_for_io_exactly_once(algorithm):
    for procs in _workloads():
        res = run_algorithm(algorithm, procs, quantum=2)
        marked = Counter(slot.pid for slot in res.occupancy if slot.io_request)
        assert marked == {p.pid: 1 for p in procs}


@pytest.mark.parametrize("algorithm", ["fcfs", "sjf", "priority"])
def test_non_preemptive_policies_run_each_burst_whole(algorithm):
    for procs in _workloads():
        res = run_algorithm(algorithm, procs)
        by_pid = {p.pid: p for p in procs}
        assert set(Counter(s.pid for s in res.timeline).values()) == {2}
        for s in res.timeline:
            p = by_pid[s.pid]
            assert s.length in (p.io_request_time, p.cpu_burst - p.io_request_time)


@pytest.mark.parametrize("quantum", [1, 2, 3, 5])
def test_round_robin_never_exceeds_quantum(quantum):
    for procs in _workloads():
        res = run_algorithm("rr", procs, quantum=quantum)
        assert all(0 < s.length <= quantum for s in res.timeline)


def test_slices_never_overlap():
    for procs in _workloads():
        for res in run_all(procs, quantum=2).values():
            ordered = sorted(res.timeline, key=lambda s: s.start_time)
            for prev, nxt in zip(ordered, ordered[1:]):
                assert prev.end_time <= nxt.start_time


def test_srtf_runs_the_shortest_ready_job():
    procs = [
        Process(1, priority=1, arrival_time=0, cpu_burst=10, io_burst=1, io_request_time=9),
        Process(2, priority=1, arrival_time=2, cpu_burst=3, io_burst=1, io_request_time=2),
    ]
    res = simulate(procs, "srtf")

    # P2 takes over the unit right after it arrives.
    assert [slot.pid for slot in res.occupancy][:4] == [1, 1, 2, 2]


def test_runs_do_not_share_state():
    procs = generate_workload(5, seed=42)
    first = run_all(procs, quantum=3)
    second = run_all(procs, quantum=3)

    for name in ALGORITHMS:
        assert first[name].processes == second[name].processes
        assert first[name].occupancy == second[name].occupancy


def test_context_runs_once():
    ctx = SimulationContext(generate_workload(2, seed=1), FCFSPolicy())
    ctx.run()
    with pytest.raises(RuntimeError):
        ctx.run()


def test_empty_workload():
    res = simulate([], "rr")
    assert res.processes == []
    assert res.occupancy == []
    assert res.system.throughput == 0.0


def test_duplicate_pids_rejected():
    p = Process(1, priority=1, arrival_time=0, cpu_burst=3, io_burst=1, io_request_time=1)
    with pytest.raises(ValueError):
        simulate([p, p], "fcfs")


def test_horizon_is_a_hard_failure():
    procs = [Process(1, priority=1, arrival_time=0, cpu_burst=5, io_burst=2, io_request_time=2)]
    with pytest.raises(SimulationHorizonError):
        simulate(procs, "fcfs", SimulationConfig(max_time=3))


def test_event_capacity_is_a_hard_failure():
    with pytest.raises(EventCapacityError):
        simulate(generate_workload(3, seed=0), "fcfs", SimulationConfig(max_events=2))


def test_small_initial_queue_capacity_grows():
    procs = generate_workload(8, seed=3)
    small = simulate(procs, "rr", SimulationConfig(quantum=2, queue_capacity=1))
    default = simulate(procs, "rr", SimulationConfig(quantum=2))
    assert small.occupancy == default.occupancy


def test_unknown_algorithm():
    with pytest.raises(ValueError):
        get_policy("lottery")
    with pytest.raises(ValueError):
        run_algorithm("lottery", [])


def test_invalid_process_descriptors():
    with pytest.raises(ValueError):
        Process(1, priority=1, arrival_time=0, cpu_burst=4, io_burst=1, io_request_time=4)
    with pytest.raises(ValueError):
        Process(1, priority=1, arrival_time=0, cpu_burst=4, io_burst=1, io_request_time=0)
    with pytest.raises(ValueError):
        Process(1, priority=1, arrival_time=-1, cpu_burst=4, io_burst=1, io_request_time=1)


def test_invalid_quantum():
    with pytest.raises(ValueError):
        SimulationConfig(quantum=0)
