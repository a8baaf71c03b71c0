import pytest

from cpu_visualizer.algorithms import (
    schedule_fcfs,
    schedule_sjf,
    schedule_rr,
    schedule_priority,
)
from cpu_visualizer.models import IDLE, Process, Segment
from cpu_visualizer.process_set import DEMO_PROCESSES


def _procs():
    return [
        Process("P1", arrival_time=0, burst_time=4, priority=2),
        Process("P2", arrival_time=1, burst_time=3, priority=1),
        Process("P3", arrival_time=2, burst_time=6, priority=3),
    ]


def _spans(segments):
    return [(s.pid, s.start, s.end) for s in segments]


ALL_POLICIES = [
    schedule_fcfs,
    schedule_sjf,
    schedule_priority,
    lambda procs: schedule_rr(procs, quantum=2),
]


def test_fcfs_order():
    segs = schedule_fcfs(_procs())
    assert _spans(segs) == [("P1", 0, 4), ("P2", 4, 7), ("P3", 7, 13)]


def test_fcfs_idle_gap_is_its_own_segment():
    segs = schedule_fcfs([Process("A", 0, 1), Process("B", 5, 2)])
    assert _spans(segs) == [("A", 0, 1), (IDLE, 1, 5), ("B", 5, 7)]


def test_fcfs_leading_idle():
    segs = schedule_fcfs([Process("A", 2, 3)])
    assert _spans(segs) == [(IDLE, 0, 2), ("A", 2, 5)]


def test_fcfs_equal_arrivals_keep_input_order():
    segs = schedule_fcfs([Process("B", 0, 2), Process("A", 0, 1)])
    assert [s.pid for s in segs] == ["B", "A"]


def test_sjf_order():
    # P1 is alone at t=0 and cannot be preempted by the shorter P2
    segs = schedule_sjf(_procs())
    assert _spans(segs) == [("P1", 0, 4), ("P2", 4, 7), ("P3", 7, 13)]


def test_sjf_picks_shortest_ready_job():
    segs = schedule_sjf(DEMO_PROCESSES)
    assert _spans(segs) == [("P1", 0, 7), ("P3", 7, 8), ("P2", 8, 12), ("P4", 12, 16)]


def test_sjf_equal_bursts_fall_back_to_input_order():
    procs = [Process("P1", 0, 3), Process("PB", 1, 2), Process("PA", 1, 2)]
    segs = schedule_sjf(procs)
    assert [s.pid for s in segs] == ["P1", "PB", "PA"]


def test_sjf_idle_jumps_to_next_arrival():
    segs = schedule_sjf([Process("A", 3, 2), Process("B", 10, 1)])
    assert _spans(segs) == [(IDLE, 0, 3), ("A", 3, 5), (IDLE, 5, 10), ("B", 10, 11)]


def test_priority_static():
    # P2 has the highest priority but P1 is already running at t=1
    segs = schedule_priority(_procs())
    assert _spans(segs) == [("P1", 0, 4), ("P2", 4, 7), ("P3", 7, 13)]


def test_priority_demo_workload():
    segs = schedule_priority(DEMO_PROCESSES)
    assert _spans(segs) == [("P1", 0, 7), ("P2", 7, 11), ("P4", 11, 15), ("P3", 15, 16)]


def test_priority_ties_break_by_arrival_then_burst():
    procs = [
        Process("P0", 0, 5, priority=1),
        Process("A", 1, 4, priority=2),
        Process("B", 1, 2, priority=2),
        Process("C", 2, 1, priority=2),
    ]
    segs = schedule_priority(procs)
    assert _spans(segs) == [("P0", 0, 5), ("B", 5, 7), ("A", 7, 11), ("C", 11, 12)]


def test_priority_missing_value_runs_last():
    procs = [Process("X", 0, 1, priority=5), Process("Y", 0, 1), Process("Z", 0, 1, priority=9)]
    assert [s.pid for s in schedule_priority(procs)] == ["X", "Z", "Y"]


def test_rr_quantum_2():
    segs = schedule_rr(_procs(), quantum=2)
    assert _spans(segs) == [
        ("P1", 0, 2),
        ("P2", 2, 4),
        ("P3", 4, 6),
        ("P1", 6, 8),
        ("P2", 8, 9),
        ("P3", 9, 11),
        ("P3", 11, 13),
    ]


def test_rr_new_arrival_goes_ahead_of_preempted_process():
    segs = schedule_rr([Process("P1", 0, 4), Process("P2", 2, 2)], quantum=2)
    assert _spans(segs) == [("P1", 0, 2), ("P2", 2, 4), ("P1", 4, 6)]


def test_rr_demo_workload():
    segs = schedule_rr(DEMO_PROCESSES, quantum=2)
    assert _spans(segs) == [
        ("P1", 0, 2),
        ("P2", 2, 4),
        ("P1", 4, 6),
        ("P3", 6, 7),
        ("P2", 7, 9),
        ("P4", 9, 11),
        ("P1", 11, 13),
        ("P4", 13, 15),
        ("P1", 15, 16),
    ]


def test_rr_idle_until_next_arrival():
    segs = schedule_rr([Process("A", 0, 1), Process("B", 4, 3)], quantum=2)
    assert _spans(segs) == [("A", 0, 1), (IDLE, 1, 4), ("B", 4, 6), ("B", 6, 7)]


def test_rr_rejects_non_positive_quantum():
    with pytest.raises(ValueError):
        schedule_rr(_procs(), quantum=0)


def test_rr_survives_duplicate_ids():
    segs = schedule_rr([Process("A", 0, 3), Process("A", 0, 2)], quantum=2)
    assert sum(s.duration for s in segs) == 5


@pytest.mark.parametrize("policy", ALL_POLICIES)
def test_empty_process_set(policy):
    assert policy([]) == []


@pytest.mark.parametrize("policy", ALL_POLICIES)
def test_invalid_process_fails_fast(policy):
    with pytest.raises(ValueError):
        policy([Process("A", 0, 0)])
    with pytest.raises(ValueError):
        policy([Process("A", -1, 2)])


@pytest.mark.parametrize("policy", ALL_POLICIES)
@pytest.mark.parametrize("procs", [_procs(), list(DEMO_PROCESSES)])
def test_schedule_properties(policy, procs):
    segs = policy(procs)

    # contiguous from 0, no overlaps
    assert segs[0].start == 0
    for a, b in zip(segs, segs[1:]):
        assert a.end == b.start
    assert all(s.end > s.start for s in segs)

    by_pid = {p.pid: p for p in procs}
    for p in procs:
        own = [s for s in segs if s.pid == p.pid]
        assert sum(s.duration for s in own) == p.burst_time
        assert all(s.start >= p.arrival_time for s in own)

    # idempotent and the input is untouched
    assert policy(procs) == segs
    assert {p.pid: p for p in procs} == by_pid


@pytest.mark.parametrize("policy", [schedule_fcfs, schedule_sjf, schedule_priority])
def test_non_preemptive_policies_run_each_process_once(policy):
    segs = policy(DEMO_PROCESSES)
    pids = [s.pid for s in segs if s.pid != IDLE]
    assert len(pids) == len(set(pids))


@pytest.mark.parametrize("quantum", [1, 2, 3, 5])
def test_rr_slices_never_exceed_quantum(quantum):
    segs = schedule_rr(DEMO_PROCESSES, quantum=quantum)
    remaining = {p.pid: p.burst_time for p in DEMO_PROCESSES}
    for s in segs:
        if s.pid == IDLE:
            continue
        remaining[s.pid] -= s.duration
        assert s.duration <= quantum
        if s.duration < quantum:
            assert remaining[s.pid] == 0


def test_segments_are_plain_values():
    assert schedule_fcfs([Process("A", 0, 2)]) == [Segment("A", 0, 2)]
