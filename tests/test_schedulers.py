import pytest

from pcb_scheduler.engine import fcfs_run, rr_next, rr_run, run_algorithm, run_proc
from pcb_scheduler.errors import ConstructionError
from pcb_scheduler.models import ProcessTable


def _procs(bursts=(5, 8, 2)):
    return ProcessTable.create(list(bursts))


def _waits(table):
    return [p.wait for p in table]


def test_run_proc_partial_slice():
    table = _procs()
    ran = run_proc(table, 0, 4)
    assert ran == 4
    assert table.snapshot() == [(0, 1, 0), (1, 8, 4), (2, 2, 4)]


def test_run_proc_capped_at_remaining_burst():
    table = _procs()
    ran = run_proc(table, 2, 10)
    assert ran == 2
    assert table[2].burst_left == 0
    assert _waits(table) == [2, 2, 0]


def test_run_proc_skips_finished_processes():
    table = _procs([3, 0, 4])
    run_proc(table, 0, 3)
    assert _waits(table) == [0, 0, 3]

    # P0 is finished now; its wait stays frozen while P2 runs
    run_proc(table, 2, 4)
    assert _waits(table) == [0, 0, 3]


@pytest.mark.parametrize(
    "current, amount",
    [(-1, 3), (3, 3), (0, 0), (0, -2), (1, 5)],
)
def test_run_proc_invalid_arguments_are_noops(current, amount):
    table = _procs([4, 0, 6])
    before = table.snapshot()
    assert run_proc(table, current, amount) == 0
    assert table.snapshot() == before


def test_run_proc_without_table():
    assert run_proc(None, 0, 3) == 0
    assert run_proc([], 0, 3) == 0


def test_fcfs_order():
    table = _procs()
    timeline = []
    elapsed = fcfs_run(table, timeline)
    assert elapsed == 15
    assert _waits(table) == [0, 5, 13]
    assert [s.pid for s in timeline] == [0, 1, 2]
    assert table.all_finished()


def test_fcfs_zero_burst_never_waits():
    table = _procs([0, 3, 0, 2])
    timeline = []
    assert fcfs_run(table, timeline) == 5
    assert _waits(table) == [0, 0, 0, 3]
    assert [s.pid for s in timeline] == [1, 3]


def test_fcfs_degenerate_tables():
    assert fcfs_run(None) == 0
    assert fcfs_run([]) == 0


def test_rr_next_circular_order():
    table = _procs([1, 0, 2, 3])
    assert rr_next(None, table) == 0
    assert rr_next(-1, table) == 0
    assert rr_next(7, table) == 0
    assert rr_next(0, table) == 2  # P1 is already finished
    assert rr_next(3, table) == 0  # wraps around


def test_rr_next_returns_same_process_when_it_is_the_only_one_left():
    table = _procs([0, 4, 0])
    assert rr_next(1, table) == 1


def test_rr_next_all_finished():
    table = _procs([0, 0])
    assert rr_next(None, table) is None
    assert rr_next(0, None) is None


def test_rr_quantum_2():
    table = _procs()
    timeline = []
    elapsed = rr_run(table, 2, timeline)
    assert elapsed == 15
    assert [s.pid for s in timeline] == [0, 1, 2, 0, 1, 0, 1, 1]
    assert _waits(table) == [6, 7, 4]
    assert sum(_waits(table)) / len(table) == pytest.approx(17 / 3)


def test_rr_large_quantum_matches_fcfs():
    rr_table = _procs([5, 8, 2])
    fcfs_table = _procs([5, 8, 2])
    assert rr_run(rr_table, 100) == fcfs_run(fcfs_table)
    assert rr_table.snapshot() == fcfs_table.snapshot()


@pytest.mark.parametrize("quantum", [0, -3])
def test_rr_non_positive_quantum_is_noop(quantum):
    table = _procs()
    before = table.snapshot()
    assert rr_run(table, quantum) == 0
    assert table.snapshot() == before


def test_rr_degenerate_tables():
    assert rr_run(None, 2) == 0
    assert rr_run([], 2) == 0


@pytest.mark.parametrize("bursts", [[5, 8, 2], [1, 1, 1, 1], [7, 0, 3, 9, 4], [0, 0, 6]])
@pytest.mark.parametrize("quantum", [1, 2, 3, 5])
def test_rr_fairness_bound(bursts, quantum):
    table = _procs(bursts)
    timeline = []
    rr_run(table, quantum, timeline)

    n = sum(1 for b in bursts if b > 0)
    last_end = {}
    for sl in timeline:
        if sl.pid in last_end:
            assert sl.start_time - last_end[sl.pid] <= (n - 1) * quantum
        last_end[sl.pid] = sl.end_time


@pytest.mark.parametrize("bursts", [[5, 8, 2], [3, 0, 4, 1], [10]])
def test_wait_plus_burst_equals_completion(bursts):
    for runner in (lambda t, tl: fcfs_run(t, tl), lambda t, tl: rr_run(t, 3, tl)):
        table = _procs(bursts)
        timeline = []
        elapsed = runner(table, timeline)
        assert elapsed == sum(bursts)
        assert sum(s.end_time - s.start_time for s in timeline) == elapsed

        for pid, burst in enumerate(bursts):
            if burst == 0:
                assert table[pid].wait == 0
                continue
            completion = max(s.end_time for s in timeline if s.pid == pid)
            assert table[pid].wait + burst == completion


def test_dispatch_steps_are_monotonic():
    table = _procs([4, 6, 3])
    prev = table.snapshot()
    nxt = None
    while True:
        nxt = rr_next(nxt, table)
        if nxt is None:
            break
        run_proc(table, nxt, 2)
        cur = table.snapshot()
        for (_, b0, w0), (_, b1, w1) in zip(prev, cur):
            assert b1 <= b0
            assert w1 >= w0
            if b0 == 0:
                assert (b1, w1) == (b0, w0)
        prev = cur


def test_independent_tables_do_not_share_state():
    a = _procs([2, 2])
    b = _procs([2, 2])
    fcfs_run(a)
    assert b.snapshot() == [(0, 2, 0), (1, 2, 0)]


def test_run_algorithm_rr():
    res = run_algorithm("RR", [5, 8, 2], quantum=2)
    assert res.algorithm == "Round Robin"
    assert res.quantum == 2
    assert res.elapsed == 15
    assert [p.wait for p in res.table] == [6, 7, 4]


def test_run_algorithm_fcfs_ignores_quantum():
    res = run_algorithm("fcfs", [5, 8, 2], quantum=4)
    assert res.algorithm == "FCFS"
    assert res.quantum is None
    assert [s.pid for s in res.timeline] == [0, 1, 2]


def test_run_algorithm_rejects_bad_input():
    with pytest.raises(ValueError):
        run_algorithm("sjf", [1, 2])
    with pytest.raises(ValueError):
        run_algorithm("rr", [1, 2])
    with pytest.raises(ConstructionError):
        run_algorithm("fcfs", [])
