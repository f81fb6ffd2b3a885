from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

from .models import ProcessControlBlock, ProcessTable, RunResult, ScheduledSlice

logger = logging.getLogger(__name__)

Procs = Optional[Sequence[ProcessControlBlock]]


def run_proc(procs: Procs, current: int, amount: int) -> int:
    """
    Run the process at index ``current`` for up to ``amount`` time units.

    The run is capped at the process's remaining burst. Every other process
    that has not finished yet waits for the same amount. Invalid arguments
    (no table, index out of range, non-positive amount, finished target)
    leave the table untouched.

    Returns the amount of time actually run.
    """
    if not procs:
        return 0
    if current is None or current < 0 or current >= len(procs):
        return 0
    if amount <= 0:
        return 0

    target = procs[current]
    if target.burst_left <= 0:
        return 0

    actual = min(amount, target.burst_left)
    target.burst_left -= actual

    for i, p in enumerate(procs):
        if i == current:
            continue
        if p.burst_left > 0:
            p.wait += actual

    logger.debug("ran P%d for %d (burst_left=%d)", target.pid, actual, target.burst_left)
    return actual


def fcfs_run(procs: Procs, timeline: Optional[List[ScheduledSlice]] = None) -> int:
    """
    First-Come First-Serve (non-preemptive) scheduling in table order.

    Returns the total time elapsed when all processes are done.
    """
    if not procs:
        return 0

    time = 0
    for i, p in enumerate(procs):
        if p.finished:
            continue

        ran = run_proc(procs, i, p.burst_left)  # run to completion
        if timeline is not None:
            timeline.append(ScheduledSlice(pid=p.pid, start_time=time, end_time=time + ran))
        time += ran

    logger.info("FCFS finished %d processes at t=%d", len(procs), time)
    return time


def rr_next(current: Optional[int], procs: Procs) -> Optional[int]:
    """
    Index of the next unfinished process after ``current``, in circular
    index order, or None when every process is done.

    A ``current`` outside the table (None, -1, ...) starts the search at 0.
    """
    if not procs:
        return None
    if all(p.finished for p in procs):
        return None

    n = len(procs)
    if current is None or current < 0 or current >= n:
        start = 0
    else:
        start = (current + 1) % n

    for offset in range(n):
        idx = (start + offset) % n
        if not procs[idx].finished:
            return idx

    # unreachable: at least one process is unfinished
    return None


def rr_run(procs: Procs, quantum: int, timeline: Optional[List[ScheduledSlice]] = None) -> int:
    """
    Round Robin scheduling with a fixed time quantum.

    Starting from P0, repeatedly pick the next process with ``rr_next`` and
    run it for ``min(quantum, burst_left)`` until all processes are done.
    A non-positive quantum or an empty table is a no-op returning 0.
    """
    if not procs or quantum <= 0:
        return 0

    time = 0
    prev: Optional[int] = None

    while True:
        nxt = rr_next(prev, procs)
        if nxt is None:
            break

        amount = min(quantum, procs[nxt].burst_left)
        ran = run_proc(procs, nxt, amount)
        if timeline is not None:
            timeline.append(ScheduledSlice(pid=procs[nxt].pid, start_time=time, end_time=time + ran))
        time += ran
        prev = nxt

    logger.info("RR(%d) finished %d processes at t=%d", quantum, len(procs), time)
    return time


def _run_fcfs(table: ProcessTable, quantum: Optional[int], timeline: List[ScheduledSlice]) -> int:
    return fcfs_run(table, timeline)


def _run_rr(table: ProcessTable, quantum: Optional[int], timeline: List[ScheduledSlice]) -> int:
    if quantum is None or quantum <= 0:
        raise ValueError("Round Robin requires a positive quantum")
    return rr_run(table, quantum, timeline)


ALGORITHMS: Dict[str, Callable[[ProcessTable, Optional[int], List[ScheduledSlice]], int]] = {
    "fcfs": _run_fcfs,
    "rr": _run_rr,
}

ALGORITHM_NAMES = {
    "fcfs": "FCFS",
    "rr": "Round Robin",
}


def run_algorithm(name: str, bursts: Sequence[int], quantum: Optional[int] = None) -> RunResult:
    """
    Build a process table from ``bursts`` and run the named policy on it.

    Raises ConstructionError when the table cannot be built and ValueError
    for an unknown algorithm or a missing Round Robin quantum.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}'")

    table = ProcessTable.create(bursts)
    timeline: List[ScheduledSlice] = []
    elapsed = ALGORITHMS[name](table, quantum, timeline)

    return RunResult(
        algorithm=ALGORITHM_NAMES[name],
        quantum=quantum if name == "rr" else None,
        elapsed=elapsed,
        table=table,
        timeline=timeline,
    )
