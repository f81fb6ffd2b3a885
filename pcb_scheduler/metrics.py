from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .models import ProcessControlBlock, RunResult, ScheduledSlice


def total_wait(procs: Optional[Sequence[ProcessControlBlock]]) -> int:
    if not procs:
        return 0
    return sum(p.wait for p in procs)


def average_wait(procs: Optional[Sequence[ProcessControlBlock]]) -> float:
    """
    Mean accumulated wait across every record in the table.
    """
    if not procs:
        return 0.0
    return total_wait(procs) / len(procs)


def completion_times(timeline: List[ScheduledSlice]) -> Dict[int, int]:
    """
    Time at which each pid's last slice ended.

    Processes that never ran (zero burst) are absent from the result.
    """
    done: Dict[int, int] = {}
    for sl in timeline:
        done[sl.pid] = max(done.get(sl.pid, 0), sl.end_time)
    return done


def turnaround_times(result: RunResult) -> Dict[int, int]:
    """
    Completion time per pid; all processes arrive at t=0, so this is also
    the turnaround time. Zero-burst processes turn around at 0.
    """
    done = completion_times(result.timeline)
    return {p.pid: done.get(p.pid, 0) for p in result.table}


def summarize(result: RunResult) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    n = len(result.table)
    if n == 0:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "elapsed": 0, "throughput": 0.0}

    turnaround = turnaround_times(result)
    return {
        "avg_waiting": average_wait(result.table),
        "avg_turnaround": sum(turnaround.values()) / n,
        "elapsed": result.elapsed,
        "throughput": n / result.elapsed if result.elapsed > 0 else 0.0,
    }
