from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple, overload

from .errors import ConstructionError


@dataclass
class ProcessControlBlock:
    pid: int
    burst_left: int
    wait: int = 0

    @property
    def finished(self) -> bool:
        return self.burst_left <= 0


class ProcessTable(Sequence[ProcessControlBlock]):
    """
    Fixed-length table of process control blocks, indexed by pid.

    The records themselves are mutated in place by the scheduling engine;
    the table never grows or shrinks after construction.
    """

    def __init__(self, procs: List[ProcessControlBlock], bursts: Sequence[int]):
        self._procs = procs
        self.bursts: Tuple[int, ...] = tuple(bursts)

    @classmethod
    def create(cls, bursts: Optional[Sequence[int]]) -> "ProcessTable":
        """
        Build a table with one record per burst, pid = position, wait = 0.
        """
        if bursts is None or isinstance(bursts, (str, bytes)):
            raise ConstructionError("No burst sequence supplied")

        try:
            values = list(bursts)
        except TypeError as exc:
            raise ConstructionError(f"Bursts must be a sequence, got {bursts!r}") from exc

        if not values:
            raise ConstructionError("At least one burst is required")

        for i, burst in enumerate(values):
            if isinstance(burst, bool) or not isinstance(burst, int):
                raise ConstructionError(f"Burst P{i} is not an integer: {burst!r}")
            if burst < 0:
                raise ConstructionError(f"Burst P{i} is negative: {burst}")

        procs = [ProcessControlBlock(pid=i, burst_left=burst) for i, burst in enumerate(values)]
        return cls(procs, values)

    @overload
    def __getitem__(self, index: int) -> ProcessControlBlock: ...

    @overload
    def __getitem__(self, index: slice) -> List[ProcessControlBlock]: ...

    def __getitem__(self, index):
        return self._procs[index]

    def __len__(self) -> int:
        return len(self._procs)

    def __iter__(self) -> Iterator[ProcessControlBlock]:
        return iter(self._procs)

    def __repr__(self) -> str:
        return f"ProcessTable({self._procs!r})"

    def all_finished(self) -> bool:
        return all(p.finished for p in self._procs)

    def snapshot(self) -> List[Tuple[int, int, int]]:
        """
        Return ``(pid, burst_left, wait)`` for every record, in pid order.
        """
        return [(p.pid, p.burst_left, p.wait) for p in self._procs]

    def dump(self) -> str:
        return "\n".join(f"PID {p.pid}: burst_left={p.burst_left} wait={p.wait}" for p in self._procs)


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int


@dataclass
class RunResult:
    algorithm: str
    quantum: Optional[int]
    elapsed: int
    table: ProcessTable
    timeline: List[ScheduledSlice] = field(default_factory=list)
