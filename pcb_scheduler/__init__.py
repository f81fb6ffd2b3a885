"""
PCB scheduler package.

Simulates First-Come First-Served and Round Robin scheduling over a table of
process control blocks, with a small command-line front end.
"""

from .engine import fcfs_run, rr_next, rr_run, run_algorithm, run_proc
from .errors import ConstructionError
from .models import ProcessControlBlock, ProcessTable

__all__ = [
    "ConstructionError",
    "ProcessControlBlock",
    "ProcessTable",
    "fcfs_run",
    "rr_next",
    "rr_run",
    "run_algorithm",
    "run_proc",
    "cli",
]
