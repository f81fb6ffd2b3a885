from __future__ import annotations


class ConstructionError(ValueError):
    """
    Raised when a process table cannot be built from the supplied bursts.
    """


class ArgumentsError(Exception):
    """
    Raised by the command-line parser instead of exiting on bad arguments.
    """
