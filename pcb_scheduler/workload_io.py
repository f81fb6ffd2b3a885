from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List

BURST_KEYS = ("burst", "burst_time")


def load_bursts(path: str | Path) -> List[int]:
    """
    Load burst lengths from a JSON or CSV file, in file order.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[int]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of bursts or process objects")

    return [_burst_from_entry(entry) for entry in raw]


def _load_csv(path: Path) -> List[int]:
    bursts: List[int] = []
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            bursts.append(_burst_from_entry(row))
    return bursts


def _burst_from_entry(entry) -> int:
    if isinstance(entry, dict):
        key = next((k for k in BURST_KEYS if k in entry), None)
        if key is None:
            raise ValueError(f"Invalid process entry: {entry!r}")
        value = entry[key]
    else:
        value = entry

    if isinstance(value, bool):
        raise ValueError(f"Invalid burst: {value!r}")
    try:
        burst = int(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ValueError(f"Invalid burst: {value!r}") from exc

    if isinstance(value, float) and value != burst:
        raise ValueError(f"Invalid burst: {value!r}")
    if burst < 0:
        raise ValueError(f"Burst must be non-negative: {burst}")
    return burst
