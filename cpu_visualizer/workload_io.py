from __future__ import annotations

import csv
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import List

from .models import Process, SimulationResult
from .process_set import validate_processes

logger = logging.getLogger(__name__)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a validated list of Process
    objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    processes = validate_processes(processes)
    logger.info("Loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON workload {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _process_from_mapping(mapping) -> Process:
    try:
        pid = str(mapping["pid"]).strip()
        arrival_time = int(mapping["arrival_time"])
        burst_time = int(mapping["burst_time"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid process entry: {mapping!r}") from exc

    priority_val = mapping.get("priority")
    try:
        priority = int(priority_val) if priority_val not in (None, "") else None
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid priority in process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )


def result_to_dict(result: SimulationResult) -> dict:
    """
    Plain-data view of a run, suitable for JSON.
    """
    return {
        "algorithm": result.algorithm,
        "quantum": result.quantum,
        "makespan": result.makespan,
        "segments": [asdict(seg) for seg in result.segments],
        "ticks": list(result.ticks),
        "metrics": asdict(result.metrics),
        "processes": [asdict(p) for p in result.processes],
        "system": asdict(result.system) if result.system else None,
    }


def dump_result(result: SimulationResult, path: str | Path) -> Path:
    path = Path(path)
    with path.open("w", encoding="utf-8") as f:
        json.dump(result_to_dict(result), f, indent=2)
    logger.info("Wrote %s result to %s", result.algorithm, path)
    return path
