"""receipts.py - Always-on receipts per solved day.

Receipts are JSON files written to receipts/dayNN.json. Each receipt records
the input fingerprint, the answers, timings and whatever engine counters the
solvers reported, so two runs can be compared byte for byte.
"""
from __future__ import annotations
import json
import os
import sys
from pathlib import Path
from typing import Dict, Any
from . import config


def _dump(payload: Dict[str, Any], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="\n") as f:
        json.dump(
            payload,
            f,
            sort_keys=True,
            ensure_ascii=False,
            indent=2,
        )
        f.write("\n")  # Trailing newline for Unix convention
    return path


def write_day_receipt(
    day: int, payload: Dict[str, Any], out_dir: str = config.DEFAULT_RECEIPTS_DIR
) -> Path:
    """Write receipt for one day.

    Args:
        day: Puzzle day (1..25)
        payload: JSON-serializable receipt data
        out_dir: Output directory (default: 'receipts')

    Returns:
        Path to written receipt file

    Notes:
        - Creates output directory if needed
        - Writes with sorted keys, Unix newlines
        - Overwrites existing receipt for the same day
    """
    return _dump(payload, Path(out_dir) / f"day{day:02d}.json")


def make_env_payload() -> Dict[str, Any]:
    """Create environment payload recorded alongside every run.

    Returns:
        Dict with runtime versions, dtypes and threading env vars
    """
    import numpy
    import scipy

    return {
        "runtime": {
            "python": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
            "numpy": numpy.__version__,
            "scipy": scipy.__version__,
        },
        "dtypes": {
            "GRID_DTYPE": str(numpy.dtype(config.GRID_DTYPE)),
            "INT_DTYPE": str(numpy.dtype(config.INT_DTYPE)),
            "BOOL_DTYPE": str(numpy.dtype(config.BOOL_DTYPE)),
        },
        "env": {
            "OMP_NUM_THREADS": os.getenv("OMP_NUM_THREADS"),
            "OPENBLAS_NUM_THREADS": os.getenv("OPENBLAS_NUM_THREADS"),
            "MKL_NUM_THREADS": os.getenv("MKL_NUM_THREADS"),
            "NUMEXPR_NUM_THREADS": os.getenv("NUMEXPR_NUM_THREADS"),
        },
    }


def write_run_progress(progress: Dict[str, Any], out_dir: str = config.DEFAULT_RECEIPTS_DIR) -> Path:
    """Write run-level summary JSON.

    Args:
        progress: Summary dict with days_total, days_ok, failures
        out_dir: Output directory (default: 'receipts')

    Returns:
        Path to written run.json
    """
    return _dump(progress, Path(out_dir) / "run.json")
