"""config.py - Determinism guards, version asserts, constants, dtypes.

Enforces:
- Single-thread env (OMP/BLAS/MKL/NUMEXPR=1) so grid ops are reproducible
- Minimum library versions (Python 3.9+, numpy 1.22+, scipy 1.8+)
- Fixed dtypes and every puzzle parameter the solvers default to

Puzzle parameters live here instead of inside the solvers so that callers
(tests, the harness) can pass sample-sized values explicitly.
"""
from __future__ import annotations
import os
import re
import sys
import numpy as np


# ============================================================================
# Determinism env (must be set before heavy libs import)
# ============================================================================
def _set_determinism_env() -> None:
    """Set threading env vars for determinism."""
    os.environ.setdefault("OMP_NUM_THREADS", "1")
    os.environ.setdefault("OPENBLAS_NUM_THREADS", "1")
    os.environ.setdefault("MKL_NUM_THREADS", "1")
    os.environ.setdefault("NUMEXPR_NUM_THREADS", "1")


_set_determinism_env()


# ============================================================================
# Version requirements
# ============================================================================
REQUIRED_VERSIONS = {
    "python_major_minor": (3, 9),
    "numpy": (1, 22),
    "scipy": (1, 8),
}


def _major_minor(version: str) -> tuple:
    m = re.match(r"(\d+)\.(\d+)", version)
    if m is None:
        raise RuntimeError(f"Unparseable version string: {version!r}")
    return (int(m.group(1)), int(m.group(2)))


def _assert_versions() -> None:
    """Assert library versions meet the minimum requirements."""
    import scipy

    py_ver = sys.version_info
    req_py = REQUIRED_VERSIONS["python_major_minor"]
    if (py_ver.major, py_ver.minor) < req_py:
        raise RuntimeError(
            f"Python must be >= {req_py[0]}.{req_py[1]}, "
            f"got {py_ver.major}.{py_ver.minor}.{py_ver.micro}"
        )

    req_np = REQUIRED_VERSIONS["numpy"]
    if _major_minor(np.__version__) < req_np:
        raise RuntimeError(
            f"numpy must be >= {req_np[0]}.{req_np[1]}, got {np.__version__}"
        )

    req_sp = REQUIRED_VERSIONS["scipy"]
    if _major_minor(scipy.__version__) < req_sp:
        raise RuntimeError(
            f"scipy must be >= {req_sp[0]}.{req_sp[1]}, got {scipy.__version__}"
        )


_assert_versions()


# ============================================================================
# Dtypes
# ============================================================================
GRID_DTYPE = np.int8  # Occupancy / height grids
INT_DTYPE = np.int64  # Coordinates, counts, distances
BOOL_DTYPE = np.bool_  # Masks

# ============================================================================
# Day 7 - filesystem
# ============================================================================
DISK_TOTAL = 70_000_000
DISK_NEEDED = 30_000_000
SMALL_DIR_LIMIT = 100_000

# ============================================================================
# Day 12 - hill climbing
# ============================================================================
MAX_CLIMB = 1  # Largest allowed height increase per step

# ============================================================================
# Day 14 - falling sand
# ============================================================================
SAND_SOURCE = (500, 0)  # (x, y)
FLOOR_OFFSET = 2  # Floor sits this far below the lowest rock

# ============================================================================
# Day 16 - valves
# ============================================================================
VALVE_START = "AA"
VALVE_MINUTES = 30
VALVE_PAIR_MINUTES = 26
VALVE_OPEN_COST = 1

# ============================================================================
# Day 17 - falling rocks
# ============================================================================
CHAMBER_WIDTH = 7
ROCK_SPAWN_LEFT = 2  # Gap between left wall and a new rock
ROCK_SPAWN_GAP = 3  # Empty rows between tower top and a new rock
ROCK_PROFILE_DEPTH = 32  # Rows of the tower top included in a cycle signature
ROCK_COUNT = 2022
ROCK_COUNT_LONG = 1_000_000_000_000

# ============================================================================
# Day 19 - geode robots
# ============================================================================
GEODE_MINUTES = 24
GEODE_MINUTES_LONG = 32
GEODE_BLUEPRINTS_LONG = 3  # Part 2 only looks at the first few blueprints

# ============================================================================
# Day 23 - elf diffusion
# ============================================================================
ELF_ROUNDS = 10
ELF_MAX_ROUNDS = 1_000_000

# ============================================================================
# Harness
# ============================================================================
DEFAULT_INPUT_DIR = "inputs"
DEFAULT_RECEIPTS_DIR = "receipts"
DEFAULT_REPEAT = 1
DEFAULT_WORKERS = 1


# ============================================================================
# Dtype enforcement helpers
# ============================================================================
def enforce_dtype(arr: np.ndarray, kind: str) -> np.ndarray:
    """Enforce dtype for given array kind.

    Args:
        arr: Input array
        kind: One of 'grid', 'int', 'count', 'idx', 'mask'

    Returns:
        Array with correct dtype

    Raises:
        ValueError: If kind is unknown
    """
    if kind == "grid":
        return np.asarray(arr, dtype=GRID_DTYPE)
    elif kind in ("int", "count", "idx"):
        return np.asarray(arr, dtype=INT_DTYPE)
    elif kind == "mask":
        return np.asarray(arr, dtype=BOOL_DTYPE)
    else:
        raise ValueError(f"Unknown dtype kind: {kind}")
