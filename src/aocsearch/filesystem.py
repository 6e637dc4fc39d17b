"""filesystem.py - Day 7: directory sizes from a shell transcript.

The directory tree is an append-only arena: every directory lives in one
list and points at its parent and children by index. Children are always
appended after their parent, so one reverse sweep over the arena rolls file
sizes up into every ancestor.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from . import config
from .errors import NoSolutionError, ParseError

ROOT = 0


@dataclass
class Directory:
    name: str
    parent: Optional[int]
    children: Dict[str, int] = field(default_factory=dict)
    files: Dict[str, int] = field(default_factory=dict)


class Filesystem:
    """Arena of directories; index 0 is the root."""

    def __init__(self):
        self.dirs: List[Directory] = [Directory("/", None)]

    def mkdir(self, parent: int, name: str) -> int:
        existing = self.dirs[parent].children.get(name)
        if existing is not None:
            return existing
        idx = len(self.dirs)
        self.dirs.append(Directory(name, parent))
        self.dirs[parent].children[name] = idx
        return idx

    def add_file(self, parent: int, name: str, size: int) -> None:
        self.dirs[parent].files[name] = size

    def path(self, idx: int) -> str:
        parts = []
        while idx != ROOT:
            parts.append(self.dirs[idx].name)
            idx = self.dirs[idx].parent
        return "/" + "/".join(reversed(parts))

    def sizes(self) -> np.ndarray:
        """Total size per directory (files of all descendants included)."""
        totals = config.enforce_dtype([sum(d.files.values()) for d in self.dirs], "int")
        for idx in range(len(self.dirs) - 1, ROOT, -1):
            totals[self.dirs[idx].parent] += totals[idx]
        return totals


def parse(text: str) -> Filesystem:
    """Replay `cd` / `ls` commands into a Filesystem.

    Raises:
        ParseError: On `cd ..` at the root, `cd` into an unlisted directory,
            or an unreadable listing line
    """
    fs = Filesystem()
    cwd = ROOT
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line == "$ ls":
            continue
        if line == "$ cd /":
            cwd = ROOT
        elif line == "$ cd ..":
            parent = fs.dirs[cwd].parent
            if parent is None:
                raise ParseError(f"Line {lineno}: cannot move above /")
            cwd = parent
        elif line.startswith("$ cd "):
            name = line[len("$ cd "):]
            child = fs.dirs[cwd].children.get(name)
            if child is None:
                raise ParseError(f"Line {lineno}: no directory {name!r} in {fs.path(cwd)}")
            cwd = child
        elif line.startswith("$"):
            raise ParseError(f"Line {lineno}: unknown command {line!r}")
        elif line.startswith("dir "):
            fs.mkdir(cwd, line[len("dir "):])
        else:
            size, _, name = line.partition(" ")
            if not size.isdigit() or not name:
                raise ParseError(f"Line {lineno}: not a file entry: {line!r}")
            fs.add_file(cwd, name, int(size))
    return fs


def solve_part1(fs: Filesystem, limit: int = config.SMALL_DIR_LIMIT, stats: Optional[Dict] = None) -> int:
    sizes = fs.sizes()
    if stats is not None:
        stats["directories"] = len(sizes)
    return int(sizes[sizes <= limit].sum())


def solve_part2(
    fs: Filesystem,
    total: int = config.DISK_TOTAL,
    needed: int = config.DISK_NEEDED,
    stats: Optional[Dict] = None,
) -> int:
    sizes = fs.sizes()
    to_free = needed - (total - int(sizes[ROOT]))
    candidates = sizes[sizes >= to_free]
    if stats is not None:
        stats.update({"directories": len(sizes), "to_free": to_free})
    if len(candidates) == 0:
        raise NoSolutionError(f"No directory frees {to_free} bytes")
    return int(candidates.min())
