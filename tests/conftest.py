"""Shared puzzle samples (the worked examples from each puzzle statement)."""
from __future__ import annotations
import pytest

FILESYSTEM_SAMPLE = """\
$ cd /
$ ls
dir a
14848514 b.txt
8504156 c.dat
dir d
$ cd a
$ ls
dir e
29116 f
2557 g
62596 h.lst
$ cd e
$ ls
584 i
$ cd ..
$ cd ..
$ cd d
$ ls
4060174 j
8033020 d.log
5626152 d.ext
7214296 k
"""

HILLS_SAMPLE = """\
Sabqponm
abcryxxl
accszExk
acctuvwj
abdefghi
"""

SAND_SAMPLE = """\
498,4 -> 498,6 -> 496,6
503,4 -> 502,4 -> 502,9 -> 494,9
"""

VALVES_SAMPLE = """\
Valve AA has flow rate=0; tunnels lead to valves DD, II, BB
Valve BB has flow rate=13; tunnels lead to valves CC, AA
Valve CC has flow rate=2; tunnels lead to valves DD, BB
Valve DD has flow rate=20; tunnels lead to valves CC, AA, EE
Valve EE has flow rate=3; tunnels lead to valves FF, DD
Valve FF has flow rate=0; tunnels lead to valves EE, GG
Valve GG has flow rate=0; tunnels lead to valves FF, HH
Valve HH has flow rate=22; tunnel leads to valve GG
Valve II has flow rate=0; tunnels lead to valves AA, JJ
Valve JJ has flow rate=21; tunnel leads to valve II
"""

ROCKS_SAMPLE = ">>><<><>><<<>><>>><<<>>><<<><<<>><>><<>>\n"

ROBOTS_SAMPLE = """\
Blueprint 1: Each ore robot costs 4 ore. Each clay robot costs 2 ore. Each obsidian robot costs 3 ore and 14 clay. Each geode robot costs 2 ore and 7 obsidian.
Blueprint 2: Each ore robot costs 2 ore. Each clay robot costs 3 ore. Each obsidian robot costs 3 ore and 8 clay. Each geode robot costs 3 ore and 12 obsidian.
"""

ELVES_SAMPLE = """\
....#..
..###.#
#...#.#
.#...##
#.###..
##.#.##
.#..#..
"""

BLIZZARDS_SAMPLE = """\
#.######
#>>.<^<#
#.<..<<#
#>v.><>#
#<^v^^>#
######.#
"""


@pytest.fixture
def filesystem_text():
    return FILESYSTEM_SAMPLE


@pytest.fixture
def hills_text():
    return HILLS_SAMPLE


@pytest.fixture
def sand_text():
    return SAND_SAMPLE


@pytest.fixture
def valves_text():
    return VALVES_SAMPLE


@pytest.fixture
def rocks_text():
    return ROCKS_SAMPLE


@pytest.fixture
def robots_text():
    return ROBOTS_SAMPLE


@pytest.fixture
def elves_text():
    return ELVES_SAMPLE


@pytest.fixture
def blizzards_text():
    return BLIZZARDS_SAMPLE
