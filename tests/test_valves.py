"""Day 16 valves."""
from __future__ import annotations
import pytest

from aocsearch import valves
from aocsearch.errors import NoSolutionError, ParseError


def test_parse(valves_text):
    parsed = valves.parse(valves_text)
    assert len(parsed) == 10
    assert parsed[0] == valves.Valve("AA", 0, ("DD", "II", "BB"))
    assert parsed[7] == valves.Valve("HH", 22, ("GG",))


def test_table_rows_order_by_flow(valves_text):
    table = valves.build_table(valves.parse(valves_text), "AA")
    assert set(table) == {"AA", "BB", "CC", "DD", "EE", "HH", "JJ"}
    assert [t for t, _ in table["AA"]] == ["HH", "JJ", "DD", "BB", "EE", "CC"]
    assert dict(table["AA"]) == {"BB": 1, "CC": 2, "DD": 1, "EE": 2, "HH": 5, "JJ": 2}


def test_sample_part1(valves_text):
    stats = {}
    assert valves.solve_part1(valves.parse(valves_text), stats=stats) == 1651
    assert stats["best"] == 1651
    assert stats["expanded"] > 0
    assert stats["distances"]["AA"][0] == ["HH", 5]
    assert set(stats["distances"]) == {"AA", "BB", "CC", "DD", "EE", "HH", "JJ"}


@pytest.mark.parametrize("workers", [1, 4])
def test_sample_part2(valves_text, workers):
    assert valves.solve_part2(valves.parse(valves_text), workers=workers) == 1707


def test_more_minutes_never_hurt(valves_text):
    parsed = valves.parse(valves_text)
    bests = [valves.solve_part1(parsed, minutes=m) for m in (0, 5, 10, 20, 30)]
    assert bests[0] == 0
    assert bests == sorted(bests)


def test_start_valve_with_flow_opens_in_place():
    parsed = valves.parse(
        "Valve AA has flow rate=5; tunnels lead to valves BB\n"
        "Valve BB has flow rate=1; tunnels lead to valves AA\n"
    )
    # AA open at 1 (5 * 3), BB open at 3 (1 * 1)
    assert valves.solve_part1(parsed, minutes=4) == 16


def test_missing_start(valves_text):
    parsed = valves.parse(valves_text)
    assert valves.search_valves(parsed, 30, start="ZZ") is None
    with pytest.raises(NoSolutionError):
        valves.solve_part1(parsed, start="ZZ")
    with pytest.raises(NoSolutionError):
        valves.solve_part2(parsed, start="ZZ")


def test_parse_rejects_garbage():
    with pytest.raises(ParseError):
        valves.parse("Valve AA has flow rate=x; tunnels lead to valves BB\n")
