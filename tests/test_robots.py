"""Day 19 geode robots."""
from __future__ import annotations
import pytest

from aocsearch import robots
from aocsearch.errors import ParseError
from aocsearch.types import Budget, SearchState


@pytest.fixture
def blueprints(robots_text):
    return robots.parse(robots_text)


def test_parse(blueprints):
    assert [bp.number for bp in blueprints] == [1, 2]
    assert blueprints[0].costs == ((4, 0, 0), (2, 0, 0), (3, 14, 0), (2, 0, 7))
    assert blueprints[0].max_spend == (4, 14, 7)


def test_parse_wrapped_blueprint(robots_text):
    wrapped = robots_text.replace(". Each", ".\n  Each")
    assert robots.parse(wrapped) == robots.parse(robots_text)


def test_parse_rejects_garbage():
    with pytest.raises(ParseError):
        robots.parse("Blueprint 1: nothing useful\n")


def test_blueprint_quality(blueprints):
    assert robots.max_geodes(blueprints[0], 24).best == 9
    assert robots.max_geodes(blueprints[1], 24).best == 12


def test_sample_part1(blueprints):
    stats = {}
    assert robots.solve_part1(blueprints, stats=stats) == 33
    assert set(stats) == {"blueprint_1", "blueprint_2"}


def test_short_horizon(blueprints):
    # No geode robot can be finished in time
    assert robots.max_geodes(blueprints[0], 10).best == 0
    assert robots.solve_part2(blueprints, minutes=10) == 0


def test_bound_never_underestimates(blueprints):
    bp = blueprints[0]
    budget = Budget(24)
    bound = robots.make_bound(bp, budget)
    start = SearchState(((1, 0, 0), (0, 0, 0)))
    assert bound(start) >= robots.max_geodes(bp, 24).best
