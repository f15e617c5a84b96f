import pytest

from falling_blocks.game.rules import LEVEL_SPEEDS_MS, ScoringRules, get_drop_interval, level_for_lines


@pytest.mark.parametrize("level", [-3, 0, 1])
def test_drop_interval_low_levels_use_first_entry(level):
    assert get_drop_interval(level) == 1000


def test_drop_interval_indexed():
    assert get_drop_interval(2) == 793
    assert get_drop_interval(10) == 64
    assert [get_drop_interval(lvl) for lvl in range(1, 11)] == list(LEVEL_SPEEDS_MS)


def test_drop_interval_high_levels_use_last_entry():
    assert get_drop_interval(11) == 64
    assert get_drop_interval(99) == 64


@pytest.mark.parametrize("lines, level", [(0, 1), (9, 1), (10, 2), (19, 2), (95, 10), (200, 10)])
def test_level_for_lines(lines, level):
    assert level_for_lines(lines) == level


def test_line_clear_scores_scale_with_level():
    rules = ScoringRules()
    assert [rules.score_for_lines(n) for n in range(5)] == [0, 100, 300, 500, 800]
    assert rules.score_for_lines(4, level=3) == 2400
    assert rules.hard_drop_bonus(7) == 14
