import math

import pytest

from app.grid.aspect import COMMON_ASPECT_RATIOS, aspect_ratio_score
from app.grid.candidates import get_grid_candidates, score_candidate


@pytest.mark.parametrize("ratio", COMMON_ASPECT_RATIOS)
def test_canonical_ratios_score_one(ratio):
    assert aspect_ratio_score(ratio) == pytest.approx(1.0)


def test_ten_percent_mismatch_decays_with_constant_three():
    assert aspect_ratio_score(1.1) == pytest.approx(math.exp(-0.3))


def test_score_is_not_assumed_symmetric_under_reciprocal():
    assert aspect_ratio_score(2.39) == pytest.approx(1.0)
    assert aspect_ratio_score(1 / 2.39) < 0.5


def test_score_decreases_with_distance():
    assert aspect_ratio_score(1.0) > aspect_ratio_score(1.05) > aspect_ratio_score(1.15)


@pytest.mark.parametrize("width,height", [(1, 1), (360, 180), (1600, 900), (300, 1200), (7, 13)])
def test_generates_35_sorted_candidates(width, height):
    candidates = get_grid_candidates(width, height)

    assert len(candidates) == 35
    assert all(1 <= c.rows <= 6 and 1 <= c.cols <= 6 for c in candidates)
    assert not any(c.rows == 1 and c.cols == 1 for c in candidates)
    scores = [c.score for c in candidates]
    assert scores == sorted(scores, reverse=True)


def test_candidate_score_components():
    candidate = score_candidate(1600, 900, rows=2, cols=2)

    assert candidate.cell_width == 800
    assert candidate.cell_height == 450
    assert candidate.cell_aspect_ratio == pytest.approx(16 / 9)
    expected = 0.55 * 1.0 + 0.25 * math.exp(-2 * (16 / 9 - 1)) + 0.10 * 1.0 + 0.10 * 1.0
    assert candidate.score == pytest.approx(expected)


def test_large_grids_are_penalized():
    candidate = score_candidate(600, 600, rows=6, cols=6)

    # square cells, matching layout, full symmetry; only cell count is penalized
    expected = 0.55 + 0.25 + 0.10 * math.exp(-0.15 * 30) + 0.10
    assert candidate.score == pytest.approx(expected)


def test_rejects_empty_image():
    with pytest.raises(ValueError):
        get_grid_candidates(0, 100)
