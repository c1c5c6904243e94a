"""
Enumeration and ranking of grid hypotheses by geometric plausibility.
"""

import math

from .aspect import aspect_ratio_score, ratio_distance
from .base import GridCandidate

MAX_GRID_SIZE = 6

# Weights of the combined geometric score
CELL_ASPECT_WEIGHT = 0.55
LAYOUT_WEIGHT = 0.25
CELL_COUNT_WEIGHT = 0.10
SYMMETRY_WEIGHT = 0.10

LAYOUT_DECAY = 2.0
CELL_COUNT_DECAY = 0.15
PREFERRED_MAX_CELLS = 6


def score_candidate(width: int, height: int, rows: int, cols: int) -> GridCandidate:
    """
    Score a single (rows, cols) hypothesis for an image size.

    Args:
        width: Image width.
        height: Image height.
        rows: Number of rows.
        cols: Number of columns.

    Returns:
        GridCandidate carrying the combined geometric score.
    """
    cell_width = width / cols
    cell_height = height / rows
    cell_aspect_ratio = cell_width / cell_height

    cell_ar_score = aspect_ratio_score(cell_aspect_ratio)

    # A 3x2 grid in a 3:2 image is more likely than a 2x3 grid
    layout_score = math.exp(-ratio_distance(width / height, cols / rows) * LAYOUT_DECAY)

    cell_count = rows * cols
    if cell_count <= PREFERRED_MAX_CELLS:
        cell_count_score = 1.0
    else:
        cell_count_score = math.exp(-(cell_count - PREFERRED_MAX_CELLS) * CELL_COUNT_DECAY)

    grid_symmetry = 1 - abs(rows - cols) / max(rows, cols)

    score = (
        cell_ar_score * CELL_ASPECT_WEIGHT
        + layout_score * LAYOUT_WEIGHT
        + cell_count_score * CELL_COUNT_WEIGHT
        + grid_symmetry * SYMMETRY_WEIGHT
    )

    return GridCandidate(
        rows=rows,
        cols=cols,
        cell_width=cell_width,
        cell_height=cell_height,
        cell_aspect_ratio=cell_aspect_ratio,
        score=score,
    )


def get_grid_candidates(width: int, height: int) -> list[GridCandidate]:
    """
    Enumerate grids from 1x2 to 6x6 ranked by geometric plausibility.

    Args:
        width: Image width.
        height: Image height.

    Returns:
        Candidates sorted by descending score. Ties keep generation order.

    Raises:
        ValueError: If either dimension is not positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")

    candidates = []
    for rows in range(1, MAX_GRID_SIZE + 1):
        for cols in range(1, MAX_GRID_SIZE + 1):
            if rows == 1 and cols == 1:
                continue
            candidates.append(score_candidate(width, height, rows, cols))

    return sorted(candidates, key=lambda c: c.score, reverse=True)
