"""
Edge strength profiles for validating grid candidates.

Cell boundaries in a contact sheet usually show up as columns (or rows)
where neighbouring pixels differ sharply. Each profile collapses the image
to one value per column or row; a candidate grid scores well when its
division points line up with peaks in those profiles.
"""

import math

import numpy as np

from .base import PixelBuffer, round_half_up

MAX_EDGE_RATIO = 3.0
MIN_SEARCH_WINDOW = 3
SEARCH_WINDOW_FRACTION = 0.03


def vertical_edge_profile(pixels: PixelBuffer) -> np.ndarray:
    """
    Calculate vertical edge strength profile (one value per column).

    Args:
        pixels: Decoded image.

    Returns:
        1D array of length width. The first and last columns are zero.
    """
    profile = np.zeros(pixels.width, dtype=np.float64)
    if pixels.width < 3:
        return profile

    totals = np.zeros(pixels.width - 2, dtype=np.int64)
    for index in range(3):
        channel = pixels.channel(index)
        totals += np.abs(channel[:, 2:] - channel[:, :-2]).sum(axis=0, dtype=np.int64)

    profile[1:-1] = totals / 3.0 / pixels.height
    return profile


def horizontal_edge_profile(pixels: PixelBuffer) -> np.ndarray:
    """
    Calculate horizontal edge strength profile (one value per row).

    Args:
        pixels: Decoded image.

    Returns:
        1D array of length height. The first and last rows are zero.
    """
    profile = np.zeros(pixels.height, dtype=np.float64)
    if pixels.height < 3:
        return profile

    totals = np.zeros(pixels.height - 2, dtype=np.int64)
    for index in range(3):
        channel = pixels.channel(index)
        totals += np.abs(channel[2:, :] - channel[:-2, :]).sum(axis=1, dtype=np.int64)

    profile[1:-1] = totals / 3.0 / pixels.width
    return profile


def _division_ratios(
    profile: np.ndarray,
    divisions: int,
    length: int,
    search_window: int,
) -> list[float]:
    """Capped peak-to-baseline ratios at each internal division of one axis."""
    baseline = float(profile.mean()) if len(profile) else 0.0
    cell_size = length / divisions

    ratios = []
    for i in range(1, divisions):
        expected = round_half_up(cell_size * i)
        lo = max(expected - search_window, 1)
        hi = min(expected + search_window, length - 2)

        max_strength = float(profile[lo:hi + 1].max()) if lo <= hi else 0.0
        ratio = max_strength / baseline if baseline > 0 else 1.0
        ratios.append(min(ratio, MAX_EDGE_RATIO))

    return ratios


def score_grid_by_edges(
    rows: int,
    cols: int,
    width: int,
    height: int,
    vertical_profile: np.ndarray,
    horizontal_profile: np.ndarray,
) -> float:
    """
    Score a grid configuration by how well it aligns with detected edges.

    Args:
        rows: Number of rows.
        cols: Number of columns.
        width: Image width.
        height: Image height.
        vertical_profile: Per-column edge strength.
        horizontal_profile: Per-row edge strength.

    Returns:
        Score in [0, 1]: 0 when divisions sit on baseline edge strength,
        1 when they average three times the baseline or more.
    """
    search_window = max(
        MIN_SEARCH_WINDOW,
        math.floor(min(width / cols, height / rows) * SEARCH_WINDOW_FRACTION),
    )

    ratios = []
    if cols > 1:
        ratios += _division_ratios(vertical_profile, cols, width, search_window)
    if rows > 1:
        ratios += _division_ratios(horizontal_profile, rows, height, search_window)

    if not ratios:
        return 0.0

    avg_ratio = sum(ratios) / len(ratios)
    return min(max((avg_ratio - 1) / 2, 0.0), 1.0)


class EdgeProfileAnalyzer:
    """Computes both edge profiles once and scores candidates against them."""

    def __init__(self, pixels: PixelBuffer):
        """
        Initialize the analyzer.

        Args:
            pixels: Decoded image to profile.
        """
        self.width = pixels.width
        self.height = pixels.height
        self.vertical = vertical_edge_profile(pixels)
        self.horizontal = horizontal_edge_profile(pixels)

    def score(self, rows: int, cols: int) -> float:
        """Edge alignment score for a rows x cols grid."""
        return score_grid_by_edges(
            rows,
            cols,
            self.width,
            self.height,
            self.vertical,
            self.horizontal,
        )
