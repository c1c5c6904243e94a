"""
Projection profile-based grid detector.

Sums pixel brightness along rows and columns to find continuous dark
gutters between photos. More robust for sheets with dark content than
thresholding individual pixels.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from .base import BaseDetector, Cell, GridResult, Interval, PixelBuffer

logger = logging.getLogger(__name__)

# Average brightness below this marks a gutter row/column
GAP_BRIGHTNESS_THRESHOLD = 30

# Content runs must cover more than this fraction of the axis
MIN_INTERVAL_FRACTION = 0.05

# Cells at or below this fraction of the median area are treated as labels
MIN_CELL_AREA_RATIO = 0.5

PROJECTION_CONFIDENCE = 0.95


def find_intervals(is_gap: Sequence[bool]) -> list[Interval]:
    """
    Find intervals of content (non-gap positions) along one axis.

    Args:
        is_gap: Gap flag per position.

    Returns:
        Maximal content runs longer than 5% of the axis length.
    """
    length = len(is_gap)
    intervals = []
    in_content = False
    start = 0

    for i, gap in enumerate(is_gap):
        if not gap and not in_content:
            in_content = True
            start = i
        elif gap and in_content:
            in_content = False
            intervals.append(Interval(start=start, end=i - 1, size=i - start))

    if in_content:
        intervals.append(Interval(start=start, end=length - 1, size=length - start))

    # Thin runs are usually lines or antialiasing noise
    return [iv for iv in intervals if iv.size > length * MIN_INTERVAL_FRACTION]


def median_area(cells: list[Cell]) -> int:
    """Upper median of the cell areas."""
    areas = sorted(cell.area for cell in cells)
    return areas[len(areas) // 2]


class ProjectionGapDetector(BaseDetector):
    """
    Detects grids from dark gutters in brightness projection profiles.

    The grid is the cross product of content intervals found on each axis.
    Cells much smaller than the median (caption strips under photos) are
    dropped, so the number of cells can be lower than rows * cols.
    """

    @property
    def name(self) -> str:
        return "projection"

    def detect(self, pixels: PixelBuffer) -> Optional[GridResult]:
        """
        Detect the grid from gutter positions.

        Args:
            pixels: Decoded image.

        Returns:
            GridResult with confidence 0.95, or None when either axis has
            no content intervals.
        """
        row_intervals, col_intervals = self.find_content_intervals(pixels)

        logger.debug(
            f"Gutter detection: {len(row_intervals)} rows, {len(col_intervals)} cols"
        )

        if not row_intervals or not col_intervals:
            return None

        cells = [
            Cell(x=col_iv.start, y=row_iv.start, width=col_iv.size, height=row_iv.size)
            for row_iv in row_intervals
            for col_iv in col_intervals
        ]

        # Label strips create extra intervals with small cells
        threshold = median_area(cells) * MIN_CELL_AREA_RATIO
        valid_cells = [cell for cell in cells if cell.area > threshold]

        logger.debug(f"Valid cells after label filtering: {len(valid_cells)} of {len(cells)}")

        return GridResult(
            rows=len(row_intervals),
            cols=len(col_intervals),
            cells=valid_cells,
            confidence=PROJECTION_CONFIDENCE,
            method=self.name,
        )

    def find_content_intervals(
        self,
        pixels: PixelBuffer,
    ) -> tuple[list[Interval], list[Interval]]:
        """
        Find content intervals on both axes.

        Args:
            pixels: Decoded image.

        Returns:
            Tuple of (row_intervals, col_intervals).
        """
        brightness = pixels.brightness_sums()

        col_sums = brightness.sum(axis=0, dtype=np.int64) / 3.0
        row_sums = brightness.sum(axis=1, dtype=np.int64) / 3.0

        col_gaps = (col_sums / pixels.height) < GAP_BRIGHTNESS_THRESHOLD
        row_gaps = (row_sums / pixels.width) < GAP_BRIGHTNESS_THRESHOLD

        return find_intervals(row_gaps.tolist()), find_intervals(col_gaps.tolist())
