"""
Contact sheet grid detection and splitting.

This module finds the rows, columns and cell rectangles of a grid of photos
in a single image, using gutter projection profiles with a geometric
fallback, and crops each cell into its own image.
"""

from .base import (
    BaseDetector,
    Cell,
    CellImage,
    GridCandidate,
    GridResult,
    Interval,
    PixelBuffer,
    SplitConfig,
    SplitOutput,
)
from .aspect import COMMON_ASPECT_RATIOS, aspect_ratio_score
from .candidates import get_grid_candidates
from .edges import EdgeProfileAnalyzer, score_grid_by_edges
from .errors import ContextUnavailable, DecodeFailure, GridSplitterError, NoGridDetected
from .geometric import GeometricDetector
from .imaging import load_pixels
from .partition import create_grid_for_dimensions
from .projection import ProjectionGapDetector, find_intervals
from .splitter import GridSplitter, create_splitter

__all__ = [
    "BaseDetector",
    "Cell",
    "CellImage",
    "GridCandidate",
    "GridResult",
    "Interval",
    "PixelBuffer",
    "SplitConfig",
    "SplitOutput",
    "COMMON_ASPECT_RATIOS",
    "aspect_ratio_score",
    "get_grid_candidates",
    "EdgeProfileAnalyzer",
    "score_grid_by_edges",
    "GridSplitterError",
    "DecodeFailure",
    "ContextUnavailable",
    "NoGridDetected",
    "GeometricDetector",
    "load_pixels",
    "create_grid_for_dimensions",
    "ProjectionGapDetector",
    "find_intervals",
    "GridSplitter",
    "create_splitter",
]
