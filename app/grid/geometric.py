"""
Geometric grid detector.

This is the fallback detector for sheets without dark gutters. It assumes
the grid is uniform, ranks every configuration up to 6x6 by how photo-like
its cells are, and uses edge alignment as a tiebreaker.
"""

import logging

from .base import BaseDetector, GridResult, PixelBuffer
from .candidates import get_grid_candidates
from .edges import EdgeProfileAnalyzer
from .errors import NoGridDetected
from .partition import create_grid_for_dimensions

logger = logging.getLogger(__name__)

# Only the best geometric candidates are checked against edges
EDGE_CANDIDATE_LIMIT = 8

GEOMETRIC_WEIGHT = 0.8
EDGE_WEIGHT = 0.2


class GeometricDetector(BaseDetector):
    """
    Detects grids by geometric plausibility validated with edge strength.

    Edges get the smaller weight because gapless grids may have none and
    internal details (text labels, horizons) can produce misleading ones.
    """

    @property
    def name(self) -> str:
        return "geometric"

    def detect(self, pixels: PixelBuffer) -> GridResult:
        """
        Pick the best regular grid for the image.

        Args:
            pixels: Decoded image.

        Returns:
            Regular GridResult whose confidence is the combined score.

        Raises:
            NoGridDetected: If no candidate fits the image.
        """
        # Grids with more rows or columns than pixels would have empty cells
        candidates = [
            c for c in get_grid_candidates(pixels.width, pixels.height)
            if c.rows <= pixels.height and c.cols <= pixels.width
        ]
        if not candidates:
            raise NoGridDetected(f"No grid candidates for a {pixels.width}x{pixels.height} image")

        edges = EdgeProfileAnalyzer(pixels)

        best_candidate = candidates[0]
        best_combined_score = float("-inf")

        for candidate in candidates[:EDGE_CANDIDATE_LIMIT]:
            edge_score = edges.score(candidate.rows, candidate.cols)
            combined_score = candidate.score * GEOMETRIC_WEIGHT + edge_score * EDGE_WEIGHT

            logger.debug(
                f"Candidate {candidate.rows}x{candidate.cols}: "
                f"geometric={candidate.score:.3f}, edge={edge_score:.3f}, "
                f"combined={combined_score:.3f}"
            )

            if combined_score > best_combined_score:
                best_combined_score = combined_score
                best_candidate = candidate

        logger.info(
            f"Best candidate: {best_candidate.rows}x{best_candidate.cols}, "
            f"cell AR: {best_candidate.cell_aspect_ratio:.2f}, "
            f"score: {best_candidate.score:.3f}"
        )

        result = create_grid_for_dimensions(
            pixels.width,
            pixels.height,
            best_candidate.rows,
            best_candidate.cols,
            method=self.name,
        )
        result.confidence = best_combined_score
        return result
