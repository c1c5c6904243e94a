"""
Aspect ratio plausibility scoring.
"""

import math

# Common photo/video aspect ratios (width:height), ordered by likelihood
# in contact sheets. Portrait orientations are listed separately.
COMMON_ASPECT_RATIOS = (
    16 / 9,   # widescreen video
    4 / 3,    # standard photo/video
    3 / 2,    # DSLR
    1.85,     # cinema flat
    2.39,     # cinema scope
    1.0,      # square
    9 / 16,   # portrait video
    3 / 4,    # portrait photo
    2 / 3,    # portrait DSLR
)

ASPECT_DECAY = 3.0


def ratio_distance(a: float, b: float) -> float:
    """Symmetric multiplicative distance between two ratios (0 = equal)."""
    return (a / b if a > b else b / a) - 1


def aspect_ratio_score(aspect_ratio: float) -> float:
    """
    Score how photo-like a width/height ratio is.

    Args:
        aspect_ratio: Width divided by height.

    Returns:
        Score in (0, 1], 1 for an exact match with a common ratio.
    """
    best_match = min(ratio_distance(aspect_ratio, common) for common in COMMON_ASPECT_RATIOS)
    return math.exp(-best_match * ASPECT_DECAY)
