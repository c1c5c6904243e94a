"""
Base classes and value types for grid detection.
"""

import base64
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

import numpy as np


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


@dataclass
class Cell:
    """A rectangular sub-region of the source image."""

    x: int
    """X offset from original image origin."""

    y: int
    """Y offset from original image origin."""

    width: int
    """Width of the cell."""

    height: int
    """Height of the cell."""

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        """Return (x, y, width, height) bounds in original image."""
        return (self.x, self.y, self.width, self.height)


@dataclass
class GridResult:
    """Result of detecting a grid in an image."""

    rows: int
    """Number of rows in the grid."""

    cols: int
    """Number of columns in the grid."""

    cells: list[Cell]
    """Cells in row-major order."""

    confidence: float
    """Ranking signal for the detection, not a calibrated probability."""

    method: str = "dimensions"
    """Method that produced the grid (projection, geometric, dimensions)."""

    @property
    def num_cells(self) -> int:
        return len(self.cells)


@dataclass
class GridCandidate:
    """A hypothesized (rows, cols) configuration with its geometric score."""

    rows: int
    cols: int
    cell_width: float
    cell_height: float
    cell_aspect_ratio: float
    score: float


@dataclass
class Interval:
    """A maximal run of content positions along one axis."""

    start: int
    end: int
    size: int


@dataclass
class PixelBuffer:
    """Decoded image as a row-major RGBA array."""

    width: int
    """Image width in pixels."""

    height: int
    """Image height in pixels."""

    data: np.ndarray
    """uint8 array of shape (height, width, 4). Alpha is ignored."""

    @classmethod
    def from_array(cls, data: np.ndarray) -> "PixelBuffer":
        height, width = data.shape[:2]
        return cls(width=width, height=height, data=data)

    def channel(self, index: int) -> np.ndarray:
        """Return one colour channel widened to int16 for signed differences."""
        return self.data[:, :, index].astype(np.int16)

    def brightness_sums(self) -> np.ndarray:
        """Per-pixel R+G+B as uint16 (at most 765)."""
        return self.data[:, :, :3].sum(axis=2, dtype=np.uint16)


@dataclass
class CellImage:
    """One cropped cell encoded as an independent image."""

    index: int
    """Position in the output sequence."""

    row: int
    """Row position in the grid (0-indexed)."""

    col: int
    """Column position in the grid (0-indexed)."""

    cell: Cell
    """Source rectangle in the original image."""

    payload: bytes
    """Encoded image bytes."""

    image_format: str = "PNG"

    @property
    def mime_type(self) -> str:
        return f"image/{self.image_format.lower()}"

    @property
    def filename(self) -> str:
        return f"split-{self.row + 1}-{self.col + 1}.{self.image_format.lower()}"

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.payload).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


@dataclass
class SplitOutput:
    """Chosen grid and the cropped cell images in row-major order."""

    grid: GridResult
    images: list[CellImage] = field(default_factory=list)

    @property
    def num_images(self) -> int:
        return len(self.images)


@dataclass
class SplitConfig:
    """Configuration for grid splitting."""

    output_format: str = "PNG"
    """Lossless format used to encode cropped cells."""

    min_cells: int = 2
    """Gap detection results with fewer cells fall back to geometric detection."""


class BaseDetector(ABC):
    """Abstract base class for grid detectors."""

    def __init__(self, config: Optional[SplitConfig] = None):
        """Initialize detector with configuration."""
        self.config = config or SplitConfig()

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of this detection method."""
        pass

    @abstractmethod
    def detect(self, pixels: PixelBuffer) -> Optional[GridResult]:
        """
        Detect the grid in a decoded image.

        Args:
            pixels: Decoded RGBA pixel buffer.

        Returns:
            GridResult, or None when this detector cannot find a grid.
        """
        pass
