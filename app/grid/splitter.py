"""
Grid splitter that detects a contact sheet grid and crops its cells.

Tries gutter (projection profile) detection first and falls back to the
geometric detector when it finds no usable grid.
"""

import logging
from typing import Optional

from .base import CellImage, GridResult, PixelBuffer, SplitConfig, SplitOutput
from .errors import NoGridDetected
from .geometric import GeometricDetector
from .imaging import ImageSource, encode_image, load_pixels
from .partition import create_grid_for_dimensions
from .projection import ProjectionGapDetector

logger = logging.getLogger(__name__)


class GridSplitter:
    """
    Splits contact sheets into their component images.

    Detection priority:
    1. Projection profile - find dark gutters between photos
    2. Geometric - regular grid with photo-like cells, validated by edges
    """

    def __init__(self, config: Optional[SplitConfig] = None):
        """
        Initialize the grid splitter.

        Args:
            config: Shared configuration for detectors and cropping.
        """
        self.config = config or SplitConfig()
        self.projection = ProjectionGapDetector(self.config)
        self.geometric = GeometricDetector(self.config)

    def detect(self, image: ImageSource) -> GridResult:
        """
        Detect the grid of a contact sheet.

        Args:
            image: Image source or decoded pixel buffer.

        Returns:
            GridResult from gutter detection, or from the geometric
            detector when gutters yield fewer than min_cells cells.
        """
        pixels = load_pixels(image)

        logger.info("Attempting gutter detection")
        grid = self.projection.detect(pixels)

        if grid is None or grid.num_cells < self.config.min_cells:
            logger.info("Gutter detection failed, falling back to geometric detection")
            grid = self.geometric.detect(pixels)

        logger.info(
            f"Detected {grid.rows}x{grid.cols} grid with {grid.num_cells} cells "
            f"via {grid.method} (confidence {grid.confidence:.3f})"
        )
        return grid

    def detect_and_split(self, image: ImageSource) -> SplitOutput:
        """
        Detect the grid and crop every cell.

        Args:
            image: Image source or decoded pixel buffer.

        Returns:
            SplitOutput with one image per cell in row-major order.

        Raises:
            NoGridDetected: If no cells were found.
        """
        pixels = load_pixels(image)
        grid = self.detect(pixels)
        return self._split(pixels, grid)

    def split_with_dimensions(self, image: ImageSource, rows: int, cols: int) -> SplitOutput:
        """
        Split using caller-specified dimensions, bypassing detection.

        Args:
            image: Image source or decoded pixel buffer.
            rows: Number of rows (>= 1).
            cols: Number of columns (>= 1).

        Returns:
            SplitOutput with rows * cols images.

        Raises:
            ValueError: If the grid does not fit the image.
        """
        pixels = load_pixels(image)
        grid = create_grid_for_dimensions(pixels.width, pixels.height, rows, cols)
        return self._split(pixels, grid)

    def split_image(self, image: ImageSource, grid: GridResult) -> list[CellImage]:
        """
        Crop each grid cell and encode it as an independent image.

        Args:
            image: Image source or decoded pixel buffer.
            grid: Grid whose cells lie within the image bounds.

        Returns:
            Encoded cell images in the grid's cell order.
        """
        pixels = load_pixels(image)
        cols = max(grid.cols, 1)
        images = []

        for index, cell in enumerate(grid.cells):
            crop = pixels.data[cell.y:cell.y + cell.height, cell.x:cell.x + cell.width]
            images.append(
                CellImage(
                    index=index,
                    row=index // cols,
                    col=index % cols,
                    cell=cell,
                    payload=encode_image(crop, self.config.output_format),
                    image_format=self.config.output_format.upper(),
                )
            )

        return images

    def _split(self, pixels: PixelBuffer, grid: GridResult) -> SplitOutput:
        images = self.split_image(pixels, grid)
        if not images:
            raise NoGridDetected("No grid detected")
        return SplitOutput(grid=grid, images=images)


def create_splitter(
    output_format: str = "PNG",
    min_cells: int = 2,
    **kwargs,
) -> GridSplitter:
    """
    Factory function to create a configured GridSplitter.

    Args:
        output_format: Lossless format for cropped cells.
        min_cells: Fewest gutter-detected cells accepted before falling back.
        **kwargs: Additional SplitConfig options.

    Returns:
        Configured GridSplitter.
    """
    config = SplitConfig(
        output_format=output_format,
        min_cells=min_cells,
        **kwargs,
    )
    return GridSplitter(config)
