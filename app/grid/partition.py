"""
Regular grid partition with caller-specified dimensions.
"""

from .base import Cell, GridResult, round_half_up


def create_grid_for_dimensions(
    width: int,
    height: int,
    rows: int,
    cols: int,
    method: str = "dimensions",
) -> GridResult:
    """
    Partition an image into a regular rows x cols grid.

    Cell sizes are real-valued and rounded per cell, so neighbouring cells
    may differ by a pixel. Cells are clipped to the image bounds.

    Args:
        width: Image width.
        height: Image height.
        rows: Number of rows (>= 1).
        cols: Number of columns (>= 1).
        method: Method name recorded on the result.

    Returns:
        GridResult with rows * cols cells in row-major order and confidence 1.

    Raises:
        ValueError: If any dimension is not positive, or the grid has more
            rows or columns than the image has pixels.
    """
    if rows < 1 or cols < 1:
        raise ValueError(f"Grid dimensions must be at least 1x1, got {rows}x{cols}")
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if rows > height or cols > width:
        raise ValueError(
            f"A {rows}x{cols} grid does not fit a {width}x{height} image"
        )

    cell_width = width / cols
    cell_height = height / rows

    cells = []
    for row in range(rows):
        for col in range(cols):
            x = round_half_up(col * cell_width)
            y = round_half_up(row * cell_height)
            cells.append(
                Cell(
                    x=x,
                    y=y,
                    width=min(round_half_up(cell_width), width - x),
                    height=min(round_half_up(cell_height), height - y),
                )
            )

    return GridResult(
        rows=rows,
        cols=cols,
        cells=cells,
        confidence=1.0,
        method=method,
    )
