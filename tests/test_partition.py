import pytest

from app.grid import Cell, create_grid_for_dimensions


@pytest.mark.parametrize(
    "width,height,rows,cols",
    [(100, 100, 2, 2), (10, 10, 3, 4), (11, 7, 2, 2), (1920, 1080, 3, 6), (13, 14, 3, 3), (5, 5, 1, 1)],
)
def test_partition_covers_image(width, height, rows, cols):
    result = create_grid_for_dimensions(width, height, rows, cols)

    assert result.confidence == 1
    assert len(result.cells) == rows * cols

    for cell in result.cells:
        assert cell.width > 0 and cell.height > 0
        assert cell.x + cell.width <= width
        assert cell.y + cell.height <= height

    for row in range(rows):
        row_cells = result.cells[row * cols:(row + 1) * cols]
        assert row_cells[0].x == 0
        for left, right in zip(row_cells, row_cells[1:]):
            assert abs(left.x + left.width - right.x) <= 1
            assert left.y == right.y
        assert width - 1 <= row_cells[-1].x + row_cells[-1].width <= width

    first_column = result.cells[::cols]
    assert first_column[0].y == 0
    assert height - 1 <= first_column[-1].y + first_column[-1].height <= height


def test_cells_are_row_major():
    result = create_grid_for_dimensions(300, 200, 2, 3)

    assert [c.bounds for c in result.cells] == [
        (0, 0, 100, 100),
        (100, 0, 100, 100),
        (200, 0, 100, 100),
        (0, 100, 100, 100),
        (100, 100, 100, 100),
        (200, 100, 100, 100),
    ]


def test_halves_round_up_and_clip_to_bounds():
    result = create_grid_for_dimensions(11, 7, 2, 2)

    assert result.cells == [
        Cell(x=0, y=0, width=6, height=4),
        Cell(x=6, y=0, width=5, height=4),
        Cell(x=0, y=4, width=6, height=3),
        Cell(x=6, y=4, width=5, height=3),
    ]


@pytest.mark.parametrize("rows,cols", [(0, 2), (2, 0), (-1, 1)])
def test_rejects_empty_grid(rows, cols):
    with pytest.raises(ValueError):
        create_grid_for_dimensions(100, 100, rows, cols)


@pytest.mark.parametrize("width,height,rows,cols", [(5, 5, 1, 12), (5, 5, 6, 1), (1, 40, 1, 2)])
def test_rejects_grid_larger_than_image(width, height, rows, cols):
    with pytest.raises(ValueError):
        create_grid_for_dimensions(width, height, rows, cols)


def test_one_pixel_cells_are_not_empty():
    result = create_grid_for_dimensions(5, 3, 3, 5)

    assert all(cell.width == 1 and cell.height == 1 for cell in result.cells)
    assert result.cells[-1].bounds == (4, 2, 1, 1)
