import pytest

from app.grid import GeometricDetector, NoGridDetected, PixelBuffer, create_grid_for_dimensions
from app.grid.candidates import get_grid_candidates

from conftest import blank


def test_picks_seamless_layout(seamless_sheet):
    result = GeometricDetector().detect(seamless_sheet)

    assert (result.rows, result.cols) == (2, 3)
    assert result.method == "geometric"
    assert len(result.cells) == 6
    assert result.cells == create_grid_for_dimensions(360, 180, 2, 3).cells


def test_confidence_is_combined_score(seamless_sheet):
    result = GeometricDetector().detect(seamless_sheet)
    candidate = next(c for c in get_grid_candidates(360, 180) if (c.rows, c.cols) == (2, 3))

    # edges at every true division give a full edge score
    assert result.confidence == pytest.approx(candidate.score * 0.8 + 0.2)


def test_flat_image_falls_back_to_best_geometry():
    flat = PixelBuffer.from_array(blank(1600, 900, 128))
    best = get_grid_candidates(1600, 900)[0]

    result = GeometricDetector().detect(flat)

    assert (result.rows, result.cols) == (best.rows, best.cols)
    assert result.confidence == pytest.approx(best.score * 0.8)


def test_skips_grids_wider_than_the_image():
    strip = PixelBuffer.from_array(blank(1, 50, 128))

    result = GeometricDetector().detect(strip)

    assert result.cols == 1
    assert all(cell.width == 1 and cell.height > 0 for cell in result.cells)


def test_single_pixel_image_has_no_grid():
    with pytest.raises(NoGridDetected):
        GeometricDetector().detect(PixelBuffer.from_array(blank(1, 1, 128)))
