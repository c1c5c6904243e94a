import io

import numpy as np
import pytest
from PIL import Image

from app.grid import PixelBuffer


def blank(width: int, height: int, value: int = 0) -> np.ndarray:
    data = np.full((height, width, 4), value, dtype=np.uint8)
    data[:, :, 3] = 255
    return data


def fill(data: np.ndarray, x: int, y: int, width: int, height: int, value: int) -> None:
    data[y:y + height, x:x + width, :3] = value


def png_bytes(data: np.ndarray) -> bytes:
    buffer = io.BytesIO()
    Image.fromarray(data).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def gutter_sheet() -> PixelBuffer:
    """Four 100x100 bright blocks on black, 10px outer and 20px inner gutters."""
    data = blank(240, 240)
    for y in (10, 130):
        for x in (10, 130):
            fill(data, x, y, 100, 100, 200)
    return PixelBuffer.from_array(data)


@pytest.fixture
def captioned_sheet() -> PixelBuffer:
    """The four-block layout plus a 100x20 caption strip under the bottom-left block."""
    data = blank(240, 270)
    for y in (10, 130):
        for x in (10, 130):
            fill(data, x, y, 100, 100, 200)
    fill(data, 10, 240, 100, 20, 200)
    return PixelBuffer.from_array(data)


@pytest.fixture
def seamless_sheet() -> PixelBuffer:
    """A 2x3 grid of flat 120x90 (4:3) cells with no gutters between them."""
    data = blank(360, 180)
    for row in range(2):
        for col in range(3):
            fill(data, col * 120, row * 90, 120, 90, (row * 3 + col) * 40 + 20)
    return PixelBuffer.from_array(data)
