import base64
import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from app.main import app

from conftest import blank, png_bytes


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def upload(data: bytes, filename: str = "sheet.png") -> dict:
    return {"file": (filename, data, "image/png")}


def test_root_and_health(client):
    assert client.get("/").json()["name"] == "Grid Splitter API"

    health = client.get("/health").json()
    assert health == {"status": "healthy", "aspect_ratios": 9}


def test_detect_returns_grid(client, gutter_sheet):
    response = client.post("/grid/detect", files=upload(png_bytes(gutter_sheet.data)))

    assert response.status_code == 200
    body = response.json()
    assert (body["rows"], body["cols"]) == (2, 2)
    assert body["method"] == "projection"
    assert body["confidence"] == pytest.approx(0.95)
    assert (body["image_width"], body["image_height"]) == (240, 240)
    assert body["cells"][1] == {"x": 130, "y": 10, "width": 100, "height": 100}


def test_split_returns_cell_images(client, gutter_sheet):
    response = client.post("/grid/split", files=upload(png_bytes(gutter_sheet.data), "../contact.png"))

    assert response.status_code == 200
    body = response.json()
    assert body["source_filename"] == "contact.png"
    assert [image["filename"] for image in body["images"]] == [
        "split-1-1.png",
        "split-1-2.png",
        "split-2-1.png",
        "split-2-2.png",
    ]

    first = body["images"][0]
    header, payload = first["data_url"].split(",", 1)
    assert header == "data:image/png;base64"
    cell = np.array(Image.open(io.BytesIO(base64.b64decode(payload))))
    np.testing.assert_array_equal(cell, gutter_sheet.data[10:110, 10:110])


def test_split_with_dimensions(client, seamless_sheet):
    response = client.post(
        "/grid/split/dimensions",
        files=upload(png_bytes(seamless_sheet.data)),
        data={"rows": "2", "cols": "3"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["grid"]["method"] == "dimensions"
    assert body["grid"]["confidence"] == 1
    assert len(body["images"]) == 6
    assert all(image["width"] == 120 and image["height"] == 90 for image in body["images"])


@pytest.mark.parametrize("rows,cols", [("0", "2"), ("2", "99")])
def test_split_with_dimensions_rejects_bad_sizes(client, seamless_sheet, rows, cols):
    response = client.post(
        "/grid/split/dimensions",
        files=upload(png_bytes(seamless_sheet.data)),
        data={"rows": rows, "cols": cols},
    )

    assert response.status_code == 400


def test_rejects_non_image_upload(client):
    response = client.post("/grid/split", files=upload(b"just some text", "notes.txt"))

    assert response.status_code == 400
    assert "Invalid image file" in response.json()["detail"]


def test_rejects_truncated_png(client, gutter_sheet):
    data = png_bytes(gutter_sheet.data)[:60]

    response = client.post("/grid/detect", files=upload(data))

    assert response.status_code == 400


def test_split_with_dimensions_rejects_grid_larger_than_image(client):
    response = client.post(
        "/grid/split/dimensions",
        files=upload(png_bytes(blank(5, 5, 200))),
        data={"rows": "1", "cols": "12"},
    )

    assert response.status_code == 400
    assert "does not fit" in response.json()["detail"]
