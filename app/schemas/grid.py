from pydantic import BaseModel, Field


class CellSchema(BaseModel):
    """Pixel rectangle of one grid cell."""

    x: int
    y: int
    width: int
    height: int


class GridResponse(BaseModel):
    """Detected grid for an uploaded image."""

    rows: int = Field(description="Number of rows (before label filtering for gutter detection)")
    cols: int = Field(description="Number of columns (before label filtering for gutter detection)")
    cells: list[CellSchema] = Field(description="Cells in row-major order")
    confidence: float = Field(description="Ranking signal, not a calibrated probability")
    method: str = Field(description="Detection method: projection, geometric or dimensions")
    image_width: int
    image_height: int


class CellImageSchema(BaseModel):
    """One cropped cell image."""

    index: int
    row: int
    col: int
    filename: str
    width: int
    height: int
    data_url: str = Field(description="Base64 data URL of the encoded cell")


class SplitResponse(BaseModel):
    """Grid and cropped cell images for an uploaded image."""

    source_filename: str | None = None
    grid: GridResponse
    images: list[CellImageSchema]
