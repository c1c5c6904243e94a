import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from app.config import settings
from app.grid import (
    ContextUnavailable,
    DecodeFailure,
    GridResult,
    GridSplitter,
    NoGridDetected,
    PixelBuffer,
    SplitOutput,
    create_splitter,
    load_pixels,
)
from app.schemas.grid import CellImageSchema, CellSchema, GridResponse, SplitResponse
from app.utils.file_validation import ValidationError, validate_filename, validate_image_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/grid", tags=["Grid"])


def get_splitter() -> GridSplitter:
    """Get a grid splitter configured from settings."""
    return create_splitter(**settings.splitting.model_dump())


def read_upload(file: UploadFile) -> PixelBuffer:
    """
    Validate an uploaded image and decode it.

    Raises:
        HTTPException: If the upload is not a decodable image.
    """
    try:
        validate_image_upload(file.file, max_size_mb=settings.max_upload_mb)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid image file: {e}",
        )

    return decode_or_raise(file.file.read())


def decode_or_raise(content: bytes) -> PixelBuffer:
    try:
        return load_pixels(content)
    except DecodeFailure as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to decode image: {e}",
        )
    except ContextUnavailable as e:
        logger.error(f"Pixel data unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Could not read pixel data: {e}",
        )


def source_filename(file: UploadFile) -> str | None:
    """Sanitized upload filename, or None when absent or unsafe."""
    if not file.filename:
        return None
    try:
        return validate_filename(file.filename)
    except ValidationError as e:
        logger.warning(f"Ignoring upload filename: {e}")
        return None


def to_grid_response(grid: GridResult, pixels: PixelBuffer) -> GridResponse:
    return GridResponse(
        rows=grid.rows,
        cols=grid.cols,
        cells=[CellSchema(x=c.x, y=c.y, width=c.width, height=c.height) for c in grid.cells],
        confidence=grid.confidence,
        method=grid.method,
        image_width=pixels.width,
        image_height=pixels.height,
    )


def to_split_response(output: SplitOutput, pixels: PixelBuffer, filename: str | None) -> SplitResponse:
    return SplitResponse(
        source_filename=filename,
        grid=to_grid_response(output.grid, pixels),
        images=[
            CellImageSchema(
                index=image.index,
                row=image.row,
                col=image.col,
                filename=image.filename,
                width=image.cell.width,
                height=image.cell.height,
                data_url=image.to_data_url(),
            )
            for image in output.images
        ],
    )


@router.post("/detect", response_model=GridResponse)
def detect_grid(
    file: UploadFile = File(..., description="Contact sheet image"),
    splitter: GridSplitter = Depends(get_splitter),
):
    """
    Detect the grid of a contact sheet without cropping.

    Gutter detection runs first; the geometric detector is used when it
    finds fewer than two cells.
    """
    pixels = read_upload(file)

    try:
        grid = splitter.detect(pixels)
    except NoGridDetected as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )

    return to_grid_response(grid, pixels)


@router.post("/split", response_model=SplitResponse)
def split_grid(
    file: UploadFile = File(..., description="Contact sheet image"),
    splitter: GridSplitter = Depends(get_splitter),
):
    """
    Detect the grid of a contact sheet and return every cell as an image.

    Cells are returned in row-major order as base64 data URLs.
    """
    pixels = read_upload(file)

    try:
        output = splitter.detect_and_split(pixels)
    except NoGridDetected as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )

    return to_split_response(output, pixels, source_filename(file))


@router.post("/split/dimensions", response_model=SplitResponse)
def split_grid_with_dimensions(
    file: UploadFile = File(..., description="Contact sheet image"),
    rows: int = Form(..., description="Number of rows"),
    cols: int = Form(..., description="Number of columns"),
    splitter: GridSplitter = Depends(get_splitter),
):
    """
    Split a contact sheet into a caller-specified rows x cols grid.

    Detection is skipped entirely; this is the most reliable method when
    the layout is known.
    """
    limit = settings.max_grid_dimension
    if not (1 <= rows <= limit and 1 <= cols <= limit):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Rows and cols must be between 1 and {limit}",
        )

    pixels = read_upload(file)

    try:
        output = splitter.split_with_dimensions(pixels, rows, cols)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return to_split_response(output, pixels, source_filename(file))
