"""
Image decoding and encoding for grid splitting.

Everything the detectors see is a PixelBuffer: an RGBA uint8 array. This
module turns the supported inputs (raw bytes, data URLs, paths, PIL images,
numpy arrays) into one, and encodes cropped cells back to bytes.
"""

import base64
import binascii
import io
import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from .base import PixelBuffer
from .errors import ContextUnavailable, DecodeFailure

logger = logging.getLogger(__name__)

ImageSource = Union[PixelBuffer, np.ndarray, Image.Image, bytes, Path, str]

LOSSLESS_FORMATS = ("PNG", "TIFF")


def decode_data_url(url: str) -> bytes:
    """
    Decode a base64 data URL into raw bytes.

    Args:
        url: String of the form data:<mime>;base64,<payload>.

    Returns:
        Decoded payload.

    Raises:
        DecodeFailure: If the URL is malformed.
    """
    header, sep, payload = url.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise DecodeFailure("Expected a base64 data URL")

    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeFailure(f"Invalid base64 payload: {e}") from e


def open_image(source: Union[bytes, Path, str]) -> Image.Image:
    """
    Open and fully decode an image with PIL.

    Args:
        source: Raw bytes, a data URL, or a filesystem path.

    Returns:
        Loaded PIL image.

    Raises:
        DecodeFailure: If the source cannot be decoded.
    """
    if isinstance(source, str) and source.startswith("data:"):
        source = decode_data_url(source)

    try:
        if isinstance(source, bytes):
            image = Image.open(io.BytesIO(source))
        else:
            image = Image.open(source)
        image.load()
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeFailure(f"Failed to load image: {e}") from e

    return image


def pil_to_pixels(image: Image.Image) -> PixelBuffer:
    """
    Convert a PIL image to an RGBA pixel buffer.

    Raises:
        ContextUnavailable: If the image cannot be converted to RGBA.
    """
    try:
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        data = np.asarray(rgba, dtype=np.uint8)
    except (OSError, ValueError) as e:
        raise ContextUnavailable(f"Could not read pixel data: {e}") from e

    return _checked(data)


def array_to_pixels(array: np.ndarray) -> PixelBuffer:
    """
    Convert a grayscale, RGB or RGBA numpy array to an RGBA pixel buffer.

    Raises:
        ContextUnavailable: If the array shape is not an image.
    """
    if array.ndim == 2:
        array = np.stack([array] * 3, axis=-1)

    if array.ndim != 3 or array.shape[2] not in (3, 4):
        raise ContextUnavailable(f"Unsupported pixel array shape: {array.shape}")

    array = array.astype(np.uint8, copy=False)
    if array.shape[2] == 3:
        alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
        array = np.concatenate([array, alpha], axis=2)

    return _checked(array)


def _checked(data: np.ndarray) -> PixelBuffer:
    if data.ndim != 3 or data.shape[0] == 0 or data.shape[1] == 0:
        raise ContextUnavailable(f"Image has no pixels: shape {data.shape}")
    return PixelBuffer.from_array(np.ascontiguousarray(data))


def load_pixels(source: ImageSource) -> PixelBuffer:
    """
    Decode any supported image source into a pixel buffer.

    Args:
        source: PixelBuffer, numpy array, PIL image, bytes, data URL or path.

    Returns:
        RGBA PixelBuffer.

    Raises:
        DecodeFailure: If the source is not a decodable image.
        ContextUnavailable: If pixel data cannot be obtained.
        TypeError: If the source type is not supported.
    """
    if isinstance(source, PixelBuffer):
        return source

    if isinstance(source, np.ndarray):
        return array_to_pixels(source)

    if isinstance(source, (bytes, bytearray)):
        source = bytes(source)

    if isinstance(source, (bytes, str, Path)):
        source = open_image(source)

    if isinstance(source, Image.Image):
        pixels = pil_to_pixels(source)
        logger.debug(f"Decoded image: {pixels.width}x{pixels.height}")
        return pixels

    raise TypeError(f"Unsupported image type: {type(source)}")


def encode_image(data: np.ndarray, image_format: str = "PNG") -> bytes:
    """
    Encode an RGBA array with a lossless codec.

    Args:
        data: uint8 array of shape (height, width, 4).
        image_format: PIL format name (PNG or TIFF).

    Returns:
        Encoded image bytes.

    Raises:
        ValueError: If the format is not lossless.
    """
    image_format = image_format.upper()
    if image_format not in LOSSLESS_FORMATS:
        raise ValueError(
            f"Unsupported output format: {image_format}. "
            f"Available: {list(LOSSLESS_FORMATS)}"
        )

    buffer = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(data)).save(buffer, format=image_format)
    return buffer.getvalue()
