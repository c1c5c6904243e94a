"""Utility modules for the grid splitter service."""

from app.utils.file_validation import (
    ValidationError,
    detect_image_format,
    validate_filename,
    validate_image_upload,
)

__all__ = [
    "ValidationError",
    "detect_image_format",
    "validate_filename",
    "validate_image_upload",
]
