from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class SplittingConfig(BaseModel):
    """Configuration for grid splitting."""

    output_format: Literal["PNG", "TIFF"] = Field(
        default="PNG", description="Lossless format for cropped cells"
    )
    min_cells: int = Field(
        default=2, ge=1, description="Fewest gutter-detected cells accepted before geometric fallback"
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False

    # Upload Settings
    max_upload_mb: int = 50

    # Upper bound for rows/cols on the explicit dimensions endpoint
    max_grid_dimension: int = 12

    splitting: SplittingConfig = SplittingConfig()

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_nested_delimiter = "__"


settings = Settings()
