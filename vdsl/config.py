"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    vdsl_env: str = "development"
    vdsl_log_level: str = "warning"

    # Fallback canvas when a frame carries no CANVAS command
    vdsl_default_canvas_width: float = 800.0
    vdsl_default_canvas_height: float = 800.0
    vdsl_max_grid_cells: int = 1_000_000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
