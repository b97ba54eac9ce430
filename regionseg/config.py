"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    regionseg_log_level: str = "info"

    # Segmentation
    regionseg_threshold: int = 30
    regionseg_background_tolerance: int = 30

    # Files
    regionseg_input: str = "skull.png"
    regionseg_output_dir: str = "."
    regionseg_edges_name: str = "11_edges.png"
    regionseg_components_name: str = "22_components.png"
    regionseg_result_name: str = "33_result.png"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

