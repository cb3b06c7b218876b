"""
Configuration settings for the JSON inspector.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    log_level: str = "INFO"
    log_json: bool = True

    # Material generator seed; a fixed seed gives reproducible profile colors
    material_seed: int = 11

    # Point markers
    point_marker_radius: float = 0.1
    point_marker_divisions: int = 10

    # Transform axis indicators
    transform_axis_length: float = 1.0

    class Config:
        env_file = ".env"
        env_prefix = "JSONINSPECTOR_"
        case_sensitive = False

# Global settings instance
settings = Settings()
