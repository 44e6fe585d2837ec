import os
from pathlib import Path

from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Explicitly load .env for local/dev runs only if values are missing from the environment
BASE_DIR = Path(__file__).resolve().parent.parent.parent
env_file = BASE_DIR / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    missing_keys = {k: v for k, v in file_env.items() if k not in os.environ and v is not None}
    for k, v in missing_keys.items():
        os.environ[k] = v


class Settings(BaseSettings):
    """Settings pulled from REALMGEN_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REALMGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Logging format (console or json)")

    # Map Generation Configuration
    map_x: float = Field(default=100.0, description="Left edge of the map rectangle")
    map_y: float = Field(default=100.0, description="Top edge of the map rectangle")
    map_width: float = Field(default=600.0, gt=0, description="Map rectangle width")
    map_height: float = Field(default=400.0, gt=0, description="Map rectangle height")
    canvas_width: float = Field(default=1200.0, gt=0, description="Canvas width driving the landmass radius")
    seed: str = Field(default="default", description="Default generation seed")

    # Output Configuration
    output_dir: str = Field(default="./output", description="Directory for rendered maps")

    @property
    def canvas_height(self) -> float:
        """Smallest canvas height that fits the map rectangle."""
        return self.map_y * 2 + self.map_height


# Instantiate singleton settings object
settings = Settings()
