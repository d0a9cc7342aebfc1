"""
GRAMS API client configuration
Reads from saved config file first, then falls back to environment variables
"""
import json
import logging
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Path to saved configuration
CONFIG_DIR = Path(__file__).parent.parent / "data"
CONFIG_FILE = CONFIG_DIR / "config.json"


def load_saved_config(config_file: Path = CONFIG_FILE) -> dict:
    """Load the ``api`` section of the saved config file if it exists"""
    if config_file.exists():
        try:
            with open(config_file, "r") as f:
                config = json.load(f)
                return config.get("api", {})
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not load saved config: {e}")
    return {}


class ApiSettings(BaseSettings):
    """GRAMS backend configuration - reads from saved config or environment variables."""

    api_base_url: str = "https://grams-lyart.vercel.app/api"

    # Long enough for image uploads
    request_timeout: float = 120.0

    # Dashboard auto-refresh, seconds
    refresh_interval: float = 30.0

    max_upload_bytes: int = 5 * 1024 * 1024

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, config_file: Path = CONFIG_FILE, **kwargs):
        super().__init__(**kwargs)

        # Load saved config and override if exists
        saved = load_saved_config(config_file)
        if saved:
            if saved.get("base_url"):
                self.api_base_url = saved["base_url"]
            if saved.get("timeout"):
                self.request_timeout = float(saved["timeout"])
            if saved.get("refresh_interval"):
                self.refresh_interval = float(saved["refresh_interval"])

    @property
    def base_url(self) -> str:
        return self.api_base_url.rstrip("/")


api_settings = ApiSettings()
