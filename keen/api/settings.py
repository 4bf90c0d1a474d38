"""Runtime settings for the Keen API layer."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List

from dotenv import load_dotenv

from keen.core.config import Config

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class ApiSettings:
    """Container for runtime-tunable API settings."""

    def __init__(self) -> None:
        load_dotenv()
        self.data_file: Path = self._resolve_data_file()
        self.host: str = os.getenv("HOST") or Config.get("api", "host", default="0.0.0.0")
        self.port: int = int(os.getenv("PORT") or Config.get("api", "port", default=5000))
        self.cors_origins: List[str] = list(self._env_list("KEEN_CORS_ORIGINS")) or list(
            Config.get("api", "cors_origins", default=["*"])
        )
        self.rate_limit: str = os.getenv("KEEN_RATE_LIMIT") or Config.get("api", "rate_limit", default="120/minute")
        self.env: str = os.getenv("ENV", "dev")

    @staticmethod
    def _env_list(var_name: str) -> Iterable[str]:
        raw = os.getenv(var_name)
        if not raw:
            return []
        # Accept comma or newline separated lists
        parts = [item.strip() for item in raw.replace("\n", ",").split(",")]
        return [item for item in parts if item]

    @staticmethod
    def _resolve_data_file() -> Path:
        raw = os.getenv("KEEN_DATA_FILE") or Config.get("dataset", "path", default="data/data.csv")
        path = Path(raw).expanduser()
        return path if path.is_absolute() else PROJECT_ROOT / path


@lru_cache(maxsize=1)
def get_api_settings() -> ApiSettings:
    """Return cached API settings instance."""

    return ApiSettings()


__all__ = ["ApiSettings", "get_api_settings", "PROJECT_ROOT"]
