import os
from pathlib import Path

import yaml

from keen.core.errors import ConfigError

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "settings.yaml"


class Config:
    _config = None

    @classmethod
    def load(cls, path=None):
        if cls._config is None:
            path = Path(path or os.getenv("KEEN_CONFIG") or DEFAULT_CONFIG_PATH)
            try:
                with open(path, "r", encoding="utf-8") as f:
                    cls._config = yaml.safe_load(f) or {}
            except FileNotFoundError as exc:
                raise ConfigError(f"Settings file not found: {path}", key=str(path)) from exc
        return cls._config

    @classmethod
    def reset(cls):
        cls._config = None

    @classmethod
    def get(cls, *keys, default=None):
        cfg = cls.load()
        for key in keys:
            if not isinstance(cfg, dict):
                return default
            cfg = cfg.get(key)
        return cfg if cfg is not None else default
