"""
Keen Analytics - Logging Utility
================================

Logging setup using Loguru with:
- Console and file logging
- Automatic log rotation
- JSON logging support
- Contextual logging
"""

import sys
from functools import wraps
from pathlib import Path
from typing import Optional

import yaml
from loguru import logger


class LoggerSetup:
    """Configure and manage application logging"""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize logger with configuration

        Args:
            config_path: Path to settings.yaml file
        """
        self.config = self._load_config(config_path)
        self._setup_logger()

    def _load_config(self, config_path: Optional[str] = None) -> dict:
        """Load the ``logging`` block from YAML, falling back to defaults"""
        if config_path is None:
            config_path = Path(__file__).parent.parent / "config" / "settings.yaml"

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            return self._default_config()
        return {**self._default_config(), **config.get("logging", {})}

    def _default_config(self) -> dict:
        return {
            "level": "INFO",
            "format": "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
            "console": {"enabled": True, "colorize": True},
            "file": {
                "enabled": False,
                "path": "./logs/keen-analytics.log",
                "rotation": "100 MB",
                "retention": "30 days",
                "compression": "zip",
            },
            "error_file": {
                "enabled": False,
                "path": "./logs/errors.log",
                "level": "ERROR",
                "rotation": "50 MB",
                "retention": "90 days",
            },
            "json": {
                "enabled": False,
                "path": "./logs/keen-analytics.json",
            },
        }

    def _setup_logger(self):
        """Configure loguru sinks"""
        logger.remove()

        log_level = self.config.get("level", "INFO")
        log_format = self.config.get("format")

        console_config = self.config.get("console", {})
        if console_config.get("enabled", True):
            logger.add(
                sys.stderr,
                format=log_format,
                level=log_level,
                colorize=console_config.get("colorize", True),
                backtrace=True,
                diagnose=False,
            )

        file_config = self.config.get("file", {})
        if file_config.get("enabled", False):
            log_path = Path(file_config.get("path", "./logs/keen-analytics.log"))
            log_path.parent.mkdir(parents=True, exist_ok=True)

            logger.add(
                log_path,
                format=log_format,
                level=log_level,
                rotation=file_config.get("rotation", "100 MB"),
                retention=file_config.get("retention", "30 days"),
                compression=file_config.get("compression", "zip"),
                backtrace=True,
                diagnose=False,
            )

        error_config = self.config.get("error_file", {})
        if error_config.get("enabled", False):
            error_path = Path(error_config.get("path", "./logs/errors.log"))
            error_path.parent.mkdir(parents=True, exist_ok=True)

            logger.add(
                error_path,
                format=log_format,
                level=error_config.get("level", "ERROR"),
                rotation=error_config.get("rotation", "50 MB"),
                retention=error_config.get("retention", "90 days"),
                backtrace=True,
                diagnose=False,
            )

        # JSON lines for log aggregation
        json_config = self.config.get("json", {})
        if json_config.get("enabled", False):
            json_path = Path(json_config.get("path", "./logs/keen-analytics.json"))
            json_path.parent.mkdir(parents=True, exist_ok=True)

            logger.add(
                json_path,
                format="{message}",
                level=log_level,
                serialize=True,
                rotation=file_config.get("rotation", "100 MB"),
                retention=file_config.get("retention", "30 days"),
            )

    def get_logger(self, name: Optional[str] = None):
        if name:
            return logger.bind(name=name)
        return logger


_logger_setup = None


def setup_logging(config_path: Optional[str] = None):
    """
    Initialize logging system

    Args:
        config_path: Path to settings.yaml file
    """
    global _logger_setup
    _logger_setup = LoggerSetup(config_path)
    logger.debug("Logging system initialized")


def get_logger(name: Optional[str] = None):
    """
    Get a logger instance

    Example:
        >>> from keen.utils.logger import get_logger
        >>> log = get_logger(__name__)
        >>> log.info("Serving series")
    """
    if _logger_setup is None:
        setup_logging()
    return _logger_setup.get_logger(name)


def log_execution_time(func):
    """Log how long ``func`` took, for sync and async callables alike."""
    import inspect
    import time

    if inspect.iscoroutinefunction(func):

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            log = get_logger(func.__module__)
            start_time = time.perf_counter()
            try:
                return await func(*args, **kwargs)
            finally:
                log.debug(f"{func.__name__} executed in {time.perf_counter() - start_time:.3f}s")

        return async_wrapper

    @wraps(func)
    def wrapper(*args, **kwargs):
        log = get_logger(func.__module__)
        start_time = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            log.debug(f"{func.__name__} executed in {time.perf_counter() - start_time:.3f}s")

    return wrapper
