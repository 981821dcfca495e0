"""
Configuration module for the FieldOps MCP Server.

Provides centralized configuration management with support for:
- Environment variables
- Default values
- Path resolution
- Logging configuration
"""

import logging
import os
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

# Load environment variables from .env file at project root
_env_path = Path(__file__).resolve().parent / ".env"
load_dotenv(dotenv_path=_env_path)


def _parse_float(env_var: str, default: float) -> float:
    """Parse a float value from an environment variable."""
    value = os.getenv(env_var)
    if value is None or not value.strip():
        return default
    return float(value)


def _parse_int(env_var: str, default: int) -> int:
    """Parse an integer value from an environment variable."""
    value = os.getenv(env_var)
    if value is None or not value.strip():
        return default
    return int(value)


class Config:
    """
    Configuration class for MCP server settings.

    Supports configuration via environment variables (and .env file) with sensible defaults.
    Relative paths are resolved against the project root.
    """

    def __init__(self):
        """Initialize configuration from environment variables and defaults."""
        self._project_root = Path(__file__).resolve().parent

        # Backend API configuration
        self.api_base_url = os.getenv("FIELDOPS_API_BASE_URL", "http://localhost:5000").rstrip("/")
        self.api_token = os.getenv("FIELDOPS_API_TOKEN") or None
        self.api_timeout_seconds = _parse_float("FIELDOPS_API_TIMEOUT_SECONDS", 30.0)

        # Logging configuration
        self.log_level = os.getenv("FIELDOPS_LOG_LEVEL", "INFO").upper()
        self.log_file = self._resolve_log_path()

        # Server configuration
        self.server_name = os.getenv("FIELDOPS_SERVER_NAME", "fieldops-mcp-server")

        # Job defaults: placeholder coordinates until a geocoder is wired in
        self.default_lat = _parse_float("FIELDOPS_DEFAULT_LAT", 40.7128)
        self.default_lng = _parse_float("FIELDOPS_DEFAULT_LNG", -74.0060)
        self.default_estimated_duration = _parse_int("FIELDOPS_DEFAULT_ESTIMATED_DURATION", 2)

    def _resolve_log_path(self) -> Optional[Path]:
        """
        Resolve the log file path from environment.

        If FIELDOPS_LOG_FILE is set, logs will be written to that file.
        Otherwise, logs go to stderr only.

        Returns:
            Path to log file, or None for stderr-only logging
        """
        log_env = os.getenv("FIELDOPS_LOG_FILE")
        if not log_env:
            return None

        log_path = Path(log_env)
        if log_path.is_absolute():
            return log_path
        else:
            return self._project_root / log_path

    def setup_logging(self):
        """
        Configure logging based on configuration settings.

        Sets up logging to stderr and optionally to a file.
        Log level is controlled by FIELDOPS_LOG_LEVEL.
        """
        numeric_level = getattr(logging, self.log_level, logging.INFO)

        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(numeric_level)

        # Remove existing handlers to avoid duplicates
        root_logger.handlers.clear()

        # Always add stderr handler
        stderr_handler = logging.StreamHandler()
        stderr_handler.setLevel(numeric_level)
        stderr_handler.setFormatter(formatter)
        root_logger.addHandler(stderr_handler)

        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(self.log_file)
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

            logging.info(f"Logging to file: {self.log_file}")

        logging.info(f"Log level set to: {self.log_level}")
        logging.info(f"API base URL: {self.api_base_url}")

    def validate(self) -> list[str]:
        """
        Validate configuration and return any warnings.

        Returns:
            List of warning messages (empty if all valid)
        """
        warnings = []

        parsed = urlparse(self.api_base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            warnings.append(
                f"API base URL is not an http(s) URL: {self.api_base_url}. "
                "The server will start but tools will fail until it is fixed."
            )

        if self.api_timeout_seconds <= 0:
            warnings.append(
                f"API timeout must be positive, got {self.api_timeout_seconds}"
            )

        if self.log_file:
            log_dir = self.log_file.parent
            if not log_dir.exists():
                try:
                    log_dir.mkdir(parents=True, exist_ok=True)
                except OSError as e:
                    warnings.append(f"Cannot create log directory {log_dir}: {e}")
            elif not os.access(log_dir, os.W_OK):
                warnings.append(f"Log directory not writable: {log_dir}")

        return warnings


# Global configuration instance
config = Config()


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Global Config instance
    """
    return config
