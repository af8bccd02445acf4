"""
Configuration settings for the flag review analyzer.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent

# Values in .env only fill in what the environment doesn't already set
load_dotenv(PROJECT_ROOT / ".env")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AnalyzerConfig:
    """Configuration for reading and displaying an analysis."""

    encoding: str = field(default_factory=lambda: os.getenv("TAG_ANALYZER_ENCODING", "utf-8"))
    delimiter: str = ","

    # Shown wherever a row has no mismatch
    none_label: str = "None"


@dataclass
class ViewerConfig:
    """Configuration for the web viewer."""

    host: str = field(default_factory=lambda: os.getenv("TAG_ANALYZER_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("TAG_ANALYZER_PORT", "5000")))
    debug: bool = field(default_factory=lambda: _env_bool("TAG_ANALYZER_DEBUG", False))
    max_upload_mb: int = field(
        default_factory=lambda: int(os.getenv("TAG_ANALYZER_MAX_UPLOAD_MB", "16"))
    )

    @property
    def max_upload_bytes(self) -> int:
        """Upload size limit handed to Flask."""
        return self.max_upload_mb * 1024 * 1024


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    log_dir: Path = field(
        default_factory=lambda: Path(os.getenv("LOG_DIR", str(PROJECT_ROOT / "logs")))
    )
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_to_file: bool = field(default_factory=lambda: _env_bool("LOG_TO_FILE", False))
    log_to_console: bool = True

    def ensure_dirs(self) -> None:
        """Create log directory if it doesn't exist."""
        self.log_dir.mkdir(parents=True, exist_ok=True)


@dataclass
class AppConfig:
    """Main configuration combining all settings."""

    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)
    viewer: ViewerConfig = field(default_factory=ViewerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Default configuration instance
config = AppConfig()
