"""skucodec configuration management.

Loads configuration from environment variables with sensible defaults.
Dictionary, barcode schema and naming order live in YAML files under
``config/``; their paths can be overridden per environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

_DEFAULT_CONFIG_ROOT = Path(__file__).parent.parent / "config"


@dataclass
class CodecConfig:
    """Locations of the generation configuration files."""

    dictionary_path: Path
    schema_path: Path
    naming_path: Path


@dataclass
class MatchingConfig:
    """Bulk matching limits."""

    ocr_concurrency: int = 3
    ocr_timeout_seconds: float = 30.0
    supported_image_extensions: tuple[str, ...] = (".jpg", ".jpeg", ".png", ".gif")


@dataclass
class AppConfig:
    """Root application configuration."""

    config_root: Path
    codec: CodecConfig
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    matching: MatchingConfig = field(default_factory=MatchingConfig)

    @classmethod
    def from_env(cls) -> AppConfig:
        """Load configuration from environment variables.

        Optional (with defaults):
        - SKUCODEC_CONFIG_DIR: directory holding the YAML files (default: ./config)
        - SKUCODEC_DICTIONARY / SKUCODEC_SCHEMA / SKUCODEC_NAMING: per-file overrides
        - LOG_LEVEL, LOG_FORMAT
        - OCR_CONCURRENCY (default 3), OCR_TIMEOUT_SECONDS (default 30)

        Raises:
            ValueError: If a numeric setting cannot be parsed or is not positive
        """
        config_root = Path(os.getenv("SKUCODEC_CONFIG_DIR", str(_DEFAULT_CONFIG_ROOT)))

        ocr_concurrency = int(os.getenv("OCR_CONCURRENCY", "3"))
        if ocr_concurrency < 1:
            raise ValueError(f"OCR_CONCURRENCY must be >= 1, got {ocr_concurrency}")

        ocr_timeout = float(os.getenv("OCR_TIMEOUT_SECONDS", "30"))
        if ocr_timeout <= 0:
            raise ValueError(f"OCR_TIMEOUT_SECONDS must be > 0, got {ocr_timeout}")

        return cls(
            config_root=config_root,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "json"),
            codec=CodecConfig(
                dictionary_path=Path(
                    os.getenv("SKUCODEC_DICTIONARY", str(config_root / "dictionary.yaml"))
                ),
                schema_path=Path(
                    os.getenv("SKUCODEC_SCHEMA", str(config_root / "barcode_schema.yaml"))
                ),
                naming_path=Path(
                    os.getenv("SKUCODEC_NAMING", str(config_root / "naming_order.yaml"))
                ),
            ),
            matching=MatchingConfig(
                ocr_concurrency=ocr_concurrency,
                ocr_timeout_seconds=ocr_timeout,
            ),
        )


# Singleton instance (lazy-loaded)
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or create singleton AppConfig instance from environment."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next ``get_config`` re-reads the environment."""
    global _config
    _config = None
