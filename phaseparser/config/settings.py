"""
Configuration settings for the phase segmentation tools.

Handles environment variables and logging setup for both the CLI and
embedding applications.
"""

import os
import logging
from typing import Optional
from pathlib import Path
from dataclasses import dataclass, field


VALID_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass
class SegmentationSettings:
    """Phase catalog and logging settings."""

    catalog_path: Optional[str] = None
    log_level: str = "info"

    @classmethod
    def from_env(cls) -> "SegmentationSettings":
        """Load segmentation settings from environment variables."""
        return cls(
            catalog_path=os.getenv("PHASE_CATALOG_PATH") or None,
            log_level=os.getenv("LOG_LEVEL", "info").lower(),
        )


@dataclass
class ApplicationSettings:
    """Main application settings container."""

    segmentation: SegmentationSettings = field(default_factory=SegmentationSettings)

    # Runtime settings
    environment: str = "development"
    debug: bool = False

    @classmethod
    def from_env(cls) -> "ApplicationSettings":
        """Load all settings from environment variables."""
        return cls(
            segmentation=SegmentationSettings.from_env(),
            environment=os.getenv("ENVIRONMENT", "development"),
            debug=os.getenv("DEBUG", "false").lower() == "true",
        )

    def setup_logging(self):
        """Configure logging based on settings."""
        level_name = "debug" if self.debug else self.segmentation.log_level
        level = getattr(logging, level_name.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    def validate(self):
        """Validate configuration settings."""
        errors = []

        if self.segmentation.log_level not in VALID_LOG_LEVELS:
            errors.append(f"Invalid log level: {self.segmentation.log_level}")

        catalog_path = self.segmentation.catalog_path
        if catalog_path and not Path(catalog_path).exists():
            errors.append(f"Phase catalog not found: {catalog_path}")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    def log_configuration(self):
        """Log current configuration."""
        logger = logging.getLogger(__name__)

        logger.info("=== Phase Parser Configuration ===")
        logger.info(f"Environment: {self.environment}")
        logger.info(f"Debug: {self.debug}")
        logger.info(f"Phase Catalog: {self.segmentation.catalog_path or 'built-in'}")
        logger.info(f"Log Level: {self.segmentation.log_level}")
        logger.info("=== End Configuration ===")


# Global settings instance
settings = ApplicationSettings.from_env()


def get_settings() -> ApplicationSettings:
    """Get the global settings instance."""
    return settings


def reload_settings() -> ApplicationSettings:
    """Reload settings from environment variables."""
    global settings
    settings = ApplicationSettings.from_env()
    return settings
