"""
Configuration management for the Promotion Engine
"""

import json
import os
from pathlib import Path
from typing import Dict, Any, Optional
import pydantic
from pydantic import BaseModel, Field
from loguru import logger

from .exceptions import ValidationError


ENV_PREFIX = "PROMOTION_ENGINE_"


class PromotionEngineConfig(BaseModel):
    """Configuration model for the Promotion Engine"""

    # Logging settings
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="<green>{time:HH:mm:ss}</green> | <level>{level}</level> | {message}",
        description="Loguru format string"
    )

    # Loading settings
    promotions_file: Optional[str] = Field(default=None, description="JSON file with promotion definitions")
    strict_validation: bool = Field(default=True, description="Raise on invalid promotion definitions instead of skipping")


class ConfigManager:
    """Configuration manager for the Promotion Engine"""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration manager

        Args:
            config_file: Path to configuration file
        """
        self.config_file = config_file or "promotion_engine_config.json"
        self._config = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file, then overlay environment variables"""
        config_data: Dict[str, Any] = {}
        try:
            if Path(self.config_file).exists():
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    config_data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load configuration file {self.config_file}: {e}")
            config_data = {}

        config_data.update(self.get_environment_config())
        try:
            self._config = PromotionEngineConfig(**config_data)
        except ValueError as e:
            logger.warning(f"Invalid configuration, using defaults: {e}")
            self._config = PromotionEngineConfig()

    def get_config(self) -> PromotionEngineConfig:
        """Get current configuration"""
        return self._config

    def update_config(self, **kwargs) -> None:
        """
        Update configuration with new values; unknown keys are ignored

        Raises:
            ValidationError: if a value does not fit its field, e.g. a non-boolean
                strict_validation. The current configuration is left unchanged.
        """
        known = {}
        for key, value in kwargs.items():
            if key in PromotionEngineConfig.model_fields:
                known[key] = value
            else:
                logger.debug(f"Ignoring unknown configuration key: {key}")

        try:
            self._config = PromotionEngineConfig.model_validate({**self._config.model_dump(), **known})
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid configuration update: {e}") from e

    def reset_to_defaults(self) -> None:
        """Reset configuration to defaults"""
        self._config = PromotionEngineConfig()

    def validate_config(self) -> Dict[str, Any]:
        """Validate current configuration"""
        validation_results = {
            'valid': True,
            'warnings': [],
            'errors': []
        }

        valid_log_levels = ['TRACE', 'DEBUG', 'INFO', 'SUCCESS', 'WARNING', 'ERROR', 'CRITICAL']
        if self._config.log_level.upper() not in valid_log_levels:
            validation_results['errors'].append(f"Invalid log level: {self._config.log_level}")
            validation_results['valid'] = False

        if self._config.promotions_file and not Path(self._config.promotions_file).exists():
            validation_results['warnings'].append(
                f"Promotions file does not exist: {self._config.promotions_file}"
            )

        return validation_results

    def get_environment_config(self) -> Dict[str, str]:
        """Get configuration from environment variables"""
        env_config = {}

        for field_name in PromotionEngineConfig.model_fields:
            env_value = os.getenv(f"{ENV_PREFIX}{field_name.upper()}")
            if env_value is not None:
                env_config[field_name] = env_value

        return env_config


_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager, creating it on first use"""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_config() -> PromotionEngineConfig:
    """Get the global configuration instance"""
    return get_config_manager().get_config()


def update_config(**kwargs) -> None:
    """Update the global configuration"""
    get_config_manager().update_config(**kwargs)
