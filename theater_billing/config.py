"""
Configuration management for theater billing

Amounts are integer cents.
"""

import json
import os
from pathlib import Path
from typing import Dict, Any, Optional
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigurationError
from .models import Genre


TRAGEDY_BASE_AMOUNT = 40000
TRAGEDY_AUDIENCE_THRESHOLD = 30
TRAGEDY_OVER_BASE_CAPACITY_PER_PERSON = 1000

COMEDY_BASE_AMOUNT = 30000
COMEDY_AUDIENCE_THRESHOLD = 20
COMEDY_OVER_BASE_CAPACITY_AMOUNT = 10000
COMEDY_OVER_BASE_CAPACITY_PER_PERSON = 500
COMEDY_AMOUNT_PER_AUDIENCE = 300
COMEDY_EXTRA_VOLUME_FACTOR = 20

HISTORY_BASE_AMOUNT = 20000
HISTORY_AUDIENCE_THRESHOLD = 20
HISTORY_OVER_BASE_CAPACITY_PER_PERSON = 1000
HISTORY_VOLUME_CREDIT_THRESHOLD = 20

PASTORAL_BASE_AMOUNT = 40000
PASTORAL_AUDIENCE_THRESHOLD = 20
PASTORAL_OVER_BASE_CAPACITY_PER_PERSON = 2500
PASTORAL_VOLUME_CREDIT_THRESHOLD = 20
PASTORAL_EXTRA_VOLUME_FACTOR = 2

# Shared by tragedy and comedy
BASE_VOLUME_CREDIT_THRESHOLD = 30

PERCENT_FACTOR = 100

ENV_PREFIX = "THEATER_BILLING_"


class GenreRule(BaseModel):
    """Pricing and volume credit parameters for one genre"""

    model_config = ConfigDict(frozen=True)

    base_amount: int = Field(ge=0, description="Flat amount charged for every performance")
    audience_threshold: int = Field(ge=0, description="Audience size included in the base amount")
    over_capacity_per_person: int = Field(ge=0, description="Charge per person above the threshold")
    over_capacity_amount: int = Field(default=0, ge=0, description="Flat surcharge once above the threshold")
    amount_per_audience: int = Field(default=0, ge=0, description="Charge per audience member, always applied")
    volume_credit_threshold: int = Field(ge=0, description="Audience size before credits are earned")
    extra_volume_factor: Optional[int] = Field(default=None, gt=0, description="One bonus credit per this many people")


def default_genre_rules() -> Dict[Genre, GenreRule]:
    """Build the standard rule table from the module constants"""
    return {
        Genre.TRAGEDY: GenreRule(
            base_amount=TRAGEDY_BASE_AMOUNT,
            audience_threshold=TRAGEDY_AUDIENCE_THRESHOLD,
            over_capacity_per_person=TRAGEDY_OVER_BASE_CAPACITY_PER_PERSON,
            volume_credit_threshold=BASE_VOLUME_CREDIT_THRESHOLD,
        ),
        Genre.COMEDY: GenreRule(
            base_amount=COMEDY_BASE_AMOUNT,
            audience_threshold=COMEDY_AUDIENCE_THRESHOLD,
            over_capacity_per_person=COMEDY_OVER_BASE_CAPACITY_PER_PERSON,
            over_capacity_amount=COMEDY_OVER_BASE_CAPACITY_AMOUNT,
            amount_per_audience=COMEDY_AMOUNT_PER_AUDIENCE,
            volume_credit_threshold=BASE_VOLUME_CREDIT_THRESHOLD,
            extra_volume_factor=COMEDY_EXTRA_VOLUME_FACTOR,
        ),
        Genre.HISTORY: GenreRule(
            base_amount=HISTORY_BASE_AMOUNT,
            audience_threshold=HISTORY_AUDIENCE_THRESHOLD,
            over_capacity_per_person=HISTORY_OVER_BASE_CAPACITY_PER_PERSON,
            volume_credit_threshold=HISTORY_VOLUME_CREDIT_THRESHOLD,
        ),
        Genre.PASTORAL: GenreRule(
            base_amount=PASTORAL_BASE_AMOUNT,
            audience_threshold=PASTORAL_AUDIENCE_THRESHOLD,
            over_capacity_per_person=PASTORAL_OVER_BASE_CAPACITY_PER_PERSON,
            volume_credit_threshold=PASTORAL_VOLUME_CREDIT_THRESHOLD,
            extra_volume_factor=PASTORAL_EXTRA_VOLUME_FACTOR,
        ),
    }


class BillingConfig(BaseModel):
    """Configuration model for theater billing"""

    # Output settings
    currency_symbol: str = Field(default="$", description="Symbol printed before amounts")

    # Logging settings
    log_level: str = Field(default="INFO", description="Logging level")
    configure_logging: bool = Field(default=True, description="Replace loguru sinks when the engine starts")
    log_format: str = Field(
        default="<green>{time:HH:mm:ss}</green> | <level>{level}</level> | {message}",
        description="Loguru format for the engine sink",
    )

    # Rules
    rules: Dict[Genre, GenreRule] = Field(default_factory=default_genre_rules, description="Rule per genre")


class ConfigManager:
    """Configuration manager for theater billing"""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration manager

        Args:
            config_file: Path to a JSON configuration file
        """
        self.config_file = config_file or "theater_billing_config.json"
        self._config = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file, then apply environment overrides"""
        env_config = self.get_environment_config()
        try:
            config_data = self._read_config_file()
            self._config = BillingConfig(**{**config_data, **env_config})
            return
        except (OSError, ValueError, ConfigurationError) as e:
            logger.warning(f"Failed to load configuration from {self.config_file}: {e}")

        try:
            self._config = BillingConfig(**env_config)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid {ENV_PREFIX}* environment values: {e}")
            self._config = BillingConfig()

    def _read_config_file(self) -> Dict[str, Any]:
        """Read the JSON file; a missing file is an empty configuration"""
        if not Path(self.config_file).exists():
            return {}
        with open(self.config_file, 'r', encoding='utf-8') as f:
            config_data = json.load(f)
        if not isinstance(config_data, dict):
            raise ConfigurationError(
                f"expected a JSON object, got {type(config_data).__name__}"
            )
        return config_data

    def get_config(self) -> BillingConfig:
        """Get current configuration"""
        return self._config

    def update_config(self, **kwargs) -> None:
        """Update configuration with new values; unknown keys are ignored"""
        known = {key: value for key, value in kwargs.items() if key in BillingConfig.model_fields}
        if known:
            try:
                self._config = BillingConfig(**{**self._config.model_dump(), **known})
            except ValidationError as e:
                raise ConfigurationError(f"Invalid configuration update: {e}") from e

    def save_config(self) -> None:
        """Save current configuration to file"""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self._config.model_dump(mode="json"), f, indent=2)

    def reset_to_defaults(self) -> None:
        """Reset configuration to defaults"""
        self._config = BillingConfig()

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

        if not self._config.currency_symbol:
            validation_results['warnings'].append("currency_symbol is empty")

        missing = [genre.value for genre in Genre if genre not in self._config.rules]
        if missing:
            validation_results['errors'].append(f"No rule for genres: {', '.join(missing)}")
            validation_results['valid'] = False

        for genre, rule in self._config.rules.items():
            if rule.base_amount == 0 and rule.amount_per_audience == 0:
                validation_results['warnings'].append(
                    f"Rule for {genre.value} charges nothing up to {rule.audience_threshold} seats"
                )
            if rule.over_capacity_per_person == 0 and rule.over_capacity_amount == 0:
                validation_results['warnings'].append(
                    f"Rule for {genre.value} charges nothing above {rule.audience_threshold} seats"
                )
            if rule.extra_volume_factor == 1:
                validation_results['warnings'].append(
                    f"Rule for {genre.value} awards a bonus credit for every seat"
                )

        return validation_results

    def get_environment_config(self) -> Dict[str, str]:
        """Get scalar configuration values from environment variables"""
        env_config = {}

        for field_name in BillingConfig.model_fields:
            if field_name == "rules":
                continue
            env_value = os.getenv(f"{ENV_PREFIX}{field_name.upper()}")
            if env_value is not None:
                env_config[field_name] = env_value

        return env_config


# Global configuration instance
config_manager = ConfigManager()


def get_config() -> BillingConfig:
    """Get the global configuration instance"""
    return config_manager.get_config()


def update_config(**kwargs) -> None:
    """Update the global configuration"""
    config_manager.update_config(**kwargs)
