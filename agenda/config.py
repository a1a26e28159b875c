"""
Centralized configuration with environment variable overrides.

Scheduling policy (slot cadence, retention of cancelled appointments,
default booking status) lives here instead of as literals in the engine.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from agenda.logging_context import RequestIdFilter

load_dotenv()

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class BusinessConfig:
    """Defaults for the business the demo and desks run against."""

    name: str = os.getenv("BUSINESS_NAME", "Studio Navalha")
    default_business_id: str = os.getenv("DEFAULT_BUSINESS_ID", "studio-navalha")


@dataclass(frozen=True)
class SchedulingConfig:
    """Slot generation and appointment retention policy."""

    slot_cadence_minutes: int = _safe_int("SLOT_CADENCE_MINUTES", "30")
    cancelled_retention_days: int = _safe_int("CANCELLED_RETENTION_DAYS", "30")
    default_appointment_status: str = os.getenv("DEFAULT_APPOINTMENT_STATUS", "confirmed")
    min_phone_digits: int = _safe_int("MIN_PHONE_DIGITS", "8")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    business: BusinessConfig = field(default_factory=BusinessConfig)
    scheduling: SchedulingConfig = field(default_factory=SchedulingConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "agenda")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    cadence = config.scheduling.slot_cadence_minutes
    if not 1 <= cadence <= MINUTES_PER_DAY // 2:
        raise ValueError(
            f"SLOT_CADENCE_MINUTES must be between 1 and {MINUTES_PER_DAY // 2}, got {cadence}"
        )
    if config.scheduling.cancelled_retention_days < 1:
        raise ValueError(
            "CANCELLED_RETENTION_DAYS must be >= 1, "
            f"got {config.scheduling.cancelled_retention_days}"
        )
    if config.scheduling.default_appointment_status not in ("pending", "confirmed"):
        raise ValueError(
            "DEFAULT_APPOINTMENT_STATUS must be 'pending' or 'confirmed', "
            f"got {config.scheduling.default_appointment_status!r}"
        )
    if not 4 <= config.scheduling.min_phone_digits <= 15:
        raise ValueError(
            f"MIN_PHONE_DIGITS must be between 4 and 15, got {config.scheduling.min_phone_digits}"
        )


LOG_FORMAT = "%(asctime)s [%(name)s] [%(request_id)s] %(levelname)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_log_handler() -> logging.Handler:
    """Console handler whose records always carry the current request ID."""
    handler = logging.StreamHandler()
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    return handler


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        handlers=[build_log_handler()],
    )
    logger.info("Configuration loaded for '%s'", config.business.name)
    return config


# Singleton instance
settings = load_config()
