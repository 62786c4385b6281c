# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to the normalizers and the CLI.
#
# CLASSES:
# --------
# - NormalizerConfig (dataclass, frozen)
#     registry_epoch: str      (default "2010-01-14T01:41:08-08:00")
#     gravatar_base_url: str   (default "https://secure.gravatar.com/avatar/")
#     loose_semver: bool       (default True)
#
# - ClientConfig (dataclass, frozen)
#     registry_url: str        (default "https://registry.npmjs.org/")
#     timeout_seconds: float   (default 10.0)
#
# - AppConfig (dataclass)
#     normalizer: NormalizerConfig
#     client: ClientConfig
#     log_level: str           (default "WARNING")
#
# FUNCTIONS:
# ----------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Drop the singleton so the next get_config() reloads it.
#
# USAGE:
# ------
#   from registry_normalize.config import get_config
#   config = get_config()
#   print(config.normalizer.epoch)
#   print(config.client.registry_url)
#
# ==============================================

import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from dateutil import parser as date_parser
from dotenv import load_dotenv


# The date the registry document format was published; used when a package carries no dates.
REGISTRY_EPOCH = "2010-01-14T01:41:08-08:00"
GRAVATAR_BASE_URL = "https://secure.gravatar.com/avatar/"
REGISTRY_URL = "https://registry.npmjs.org/"

_TRUE_VARIANTS = {"1", "true", "yes", "on"}
_FALSE_VARIANTS = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class NormalizerConfig:
    """Read-only settings shared by every normalization call."""
    registry_epoch: str = REGISTRY_EPOCH
    gravatar_base_url: str = GRAVATAR_BASE_URL
    loose_semver: bool = True

    def __post_init__(self):
        # registry_epoch must parse to an aware datetime
        self._parse_epoch(self.registry_epoch)

    @property
    def epoch(self) -> datetime:
        """The fallback timestamp as an aware datetime."""
        return self._parse_epoch(self.registry_epoch)

    @staticmethod
    def _parse_epoch(value: str) -> datetime:
        try:
            parsed = date_parser.isoparse(value)
        except (ValueError, TypeError, OverflowError) as e:
            raise ValueError(f"Invalid registry epoch {value!r}: {e}") from e
        if parsed.tzinfo is None:
            raise ValueError(f"Registry epoch {value!r} must carry a UTC offset")
        return parsed


@dataclass(frozen=True)
class ClientConfig:
    """Registry client settings used by the CLI fetch command."""
    registry_url: str = REGISTRY_URL
    timeout_seconds: float = 10.0


@dataclass
class AppConfig:
    """Main application configuration."""
    normalizer: NormalizerConfig = field(default_factory=NormalizerConfig)
    client: ClientConfig = field(default_factory=ClientConfig)
    log_level: str = "WARNING"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VARIANTS:
        return True
    if value in _FALSE_VARIANTS:
        return False
    raise ValueError(f"Environment variable {name} must be a boolean, got {raw!r}")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"Environment variable {name} must be a number, got {raw!r}") from e


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration

    Raises:
        ValueError: If an environment value cannot be parsed
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    normalizer_config = NormalizerConfig(
        registry_epoch=os.getenv("REGISTRY_EPOCH", REGISTRY_EPOCH),
        gravatar_base_url=os.getenv("GRAVATAR_BASE_URL", GRAVATAR_BASE_URL),
        loose_semver=_env_bool("LOOSE_SEMVER", True),
    )

    client_config = ClientConfig(
        registry_url=os.getenv("REGISTRY_URL", REGISTRY_URL),
        timeout_seconds=_env_float("REGISTRY_TIMEOUT", 10.0),
    )

    _config_instance = AppConfig(
        normalizer=normalizer_config,
        client=client_config,
        log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
    )

    return _config_instance


def reset_config() -> None:
    """Forget the cached configuration."""
    global _config_instance
    _config_instance = None
