"""Application configuration."""
import os
from dataclasses import dataclass
from typing import Optional

from aepmeta.errors import ConfigError


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class DerivationConfig:
    """Settings for the validation pass."""

    max_parent_depth: int = 32
    extension_name: str = "x-aep-resource"
    error_type_base_url: str = "https://example.com/errors"
    fail_on_warnings: bool = False

    @classmethod
    def from_env(cls) -> "DerivationConfig":
        """Load config from environment variables."""
        return cls(
            max_parent_depth=_env_int("AEP_MAX_PARENT_DEPTH", 32),
            extension_name=os.getenv("AEP_EXTENSION_NAME", "x-aep-resource"),
            error_type_base_url=os.getenv(
                "AEP_ERROR_TYPE_BASE_URL", "https://example.com/errors"
            ),
            fail_on_warnings=_env_flag("AEP_FAIL_ON_WARNINGS"),
        )


@dataclass
class LoaderConfig:
    """Settings for fetching service graph documents."""

    api_key: str = ""  # Read from environment
    timeout: int = 30

    @classmethod
    def from_env(cls) -> "LoaderConfig":
        """Load config from environment variables."""
        return cls(
            api_key=os.getenv("AEP_GRAPH_API_KEY", ""),
            timeout=_env_int("AEP_GRAPH_TIMEOUT", 30),
        )


@dataclass
class AppConfig:
    """Application configuration."""

    output_dir: str = "./output"
    derivation: Optional[DerivationConfig] = None
    loader: Optional[LoaderConfig] = None

    def __post_init__(self):
        """Fill in defaults."""
        if self.derivation is None:
            self.derivation = DerivationConfig.from_env()
        if self.loader is None:
            self.loader = LoaderConfig.from_env()

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load config from environment variables."""
        return cls(
            output_dir=os.getenv("AEP_OUTPUT_DIR", "./output"),
            derivation=DerivationConfig.from_env(),
            loader=LoaderConfig.from_env(),
        )


def load_config() -> AppConfig:
    """
    Load the application configuration from the environment

    Raises:
        ConfigError: If a numeric variable does not parse
    """
    return AppConfig.from_env()
