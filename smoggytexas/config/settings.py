"""Application settings

Settings are loaded in order of precedence (highest to lowest):
1. Values passed to the constructor (command line overrides)
2. Environment variables (SMOGGYTEXAS_*)
3. Config file (~/.smoggytexas/config.toml)
4. Default values
"""

import sys
from pathlib import Path
from typing import Any, Type

from pydantic import ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from smoggytexas.exceptions import ConfigurationError

# Import tomllib (Python 3.11+) or tomli (Python 3.10)
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".smoggytexas" / "config.toml"


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from TOML config file."""

    def get_field_value(
        self, field: Any, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get field value from TOML config."""
        config_data = self._load_config()
        if field_name in config_data:
            return config_data[field_name], field_name, False
        return None, field_name, False

    def _load_config(self) -> dict:
        """Load config from TOML file."""
        if not hasattr(self, '_config_cache'):
            self._config_cache = {}
            config_path = get_config_path()
            if config_path.exists():
                try:
                    with open(config_path, "rb") as f:
                        self._config_cache = tomllib.load(f)
                except (OSError, tomllib.TOMLDecodeError) as e:
                    raise ConfigurationError(
                        f"Cannot read config file {config_path}: {e}"
                    ) from e
        return self._config_cache

    def __call__(self) -> dict[str, Any]:
        """Return all settings from config file."""
        return self._load_config()


class Settings(BaseSettings):
    """Application settings

    Settings can be configured via:
    - Environment variables: SMOGGYTEXAS_<SETTING_NAME>
    - Config file: ~/.smoggytexas/config.toml

    Example config.toml:
        aws_profile = "my-profile"
        exclude_region_prefixes = "us-gov,cn-"
        max_concurrent = 15
    """

    model_config = ConfigDict(
        env_prefix="SMOGGYTEXAS_",
        case_sensitive=False
    )

    aws_profile: str | None = None
    catalog_region: str = "us-east-1"  # Region used to list all other regions

    # Comma-separated region code prefixes to skip ("" = query every region)
    exclude_region_prefixes: str = ""

    # Dispatch configuration
    max_concurrent: int = Field(10, ge=1)  # Max regions queried at the same time
    query_timeout: float = Field(5.0, gt=0)  # Per-region deadline in seconds

    # botocore client configuration (in seconds)
    aws_connect_timeout: int = Field(5, ge=1)
    aws_read_timeout: int = Field(5, ge=1)
    max_pool_connections: int = Field(10, ge=1)

    product_description: str = "Linux/UNIX"
    output_format: str = "text"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources order.

        Order (highest to lowest priority):
        1. Init settings (passed to constructor)
        2. Environment variables
        3. TOML config file
        """
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )


def load_settings(**overrides: Any) -> Settings:
    """Build Settings, dropping overrides that were not supplied.

    Args:
        **overrides: Field values from the command line; None means "not set"

    Returns:
        Resolved settings

    Raises:
        ConfigurationError: If any resolved value is invalid
    """
    supplied = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(**supplied)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigurationError(f"Invalid settings: {problems}") from e


def create_default_config() -> str:
    """Generate default config file content."""
    return '''# smoggytexas configuration
# Place this file at ~/.smoggytexas/config.toml

# AWS Configuration
# aws_profile = "default"
# catalog_region = "us-east-1"

# Regions to skip, as comma-separated code prefixes
# exclude_region_prefixes = "us-gov,cn-"

# Dispatch Configuration
# max_concurrent = 10           # Regions queried at the same time
# query_timeout = 5.0           # Per-region deadline in seconds

# botocore Client Configuration (in seconds)
# aws_connect_timeout = 5
# aws_read_timeout = 5
# max_pool_connections = 10

# Output Configuration
# product_description = "Linux/UNIX"
# output_format = "text"        # text, table, json or csv
'''
