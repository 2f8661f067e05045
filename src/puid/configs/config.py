"""Configuration management using pydantic-settings.

**Not a singleton**: each call to ``get_puid_config()`` re-reads config
from disk and the environment.  The default generator reads it once when
it is first built.

Priority order (highest first):

1. Override YAML (path from ``PUID_CONFIG_FILE`` env var)
2. Environment variables (``PUID_`` prefix, ``__`` for nesting)
3. ``.env`` dotenv file
4. Static YAML (``configs/puid.yaml`` relative to the working directory)
5. Init defaults / field defaults
6. File secrets
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .system import GeneratorConfig, LoggingConfig

# ---------------------------------------------------------------------------
# Path constants
# ---------------------------------------------------------------------------

CONFIG_DIR = Path("configs")
STATIC_CONFIG_FILE = CONFIG_DIR / "puid.yaml"
DOTENV_FILE_PATH = Path(".env")

OVERRIDE_CONFIG_ENV = "PUID_CONFIG_FILE"
ENV_DELIMITER = "__"  # Nested environment variable delimiter
ENV_PREFIX = "PUID_"

DEFAULT_ENCODING = "utf-8"


def _override_config_file() -> Optional[Path]:
    value = os.environ.get(OVERRIDE_CONFIG_ENV)
    return Path(value) if value else None


class PuidConfig(BaseSettings):
    """Top-level configuration."""

    model_config = SettingsConfigDict(
        env_file=DOTENV_FILE_PATH,
        env_file_encoding=DEFAULT_ENCODING,
        env_nested_delimiter=ENV_DELIMITER,
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
        yaml_file=STATIC_CONFIG_FILE,
        yaml_file_encoding=DEFAULT_ENCODING,
    )

    generator: GeneratorConfig = Field(
        default_factory=GeneratorConfig,
        description="Identifier generator settings",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = []

        # 1. Override YAML -- highest priority
        override = _override_config_file()
        if override is not None and override.is_file():
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=override))

        # 2-3. Env vars and dotenv
        sources.append(env_settings)
        sources.append(dotenv_settings)

        # 4. Static YAML
        sources.append(YamlConfigSettingsSource(settings_cls))

        # 5-6. Init defaults and file secrets
        sources.append(init_settings)
        sources.append(file_secret_settings)

        return tuple(sources)


def get_puid_config() -> PuidConfig:
    """Load the configuration from all sources."""
    return PuidConfig()
