import os
from typing import Any, Dict, Tuple, Type
from urllib.parse import urlparse

from loguru import logger
from pydantic import SecretStr, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    EnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .errors import ConfigError

DEFAULT_BASE_URL = 'https://api.themoviedb.org/3'
CONFIG_FILE = '6d.yaml'
TOKEN_ENV_PREFIX = 'TMDB_'
SERVICE_ENV_PREFIX = 'SIX_DEGREES_'
LEGACY_TOKEN_ENV = 'TMDB_TOKEN'


class TokenEnvSource(PydanticBaseSettingsSource):
    """Reads the bare TMDB_TOKEN variable into api_token."""

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> Tuple[Any, str, bool]:
        if field_name != 'api_token':
            return None, field_name, False
        return os.environ.get(LEGACY_TOKEN_ENV), field_name, False

    def __call__(self) -> Dict[str, Any]:
        token, _, _ = self.get_field_value(
            self.settings_cls.model_fields['api_token'], 'api_token')
        return {} if token is None else {'api_token': token}


class Settings(BaseSettings):
    base_url: str = DEFAULT_BASE_URL
    api_token: SecretStr = SecretStr('')
    request_timeout: float = 5.0
    log_level: str = 'INFO'
    host: str = '127.0.0.1'
    port: int = 8000

    model_config = SettingsConfigDict(
        yaml_file=CONFIG_FILE,
        extra='ignore',
        frozen=True,
    )

    @field_validator('base_url')
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ValueError(f"base_url must be an http(s) URL, got {value!r}")
        return value.rstrip('/')

    @field_validator('api_token')
    @classmethod
    def _require_token(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError('an API token is required')
        return value

    @field_validator('request_timeout')
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError('request_timeout must be positive')
        return value

    @field_validator('log_level')
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # First source wins: service env > TMDB_ env > TMDB_TOKEN > yaml > defaults
        return (
            init_settings,
            EnvSettingsSource(settings_cls, env_prefix=SERVICE_ENV_PREFIX),
            EnvSettingsSource(settings_cls, env_prefix=TOKEN_ENV_PREFIX),
            TokenEnvSource(settings_cls),
            YamlConfigSettingsSource(settings_cls),
        )


class EnvOnlySettings(Settings):
    model_config = SettingsConfigDict(yaml_file=None)


def load_settings(env_only: bool = False) -> Settings:
    """
    Merge defaults, the YAML config file and the TMDB_/SIX_DEGREES_
    environment variables into a single Settings value.

    :param env_only: Skip the YAML file and read the environment only.
    :return: The validated, immutable Settings.
    :raises ConfigError: If the merged values do not validate.
    """
    settings_cls = EnvOnlySettings if env_only else Settings
    try:
        settings = settings_cls()
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    # SecretStr renders the token as '**********'
    logger.info("Loaded configuration: {}", repr(settings))
    return settings
