from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from earningsfeed.core.errors import ConfigurationError

DEFAULT_BASE_URL = "https://earningsfeed.com"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 3


class Settings(BaseSettings):
    """EarningsFeed settings. Only used as fallback when explicit args aren't provided."""

    EARNINGSFEED_API_KEY: Optional[str] = None
    EARNINGSFEED_BASE_URL: str = DEFAULT_BASE_URL
    EARNINGSFEED_TIMEOUT: float = DEFAULT_TIMEOUT
    EARNINGSFEED_MAX_RETRIES: int = DEFAULT_MAX_RETRIES

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="allow"
    )


def get_settings() -> Settings:
    """Read settings from the environment (and ``.env``) at call time."""
    return Settings()


class ClientConfig(BaseModel):
    """Immutable configuration for one client instance."""

    api_key: str = Field(..., description="API key sent as a bearer token on every request")
    base_url: str = Field(DEFAULT_BASE_URL, description="API root, without trailing slash")
    timeout: float = Field(DEFAULT_TIMEOUT, description="Per-request timeout in seconds")
    max_retries: int = Field(DEFAULT_MAX_RETRIES, description="Total attempts per request, first included")

    model_config = ConfigDict(frozen=True)

    @field_validator("api_key")
    @classmethod
    def _api_key_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("API key cannot be empty")
        return value

    @field_validator("base_url")
    @classmethod
    def _base_url_is_http(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"base URL must start with http:// or https://, got {value!r}")
        return value.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def _timeout_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value

    @field_validator("max_retries")
    @classmethod
    def _at_least_one_attempt(cls, value: int) -> int:
        if value < 1:
            raise ValueError("max_retries must be at least 1")
        return value

    @classmethod
    def build(
        cls,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
    ) -> "ClientConfig":
        """Build a config from explicit values, falling back to settings for anything omitted.

        Raises:
            ConfigurationError: If no API key is available or a value is invalid.
        """
        if api_key is None or base_url is None or timeout is None or max_retries is None:
            try:
                settings = get_settings()
            except ValidationError as e:
                raise _configuration_error(e) from e
            api_key = api_key if api_key is not None else settings.EARNINGSFEED_API_KEY
            base_url = base_url or settings.EARNINGSFEED_BASE_URL
            timeout = timeout if timeout is not None else settings.EARNINGSFEED_TIMEOUT
            max_retries = max_retries if max_retries is not None else settings.EARNINGSFEED_MAX_RETRIES

        if api_key is None:
            raise ConfigurationError("API key is required")

        try:
            return cls(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=max_retries)
        except ValidationError as e:
            raise _configuration_error(e) from e


def _configuration_error(error: ValidationError) -> ConfigurationError:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    message = str(first["msg"]).removeprefix("Value error, ")
    return ConfigurationError(message, details={"field": field})
