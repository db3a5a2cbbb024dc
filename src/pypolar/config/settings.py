from pathlib import Path
from typing import Optional, ClassVar, List, Annotated
from pydantic import Field, ValidationError, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[3]
ENV_FILE = PROJECT_ROOT / "config.env"

PRODUCTION_URL = "https://api.polar.sh/v1"
SANDBOX_URL = "https://sandbox-api.polar.sh/v1"

MAX_PAGE_LIMIT = 100

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigurationError(RuntimeError):
    """Raised by get_settings() when required settings are missing or invalid."""


class AppConfig(BaseSettings):
    """
    Application configuration loaded from .env file and environment variables.
    """

    polar_access_token: Annotated[
        str,
        Field(
            ...,
            description="Your Polar organization access token, sent as a Bearer token",
        ),
    ]
    base_url: Optional[HttpUrl] = Field(
        None,
        description="Base URL for the Polar API (will be inferred from environment if not provided)",
    )
    environment: Optional[str] = Field(
        "production",
        description=(
            "Polar environment to target. One of: 'production' (default) or 'sandbox'. "
            "When set and base_url is not provided, base_url will be inferred."
        ),
    )
    log_level: Optional[str] = Field(
        "INFO",
        description="App logging level",
    )
    http_timeout: float = Field(
        30.0,
        gt=0,
        description="Timeout in seconds for a single HTTP request",
    )
    default_page_limit: int = Field(
        10,
        ge=1,
        le=MAX_PAGE_LIMIT,
        description="Page size used by list() when the caller does not pass one",
    )
    list_all_page_size: int = Field(
        MAX_PAGE_LIMIT,
        ge=1,
        le=MAX_PAGE_LIMIT,
        description="Page size used while walking a collection with list_all()",
    )
    page_retries: int = Field(
        0,
        ge=0,
        description="How often list_all() re-fetches a failed page before giving up",
    )
    user_agent: str = Field(
        "pypolar",
        description="User-Agent header sent with every request",
    )

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, **values):
        """
        This ensures tests can monkeypatch `pypolar.config.settings.ENV_FILE`
        """
        super().__init__(
            _env_file=ENV_FILE,
            _env_file_encoding="utf-8",
            **values,
        )

    @field_validator("polar_access_token")
    @classmethod
    def check_token(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Invalid Polar access token: must not be empty")

        if any(ch.isspace() for ch in v):
            raise ValueError("Invalid Polar access token: must not contain whitespace")

        return v

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: Optional[str]) -> str:
        level = (v or "INFO").strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}': use one of {', '.join(LOG_LEVELS)}")
        return level

    def model_post_init(self, __context) -> None:
        """Post-initialization to handle base_url inference."""
        if not self.base_url:
            self.base_url = HttpUrl(_infer_base_url_from_env(self.environment))

    @property
    def is_sandbox(self) -> bool:
        return str(self.base_url).rstrip("/") == SANDBOX_URL


def get_settings() -> AppConfig:
    """
    Load AppConfig from .env file and environment variables.
    """
    try:
        return AppConfig()
    except ValidationError as exc:
        missing_or_invalid: List[str] = []
        for err in exc.errors():
            loc = ".".join(str(x) for x in err["loc"])
            msg = err["msg"]
            missing_or_invalid.append(f"• {loc}: {msg}")

        detail = "\n".join(missing_or_invalid)
        raise ConfigurationError(
            f"\nConfiguration error: one or more required settings are missing or invalid:\n\n"
            f"{detail}\n\n"
            f"Please set them via environment variables or in `{ENV_FILE}`."
        ) from exc


def _infer_base_url_from_env(environment: str) -> str:
    """
    Infers the Polar API base URL from an environment string.

    Supported values (case-insensitive):
      - 'production'/'prod'/'live' (default): https://api.polar.sh/v1
      - 'sandbox'/'test':                      https://sandbox-api.polar.sh/v1

    Falls back to the production URL if the input is empty or unrecognized.
    """
    env = (environment or "").strip().lower()

    if env in ("sandbox", "test"):
        return SANDBOX_URL

    return PRODUCTION_URL
