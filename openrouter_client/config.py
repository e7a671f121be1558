import os
from typing import Optional

import requests
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ConfigError

load_dotenv()

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"


class ClientConfig(BaseModel):
    api_key: str = Field(
        ...,
        description="OpenRouter API key (REQUIRED)"
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="API root; endpoint suffixes are appended verbatim"
    )

    http_referer: str = Field(
        default="",
        description="Site URL sent as HTTP-Referer for attribution"
    )

    x_title: str = Field(
        default="",
        description="Site name sent as X-Title for attribution"
    )

    session: requests.Session = Field(
        default_factory=requests.Session,
        description="Transport handle shared by all calls of one client"
    )

    request_timeout: float = Field(
        default=120.0,
        gt=0,
        description="Per-attempt network timeout in seconds"
    )

    max_retries: int = Field(
        default=3,
        ge=0,
        description="Additional attempts after the first one fails"
    )

    initial_backoff: float = Field(
        default=1.0,
        ge=0,
        description="Delay before the first retry; doubles per retry"
    )

    max_backoff: Optional[float] = Field(
        default=None,
        description="Upper bound on the pre-jitter backoff (None = unbounded)"
    )

    @field_validator('api_key')
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        if not v or v.strip() == '':
            raise ValueError(
                "OPENROUTER_API_KEY is required. "
                "Get your key at: https://openrouter.ai/keys"
            )
        return v.strip()

    @field_validator('base_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip('/')

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
    )

    @classmethod
    def from_env(cls, **overrides) -> "ClientConfig":
        if not (overrides.get('api_key') or os.getenv('OPENROUTER_API_KEY', '').strip()):
            raise ConfigError("OPENROUTER_API_KEY not set (export it or add it to .env)")

        values = {
            'api_key': os.getenv('OPENROUTER_API_KEY', ''),
            'base_url': os.getenv('OPENROUTER_BASE_URL', DEFAULT_BASE_URL),
            'http_referer': os.getenv('OPENROUTER_SITE_URL', ''),
            'x_title': os.getenv('OPENROUTER_SITE_NAME', ''),
        }
        # Numeric settings fall back to field defaults when unset
        for field_name, env_var in (
            ('request_timeout', 'OPENROUTER_TIMEOUT'),
            ('max_retries', 'OPENROUTER_MAX_RETRIES'),
            ('initial_backoff', 'OPENROUTER_INITIAL_BACKOFF'),
        ):
            raw = os.getenv(env_var)
            if raw:
                values[field_name] = raw
        values.update(overrides)
        return cls(**values)


def default_config(api_key: str, x_title: str = "", http_referer: str = "") -> ClientConfig:
    return ClientConfig(api_key=api_key, x_title=x_title, http_referer=http_referer)
