"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    slack_verification_token: str
    slack_client_token: str
    flickr_api_key: str
    port: int = 3000
    flickr_base_url: str = "https://api.flickr.com/services/rest"
    slack_base_url: str = "https://slack.com/api"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
