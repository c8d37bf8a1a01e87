"""Portal configuration loaded from environment variables or a .env file."""
import os
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_BASE_DIR = os.path.abspath(os.path.dirname(__file__))
_ENV_FILE = os.path.join(_BASE_DIR, '.env')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PORTAL_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server collaborator (Laravel + Inertia backend)
    api_base_url: str = "http://localhost:8000"
    request_timeout: float = 30.0

    # An already-authenticated session cookie; the portal never logs in itself
    session_cookie_name: str = "laravel_session"
    session_cookie: Optional[str] = None

    preferences_dir: str = Field(
        default=os.path.join(_BASE_DIR, 'data'))
    default_per_page: int = 20
    log_level: str = "INFO"


settings = Settings()
