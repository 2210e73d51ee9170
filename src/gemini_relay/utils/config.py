"""
Service settings loaded from the process environment.

Each field reads the upper-cased variable of the same name, e.g. `PORT`.
A `.env` file in the working directory is read too; real environment
variables win over it, and empty values fall back to the defaults.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gemini_relay.models.errors import ConfigurationError

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_PORT = 3000
DEFAULT_STATIC_DIR = str(Path(__file__).resolve().parent.parent / "public")

class Settings(BaseSettings):
    gemini_api_key: Optional[str] = Field(
        default=None,
        description="Gemini API key",
    )
    gemini_model: str = Field(
        default=DEFAULT_MODEL,
        description="Model identifier sent with every request",
    )
    host: str = Field(
        default="0.0.0.0",
        description="Interface the server binds to",
    )
    port: int = Field(
        default=DEFAULT_PORT,
        gt=0,
        lt=65536,
        description="Port the server listens on",
    )
    upload_dir: Optional[str] = Field(
        default=None,
        description="Directory for transient upload copies; system temp if unset",
    )
    static_dir: str = Field(
        default=DEFAULT_STATIC_DIR,
        description="Directory served as the browser client",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level name",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    def require_api_key(self) -> str:
        if not self.gemini_api_key:
            raise ConfigurationError("GEMINI_API_KEY is not set")
        return self.gemini_api_key
