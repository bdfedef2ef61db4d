from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from pathlib import Path
from typing import Optional

# Repository root, where resume.pdf lives next to the package
BACKEND_DIR = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    # Runtime mode - "development" exposes error details in responses
    app_env: str = Field("production", validation_alias=AliasChoices("APP_ENV", "NODE_ENV"))
    log_level: str = "INFO"

    # Email provider - a well-known SMTP service name, "smtp" or "resend"
    email_service: str = "gmail"
    email_user: Optional[str] = None
    email_pass: Optional[str] = None
    email_host: Optional[str] = None
    email_port: Optional[int] = None
    email_secure: Optional[bool] = None
    email_timeout: float = 10.0

    # Owner inbox, falls back to the sending account
    contact_recipient: Optional[str] = None

    # Resume download
    resume_path: Path = BACKEND_DIR / "resume.pdf"
    resume_download_name: str = "Sayyedain_Saqlain_Resume.pdf"

    # CORS settings
    allowed_origins: list[str] = ["*"]

    @property
    def is_development(self) -> bool:
        return self.app_env.strip().lower() == "development"

    @property
    def effective_recipient(self) -> Optional[str]:
        """Address contact submissions are delivered to (the site owner)."""
        return self.contact_recipient or self.email_user


@lru_cache
def get_settings():
    return Settings()
