"""Application configuration via environment variables."""
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "DearGuest"
    debug: bool = False
    secret_key: str = "change-me-in-production"
    token_max_age_days: int = 7

    # Server
    host: str = "0.0.0.0"  # Bind to all interfaces for external access
    port: int = 8000
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all

    # Database
    database_url: str = "sqlite:///./dearguest.db"

    # Passwords
    bcrypt_rounds: int = 10

    # First main admin, created at startup when none exists
    main_admin_email: str = ""
    main_admin_password: str = ""

    # Invite link previews
    site_title: str = "DearGuest | Your guestlist runs itself"
    site_description: str = (
        "One link. Guests RSVP, you see who opened and who's pending. "
        "Built for weddings and events."
    )
    site_name: str = "DearGuest"
    share_description: str = "You're invited. View your invitation and RSVP."
    frontend_script: str = "/assets/index.js"

    # Logging
    log_dir: str = str(Path.home() / ".logs" / "dearguest")

    @property
    def token_max_age_seconds(self) -> int:
        return self.token_max_age_days * 24 * 60 * 60

    @property
    def origins(self) -> list[str]:
        if self.allowed_origins == "*":
            return ["*"]
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
