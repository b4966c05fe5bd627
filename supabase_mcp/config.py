"""Server Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - Missing Supabase credentials never fail at load time; the backend reports them on first use

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Service key held as SecretStr: never rendered in logs or reprs
"""

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Server settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Supabase
    supabase_url: str | None = None
    supabase_service_key: SecretStr | None = None

    @field_validator("supabase_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        """Blank values count as unset; trailing slashes break REST paths."""
        if isinstance(v, str):
            v = v.strip().rstrip("/")
            return v or None
        return v

    # MCP
    server_name: str = "supabase-mcp-server"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def missing_backend_settings(self) -> list[str]:
        """Environment variable names that must be set before any backend call."""
        missing = []
        if not self.supabase_url:
            missing.append("SUPABASE_URL")
        if (
            self.supabase_service_key is None
            or not self.supabase_service_key.get_secret_value().strip()
        ):
            missing.append("SUPABASE_SERVICE_KEY")
        return missing


@lru_cache
def get_settings() -> Settings:
    return Settings()
