"""Application settings and configuration."""

from decimal import Decimal
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from tradesim.domain.models.enums import QuoteCurrency


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".tradesim"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TRADESIM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Virtual Crypto Trading Demo"
    app_version: str = "0.1.0"

    # HTTP server
    host: str = "127.0.0.1"
    port: int = 8001

    # Data directory (the SQLite key-value slot lives here)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Ledger behavior
    starting_cash: Decimal = Decimal("10000")
    default_currency: QuoteCurrency = QuoteCurrency.USD
    state_key: str = "crypto_demo_state_v1"
    history_display_limit: int = 50

    # Price feed settings
    price_feed: Literal["coingecko", "stub"] = "coingecko"
    coingecko_base_url: str = "https://api.coingecko.com/api/v3"
    coins_to_show: int = 20
    request_timeout_seconds: float = 10.0
    chart_cache_ttl_seconds: int = 60
    chart_cache_max_entries: int = 64

    # Background price refresh
    poll_enabled: bool = True
    poll_interval_seconds: float = 30.0

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "tradesim.db"
        return f"sqlite:///{db_path}"

    def get_export_dir(self) -> Path:
        """Get the export directory for CSV files."""
        export_dir = self.get_data_dir() / "exports"
        export_dir.mkdir(parents=True, exist_ok=True)
        return export_dir


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
