from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "SongRank API"
    debug: bool = False
    log_level: str = "INFO"
    api_prefix: str = "/api"

    # Database
    database_url: str

    # Admin session (single shared password, signed cookie)
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    admin_session_expire_hours: int = 24
    admin_password_hash: Optional[str] = None  # bcrypt hash; unset = nobody can log in
    admin_cookie_name: str = "admin-auth"

    # Spotify API (Client Credentials flow)
    spotify_client_id: Optional[str] = None
    spotify_client_secret: Optional[str] = None

    # YouTube Data API v3
    youtube_api_key: Optional[str] = None
    metadata_timeout_seconds: float = 15.0  # Per request, both providers

    # Rankings
    catalog_fetch_timeout_seconds: float = 10.0
    rankings_page_size: int = 50
    songs_page_size: int = 50
    artist_min_song_count: int = 0  # 0 or 1 disables the minimum

    @property
    def cors_origins(self) -> list[str]:
        return ["*"] if self.debug else ["https://yourdomain.com"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
