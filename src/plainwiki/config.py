"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path("data/pages")
    templates_dir: Path = Path(__file__).parent / "templates"
    debug: bool = False
    app_title: str = "PlainWiki"
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "info"

    model_config = SettingsConfigDict(
        env_prefix="PLAINWIKI_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
