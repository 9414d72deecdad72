import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parents[2] / ".env")

ROOT = Path(__file__).resolve().parents[3]


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_env: str
    database_url: str
    cors_origins: str
    log_level: str

    def parsed_cors_origins(self) -> list[str]:
        return [item.strip() for item in self.cors_origins.split(",") if item.strip()]

    def allows_any_origin(self) -> bool:
        return "*" in self.parsed_cors_origins()


def get_settings() -> Settings:
    return Settings(
        app_name=os.getenv("APP_NAME", "Tracker API"),
        app_env=os.getenv("APP_ENV", "dev"),
        database_url=os.getenv("DATABASE_URL", f"sqlite:///{ROOT / 'tracker.db'}"),
        cors_origins=os.getenv("CORS_ORIGINS", "*"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


@dataclass(frozen=True)
class ClientSettings:
    api_url: str
    cache_path: Path
    timeout: float


def get_client_settings() -> ClientSettings:
    return ClientSettings(
        api_url=os.getenv("TRACKER_API_URL", "http://localhost:8000/api"),
        cache_path=Path(os.getenv("TRACKER_CACHE_PATH", "~/.tracker/cache.json")).expanduser(),
        timeout=float(os.getenv("TRACKER_TIMEOUT", "10")),
    )
