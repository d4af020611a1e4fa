from datetime import datetime
from functools import lru_cache
from zoneinfo import ZoneInfo

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CATEGORIES = ("comment", "error", "homework", "practice", "question", "review")


class ExportRound(BaseModel):
    label: str
    column_id: str
    ends_at: datetime


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Rollcall"
    app_env: str = "dev"
    app_version: str = "0.1.0"
    api_v1_prefix: str = ""

    database_url: str = "sqlite+pysqlite:///./rollcall.db"
    timezone: str = "UTC"
    log_level: str = "INFO"

    enrolled_status: str = "enrolled"
    dropped_status: str = "dropped"
    default_categories: list[str] = list(DEFAULT_CATEGORIES)

    scoring_policy: str = "count"  # count | weighted
    category_weights: dict[str, int] = {}

    roster_encoding: str = "utf-16-le"
    roster_delimiter: str = "\t"
    export_rounds: list[ExportRound] = []

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def clear_settings_cache() -> None:
    get_settings.cache_clear()
