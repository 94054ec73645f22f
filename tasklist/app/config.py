from functools import lru_cache
from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_ID_POLICIES = ("sequence", "max_plus_one")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # SQLAlchemy URL for the task table
    database_url: str = Field("sqlite:///./tasklist.db")

    # How new task ids are allocated:
    # - "sequence": the database autoincrement assigns the id on insert
    # - "max_plus_one": read max(id) and insert max + 1 (racy under concurrent creates)
    task_id_policy: Literal["sequence", "max_plus_one"] = Field("sequence")

    api_prefix: str = Field("/api")
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])
    app_log_level: str = Field("INFO")

    @field_validator("task_id_policy", mode="before")
    @classmethod
    def normalize_policy(cls, v):
        if isinstance(v, str):
            return v.strip().lower().replace("-", "_")
        return v

    @field_validator("api_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        v = "/" + v.strip().strip("/")
        return "" if v == "/" else v


@lru_cache()
def get_settings() -> Settings:
    return Settings()
