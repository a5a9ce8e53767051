from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PROACT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "PrOACT Decision Engine"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    json_logs: bool = True  # env: PROACT_JSON_LOGS, False for ConsoleRenderer in dev

    # Decision quality
    dq_improvement_threshold: int = 70  # elements below this get an improvement suggestion
    dq_acceptable_threshold: int = 80  # every element at or above this = acceptable decision


@lru_cache
def get_settings() -> Settings:
    return Settings()
