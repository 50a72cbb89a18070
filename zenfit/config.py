from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./zenfit.db"
    default_tz: str = "Asia/Seoul"  # Device-local zone; streak dates are calendar days here
    kernel_api_key: str | None = None
    log_level: str = "INFO"

    # Persisted snapshot lives under a single fixed key
    state_key: str = "zenfit_state"
    state_table: str = "app_state"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
