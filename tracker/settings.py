from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="TRACKER_", extra="ignore")

    db_url: str = "sqlite:///tracker.db"

    log_level: str = "INFO"
    log_json: bool = False

    hours_per_day: int = 8
    include_submitted_timesheets: bool = True

    export_dir: str = "./exports"


settings = Settings()
