from pydantic_settings import BaseSettings, SettingsConfigDict

from biomarker_engine.interpretation.models import Gender


class Settings(BaseSettings):
    """Engine configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    default_gender: Gender = Gender.MALE
    context_history_limit: int = 5
    output_indent: int = 2
