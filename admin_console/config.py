# admin_console/config.py

from dotenv import load_dotenv
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()  # .env first, then the process environment wins

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    # environment
    app_env: str = "local"
    log_level: str = "INFO"

    # Supabase (the console talks to the backend only through this project)
    supabase_url: str | None = None                 # SUPABASE_URL
    supabase_service_role_key: str | None = None    # SUPABASE_SERVICE_ROLE_KEY
    supabase_jwt_secret: str | None = None          # SUPABASE_JWT_SECRET
    supabase_issuer: str | None = None              # SUPABASE_ISSUER
    supabase_jwt_audience: str = "authenticated"    # SUPABASE_JWT_AUDIENCE

    # CORS for the browser console
    cors_allow_origins: list[str] = ["*"]

    # list / report sizing
    report_timezone: str = "UTC"
    list_limit: int = 100
    photo_list_limit: int = 50
    analytics_window_days: int = 30

    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
