from pydantic_settings import BaseSettings
from typing import List, Literal


class Settings(BaseSettings):
    gemini_api_key: str = "PLACEHOLDER_GEMINI_KEY"
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Storage
    db_path: str = "prospector.db"
    persist_session: bool = True  # resume the logged-in user across restarts

    # Lead search
    leads_per_profile: int = 10
    search_failure_mode: Literal["all_or_nothing", "partial"] = "all_or_nothing"
    export_filename: str = "airtech_leads_report.csv"

    # Gemini settings
    gemini_model: str = "gemini-2.5-flash"
    gemini_temperature: float = 0.2
    grounding_tool: Literal["google_search", "google_maps"] = "google_maps"

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
