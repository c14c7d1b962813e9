from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None
    oauth_redirect_url: Optional[str] = None  # deep link the mobile app registers with Supabase

    # Itinerary backend (LLM-backed)
    itinerary_api_url: str = "https://voyagehub-backend.onrender.com"

    # OpenStreetMap / Wikipedia
    nominatim_url: str = "https://nominatim.openstreetmap.org"
    nominatim_min_interval: float = 1.1  # seconds between requests, Nominatim allows ~1/s
    wikipedia_summary_url: str = "https://en.wikipedia.org/api/rest_v1/page/summary"
    user_agent: str = "VoyageHub-App/1.0"

    http_timeout: float = 60.0  # LLM calls on the free tier can be slow to wake up

    # Destination catalog (defaults to the bundled voyagehub/data/destinations.json)
    destinations_path: Optional[str] = None

    # App
    app_name: str = "voyagehub-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:8081,http://localhost:19006,http://127.0.0.1:8081"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore"
    )


settings = Settings()
