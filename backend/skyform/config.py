from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Flight data service (RapidAPI)
    rapidapi_key: str = ""
    rapidapi_host: str = "sky-scrapper.p.rapidapi.com"
    flights_api_locale: str = "en-US"
    http_timeout_seconds: float = 30.0

    # Search form
    default_departure_country: str = "TUN"
    default_destination_country: str = "FRA"
    session_ttl_minutes: int = 60

    # App
    app_env: str = "development"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]

    class Config:
        env_file = ".env"


# Global instance shared across the project
settings = Settings()
