from typing import Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Booking Admin Dashboard"
    ENVIRONMENT: str = "development"

    # Backend REST API
    API_URL: str = "http://localhost:8000/api"
    API_TOKEN: str = ""
    REQUEST_TIMEOUT: Optional[float] = None

    # Access
    ADMIN_ROLE: str = "admin"
    USER_DASHBOARD_URL: str = "/dashboard"

    # Page defaults (restrictions seed, labels)
    DASHBOARD_CONFIG_PATH: str = "data/dashboard_config.json"

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
