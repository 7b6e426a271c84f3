"""
Core settings and environment variables for Nagrik Seva.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Create a .env file in the root directory to configure these.
    """
    
    # Application
    APP_NAME: str = "Nagrik Seva"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # All issue/message/analyze routes are mounted under this prefix
    API_PREFIX: str = "/api"
    
    # CORS - Frontend URLs allowed to access this API
    # In production set this to your exact origin(s).
    CORS_ORIGINS: str = "http://localhost:5000,http://localhost:5173,http://127.0.0.1:5173"
    
    # Seed the in-memory store with the demo issues and greeting message
    SEED_DEMO_DATA: bool = True
    
    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"
    
    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
