"""
Configuration management for the laboratory workflow tracker
"""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main configuration class combining all settings"""
    
    # Application settings
    app_name: str = "Hospital Lab Test Management"
    app_version: str = "1.0.0"
    environment: str = "development"
    
    # Database configuration (process-scoped, nothing survives exit)
    database_url: str = "sqlite://"
    database_echo: bool = False
    
    # Logging configuration
    log_level: str = "INFO"
    log_file: str = "logs/labtrack.log"
    log_to_file: bool = False
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    
    # Startup data
    seed_demo_data: bool = True
    
    # Invoicing
    currency: str = "INR"
    
    model_config = SettingsConfigDict(
        env_prefix="LABTRACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        if v not in ['development', 'testing', 'production']:
            raise ValueError('Environment must be development, testing, or production')
        return v
    
    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']:
            raise ValueError(f'Unknown log level: {v}')
        return level
    
    @field_validator('database_url')
    @classmethod
    def validate_database_url(cls, v):
        if v not in ('sqlite://', 'sqlite:///:memory:'):
            raise ValueError('Only an in-memory SQLite database is supported')
        return v
    
    @property
    def is_production(self) -> bool:
        return self.environment == "production"
    
    @property
    def is_development(self) -> bool:
        return self.environment == "development"
    
    def create_log_directory(self):
        """Create log directory if it doesn't exist"""
        log_dir = Path(self.log_file).parent
        log_dir.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()
