"""
Configuration management - loads settings from YAML and environment variables
"""

import os
from pathlib import Path
from functools import lru_cache
from typing import Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

from jobtracker.core.filters import SortOrder

# Load environment variables
load_dotenv()

CONFIG_ENV_VAR = "JOBTRACKER_CONFIG"
DEFAULT_CONFIG_PATH = Path("config/settings.yaml")


class DatabaseConfig(BaseModel):
    """Database settings"""
    path: str = "data/applications.db"
    echo: bool = False


class LoggingConfig(BaseModel):
    """Logging settings"""
    level: str = "INFO"
    file: str = "logs/jobtracker.log"
    max_size: int = 10
    backup_count: int = 5


class DisplayConfig(BaseModel):
    """How listings are rendered"""
    locale: str = "en_US"
    default_sort: Optional[SortOrder] = SortOrder.DATE_DESCENDING


class NotificationsConfig(BaseModel):
    """Interview reminder settings"""
    enabled: bool = True
    reminder_lead_hours: int = 24


class Settings(BaseSettings):
    """
    Main settings class that combines YAML config with environment variables.
    Environment variables take precedence.
    """
    # From environment variables
    ntfy_topic: str = Field(default="", alias="NTFY_TOPIC")

    # From YAML config
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    notifications: NotificationsConfig = Field(default_factory=NotificationsConfig)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @classmethod
    def load(cls, config_path: Optional[str | Path] = None) -> "Settings":
        """
        Load settings from YAML file and merge with environment variables.
        """
        if config_path is None:
            config_path = Path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH))
        else:
            config_path = Path(config_path)

        yaml_config = {}
        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}

        return cls(**yaml_config)

    def ensure_directories(self) -> None:
        """Create the data and log directories if they don't exist"""
        for path in (self.database.path, self.logging.file):
            Path(path).parent.mkdir(parents=True, exist_ok=True)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Call this function to access settings throughout the application.
    """
    settings = Settings.load()
    settings.ensure_directories()
    return settings
