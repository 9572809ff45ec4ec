import json
import logging
import os
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

CONFIG_PATH = os.getenv("CONFIG_PATH", "config.json")

class DownloadConfig(BaseModel):
    temp_dir: str = Field(default="temp", description="Temp directory for subprocess artifacts (relative to cwd)")
    timeout_seconds: int = Field(default=300, ge=1, description="Hard timeout for the yt-dlp download process")
    title_timeout_seconds: float = Field(default=30.0, gt=0, description="Timeout for the title lookup")
    socket_timeout: int = Field(default=10, ge=1, description="Socket timeout for yt-dlp and the upstream client")
    chunk_size: int = Field(default=256 * 1024, ge=1024, description="Relay chunk size in bytes")

class YtDlpConfig(BaseModel):
    binary: str = Field(default="yt-dlp", description="yt-dlp executable name or path")
    no_update: bool = Field(default=True, description="Suppress yt-dlp self-update checks")
    update_env_var: str = Field(default="YTDL_NO_UPDATE", description="Environment flag set at startup")

class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    format: str = Field(default="%(message)s", description="Log format")
    enable_rich: bool = Field(default=True, description="Enable rich console logging")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

class I18nConfig(BaseModel):
    default_locale: str = Field(default="en", description="Default locale")
    supported_locales: list = Field(default=["en", "ja"], description="Supported locales")

class ApiConfig(BaseModel):
    title: str = Field(default="YouTube Downloader API", description="API title")
    version: str = Field(default="1.0.0", description="API version")
    cors_origins: list = Field(default=["*"], description="CORS allowed origins")
    debug: bool = Field(default=False, description="Enable debug mode")

class Config(BaseSettings):
    """Main configuration model"""
    model_config = SettingsConfigDict(env_nested_delimiter="__", extra="ignore")

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3000, ge=1, le=65535, description="HTTP port")
    engine: Literal["library", "subprocess"] = Field(default="library", description="Extraction engine")
    download: DownloadConfig = Field(default_factory=DownloadConfig)
    ytdlp: YtDlpConfig = Field(default_factory=YtDlpConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    i18n: I18nConfig = Field(default_factory=I18nConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

    @classmethod
    def load_from_file(cls, config_path: str = "config.json") -> "Config":
        """Load configuration from JSON file, environment fills the gaps"""
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config_data = json.load(f)
            logger.info(f"Configuration loaded from {config_path}")
            return cls(**config_data)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load config from {config_path}: {str(e)}")
            logger.info("Using environment configuration")
            return cls()

def load_config() -> Config:
    """Load configuration with priority: config.json > env vars > defaults"""
    if os.path.exists(CONFIG_PATH):
        return Config.load_from_file(CONFIG_PATH)
    return Config()

# Global config instance
config = load_config()
