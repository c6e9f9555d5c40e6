"""Configuration management for URL shortener."""

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""
    
    # Storage settings
    store_path: str = Field(
        default="urls.json",
        description="Path of the JSON file holding the URL records"
    )
    
    static_dir: str = Field(
        default="frontend/build",
        description="Directory served for paths that are neither API calls nor short codes"
    )
    
    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )
    
    port: int = Field(
        default=8080,
        description="Port to listen on"
    )
    
    cors_origins: List[str] = Field(
        default=["*"],
        description="Origins allowed by the CORS middleware"
    )
    
    # URL shortener settings
    max_collision_retries: int = Field(
        default=100,
        ge=1,
        description="Random adjective-noun draws before picking from the unused pairs"
    )
    
    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    
    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )
    
    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )
    
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
