"""Configuration management for shortlinks."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field, model_validator


class Config(BaseSettings):
    """Application configuration."""
    
    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )
    
    port: int = Field(
        default=3000,
        description="Port to listen on"
    )
    
    # Admin API
    admin_key: str = Field(
        default="admin123",
        description="Shared secret required by /api routes (X-API-Key header or ?key=)"
    )
    
    base_url: Optional[str] = Field(
        default=None,
        description="Externally visible base URL for short links (defaults to http://localhost:<port>)"
    )
    
    # Storage settings
    store_backend: str = Field(
        default="auto",
        description="Link store backend: auto, mongo, postgres or json"
    )
    
    mongo_uri: Optional[str] = Field(
        default=None,
        description="MongoDB connection string"
    )
    
    mongo_database: str = Field(
        default="shortlinks",
        description="MongoDB database name"
    )
    
    mongo_collection: str = Field(
        default="links",
        description="MongoDB collection holding links"
    )
    
    postgres_url: Optional[str] = Field(
        default=None,
        description="PostgreSQL connection URL"
    )
    
    json_store_path: str = Field(
        default="links.json",
        description="Path of the JSON link file"
    )
    
    json_store_strict: bool = Field(
        default=False,
        description="Fail on a corrupt JSON link file instead of starting empty"
    )
    
    # Slug settings
    slug_length: int = Field(
        default=7,
        ge=1,
        description="Length of generated slugs"
    )
    
    bulk_suffix_length: int = Field(
        default=6,
        ge=1,
        description="Random suffix length for prefixed bulk slugs"
    )
    
    max_slug_retries: int = Field(
        default=5,
        ge=1,
        description="Maximum attempts when generating a free slug"
    )
    
    # Limits
    bulk_max_count: int = Field(
        default=5000,
        description="Maximum links per bulk request"
    )
    
    list_default_limit: int = Field(
        default=100,
        ge=1,
        description="Default page size for /api/list"
    )
    
    list_max_limit: int = Field(
        default=1000,
        ge=1,
        description="Maximum page size for /api/list"
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
    
    # Keep-alive settings
    keepalive_url: Optional[str] = Field(
        default=None,
        description="URL to ping periodically so the host does not idle the process"
    )
    
    keepalive_interval_seconds: float = Field(
        default=600,
        gt=0,
        description="Seconds between keep-alive pings"
    )
    
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }
    
    @model_validator(mode="after")
    def default_base_url(self) -> "Config":
        """Derive the base URL from the port when it isn't configured."""
        if not self.base_url:
            self.base_url = f"http://localhost:{self.port}"
        return self


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
