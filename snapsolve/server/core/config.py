"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class VisionAPIConfig(BaseModel):
    """Remote vision/search proxy configuration."""

    base_url: str = Field(
        default="https://render-proxy-psbm.onrender.com",
        alias="SNAPSOLVE_PROXY_BASE_URL",
        description="Base URL of the proxy serving /groq-vision and /search",
    )
    timeout: float = Field(default=60.0, alias="SNAPSOLVE_PROXY_TIMEOUT", description="HTTP timeout in seconds")
    max_prompt_length: int = Field(
        default=4000, alias="SNAPSOLVE_MAX_PROMPT_LENGTH", description="Maximum prompt length in characters"
    )
    max_image_base64_size: int = Field(
        default=10 * 1024 * 1024,
        alias="SNAPSOLVE_MAX_IMAGE_BASE64_SIZE",
        description="Maximum size of the base64 encoded image payload",
    )
    jpeg_quality: int = Field(default=80, alias="SNAPSOLVE_JPEG_QUALITY", description="JPEG quality for uploads")

    model_config = {"populate_by_name": True}


class CreditConfig(BaseModel):
    """Free credit and user preference storage configuration."""

    initial_credits: int = Field(
        default=2, alias="SNAPSOLVE_INITIAL_CREDITS", description="Free solver credits granted on first launch"
    )
    preferences_path: Path = Field(
        default=Path("snapsolve_preferences.json"),
        alias="SNAPSOLVE_PREFERENCES_PATH",
        description="JSON file holding credits, first-launch flag and language",
    )

    model_config = {"populate_by_name": True}


class PlanConfig(BaseModel):
    """Display prices of the subscription plans, used when no store backend supplies them."""

    weekly_price: Optional[str] = Field(
        default="$2.99", alias="SNAPSOLVE_WEEKLY_PRICE", description="Display price of the weekly plan"
    )
    yearly_price: Optional[str] = Field(
        default="$29.99", alias="SNAPSOLVE_YEARLY_PRICE", description="Display price of the yearly plan"
    )
    local_store_enabled: bool = Field(
        default=False,
        alias="SNAPSOLVE_LOCAL_STORE_ENABLED",
        description="Let the in-process store complete purchases without payment (development only)",
    )

    model_config = {"populate_by_name": True}


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # SnapSolve Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="SnapSolve server host address to bind to",
        alias="SNAPSOLVE_SERVER_HOST",
    )
    server_port: int = Field(
        default=8000,
        description="SnapSolve server port number",
        alias="SNAPSOLVE_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="SNAPSOLVE_LOG_LEVEL",
    )
    log_format: str = Field(default="detailed", description="simple, detailed or json", alias="SNAPSOLVE_LOG_FORMAT")
    log_file_dir: str = Field(default="logs", alias="SNAPSOLVE_LOG_FILE_DIR")
    enable_file_logging: bool = Field(default=False, alias="SNAPSOLVE_ENABLE_FILE_LOGGING")

    # =====================================================================
    # Database Configuration
    # =====================================================================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./snapsolve.db",
        description="Async connection URL for the application database",
        alias="DATABASE_URL",
    )

    # Flat fields backing the grouped configs below
    proxy_base_url: str = Field(default="https://render-proxy-psbm.onrender.com", alias="SNAPSOLVE_PROXY_BASE_URL")
    proxy_timeout: float = Field(default=60.0, alias="SNAPSOLVE_PROXY_TIMEOUT")
    max_prompt_length: int = Field(default=4000, alias="SNAPSOLVE_MAX_PROMPT_LENGTH")
    max_image_base64_size: int = Field(default=10 * 1024 * 1024, alias="SNAPSOLVE_MAX_IMAGE_BASE64_SIZE")
    jpeg_quality: int = Field(default=80, alias="SNAPSOLVE_JPEG_QUALITY")
    initial_credits: int = Field(default=2, alias="SNAPSOLVE_INITIAL_CREDITS")
    preferences_path: Path = Field(default=Path("snapsolve_preferences.json"), alias="SNAPSOLVE_PREFERENCES_PATH")
    weekly_price: Optional[str] = Field(default="$2.99", alias="SNAPSOLVE_WEEKLY_PRICE")
    yearly_price: Optional[str] = Field(default="$29.99", alias="SNAPSOLVE_YEARLY_PRICE")
    local_store_enabled: bool = Field(default=False, alias="SNAPSOLVE_LOCAL_STORE_ENABLED")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def vision(self) -> VisionAPIConfig:
        """Get proxy client configuration from environment variables."""
        return VisionAPIConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def credits(self) -> CreditConfig:
        """Get credit and preferences configuration from environment variables."""
        return CreditConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def plans(self) -> PlanConfig:
        """Get subscription plan configuration from environment variables."""
        return PlanConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
