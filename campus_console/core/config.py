"""
Console settings, read from the environment or a .env file.

The backend URL and public key are required; everything else has a default
suitable for a developer machine.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for one console process."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(default="Campus Marketplace Admin Console")
    version: str = Field(default="0.1.0")
    description: str = Field(default="Administrative console core for a campus marketplace")
    environment: Literal["development", "staging", "production"] = Field(default="development")
    debug: bool = Field(default=False)
    platform_name: str = Field(
        default="PU Connect",
        description="Marketplace name used in messages sent to users",
    )

    # -------------------------------------------------------------------------
    # Server Configuration
    # -------------------------------------------------------------------------
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)

    # -------------------------------------------------------------------------
    # Backend Configuration
    # -------------------------------------------------------------------------
    backend_url: str = Field(
        ...,
        description="Base URL of the hosted data backend (without /rest/v1)",
    )
    backend_anon_key: str = Field(..., min_length=1, description="Public API key of the backend")
    backend_access_token: Optional[str] = Field(
        default=None,
        description="Operator's access token for the direct-table path",
    )
    backend_timeout_seconds: float = Field(default=15.0, gt=0, le=120)

    @field_validator("backend_url")
    @classmethod
    def validate_backend_url(cls, v: str) -> str:
        """Require an http(s) URL and drop the trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("backend_url must start with http:// or https://")
        return v.rstrip("/")

    # -------------------------------------------------------------------------
    # Operator & Bypass Session
    # -------------------------------------------------------------------------
    operator_id: Optional[str] = Field(
        default=None,
        description="Identity id of the operator; only sent as reviewer when it is a UUID",
    )
    session_state_path: str = Field(
        default=".console/session.json",
        description="File holding the bypass flag, secret and token",
    )
    heartbeat_interval_seconds: float = Field(default=60.0, gt=0)

    @field_validator("operator_id")
    @classmethod
    def blank_operator_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()

    # -------------------------------------------------------------------------
    # Dashboard Statistics
    # -------------------------------------------------------------------------
    stats_poll_interval_seconds: float = Field(default=30.0, gt=0)

    # -------------------------------------------------------------------------
    # SMS Provider
    # -------------------------------------------------------------------------
    sms_enabled: bool = Field(default=False)
    sms_api_key: Optional[str] = Field(default=None)
    sms_sender: str = Field(default="PU Connect", max_length=11)
    sms_base_url: str = Field(default="https://sms.arkesel.com/api/v2")

    # -------------------------------------------------------------------------
    # Operator Notices
    # -------------------------------------------------------------------------
    notice_buffer_size: int = Field(default=50, ge=1, le=1000)

    # -------------------------------------------------------------------------
    # CORS Settings
    # -------------------------------------------------------------------------
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins"
    )
    cors_allow_credentials: bool = Field(default=True)

    # -------------------------------------------------------------------------
    # Logging Configuration
    # -------------------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )
    log_format: Literal["json", "console"] = Field(default="console")
    log_file_enabled: bool = Field(default=False)
    log_file_path: str = Field(default="logs/console.log")
    log_file_max_bytes: int = Field(default=10485760)  # 10 MB
    log_file_backup_count: int = Field(default=5)

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------
    @property
    def cors_origins_list(self) -> list[str]:
        """Allowed CORS origins, blanks dropped."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def sms_configured(self) -> bool:
        """SMS is enabled and has an API key."""
        return self.sms_enabled and bool(self.sms_api_key)


settings = Settings()
