from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import ValidationError, field_validator, Field
from typing import Optional
from urllib.parse import urlparse


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "HRMS Admin Console"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = Field(default=False, description="Enable debug mode (set to false in production)")
    ENVIRONMENT: str = Field(default="production", description="Environment: development, staging, production")

    # HRMS backend
    HRMS_API_BASE_URL: str = Field(..., description="Base URL of the HRMS REST API, e.g. http://host:8000/api/hrms/api/")
    HRMS_SERVICE_TOKEN: Optional[str] = Field(default=None, description="Fallback token used when a request carries none")
    REQUEST_TIMEOUT_SECONDS: float = Field(default=15.0, gt=0)

    # Uploads
    MAX_UPLOAD_SIZE_MB: int = Field(default=5, ge=1)

    # Preferences persistence (in-memory when unset)
    PREFERENCES_FILE: Optional[str] = None

    # CORS
    FRONTEND_URL: str = "http://localhost:5173"

    # Server
    PORT: int = Field(default=8000, description="Server port")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    @field_validator('HRMS_API_BASE_URL')
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Validate the backend URL and normalize it to end with a slash."""
        if not v:
            raise ValueError("HRMS_API_BASE_URL is required")
        parsed = urlparse(v)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("HRMS_API_BASE_URL must be a valid URL (e.g., http://host:8000/api/hrms/api/)")
        if parsed.scheme not in ['http', 'https']:
            raise ValueError("HRMS_API_BASE_URL must use http or https protocol")
        return v if v.endswith("/") else v + "/"

    @field_validator('HRMS_SERVICE_TOKEN')
    @classmethod
    def validate_service_token(cls, v: Optional[str]) -> Optional[str]:
        """Treat a blank token as unset."""
        if v is not None and len(v.strip()) == 0:
            return None
        return v

    @field_validator('FRONTEND_URL')
    @classmethod
    def validate_frontend_url(cls, v: str) -> str:
        """Validate frontend URL format."""
        if v:
            parsed = urlparse(v)
            if not parsed.scheme or not parsed.netloc:
                raise ValueError("FRONTEND_URL must be a valid URL")
        return v

    @property
    def max_upload_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024


def validate_settings() -> None:
    """
    Re-read and validate the settings.

    Raises:
        ConfigurationError with MISSING_ENV_VAR when a required variable is unset,
        CONFIG_ERROR for any other invalid value
    """
    from hrms_admin.core.exceptions import ConfigurationError

    global settings
    try:
        settings = Settings()
    except ValidationError as e:
        errors = e.errors(include_url=False)
        missing = [str(err["loc"][0]) for err in errors if err["type"] == "missing" and err["loc"]]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variable(s): {', '.join(missing)}. "
                f"Set them in the environment or the .env file.",
                error_code="MISSING_ENV_VAR",
                details={"missing": missing}
            )
        problems = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in errors]
        raise ConfigurationError(
            f"Invalid configuration: {'; '.join(problems)}",
            error_code="CONFIG_ERROR",
            details={"errors": problems}
        )


def get_settings() -> Settings:
    """Return the active settings, raising ConfigurationError when they are unavailable."""
    if settings is None:
        validate_settings()
    return settings


# Loaded at import; main.py validates again on startup and reports problems
try:
    settings: Optional[Settings] = Settings()
except ValidationError:
    settings = None
