"""
Config Schema Validation

Pydantic models for validating config.yaml structure.
Provides clear error messages when configuration is invalid.
"""

from typing import List, Literal

from pydantic import BaseModel, Field, field_validator


class PortalConfig(BaseModel):
    """Guest portal settings"""

    base_url: str = Field(
        default="https://smartstay.app",
        description="Public URL of the guest portal (hotel id is appended)",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Portal URL must be absolute http(s)"""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid portal base_url '{v}'. Must start with http:// or https://")
        return v.rstrip("/")


class LoggingConfig(BaseModel):
    """Logging configuration"""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_to_file: bool = Field(default=True, description="Enable file logging")


class SessionsConfig(BaseModel):
    """Editor session registry"""

    idle_minutes: int = Field(default=30, ge=1, description="Idle minutes before a session is reloaded")
    max_sessions: int = Field(default=500, ge=1, description="Sessions kept in memory")


class ApplicationConfig(BaseModel):
    """Application settings"""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    rate_limit_per_minute: int = Field(
        default=300, ge=1, le=10000, description="Write requests per user per minute"
    )
    sessions: SessionsConfig = Field(default_factory=SessionsConfig)


class AppConfig(BaseModel):
    """
    Root configuration model for config.yaml

    Validates the entire configuration structure on load.
    """

    portal: PortalConfig = Field(default_factory=PortalConfig)
    application: ApplicationConfig = Field(default_factory=ApplicationConfig)

    model_config = {"populate_by_name": True}


def validate_config(config_dict: dict) -> AppConfig:
    """
    Validate a config dictionary against the schema.

    Args:
        config_dict: Raw dictionary loaded from config.yaml

    Returns:
        Validated AppConfig instance

    Raises:
        pydantic.ValidationError: If config is invalid
    """
    return AppConfig.model_validate(config_dict)


def get_validation_errors(config_dict: dict) -> List[str]:
    """
    Get a list of validation errors for a config dictionary.

    Args:
        config_dict: Raw dictionary loaded from config.yaml

    Returns:
        List of error messages (empty if valid)
    """
    try:
        validate_config(config_dict)
        return []
    except Exception as e:
        from pydantic import ValidationError

        if isinstance(e, ValidationError):
            return [
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
        return [str(e)]
