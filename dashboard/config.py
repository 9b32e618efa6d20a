### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - API Configuration -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
API Configuration Management

Uses Pydantic Settings for configuration with environment variable support.
Loads settings from .env file and data/config.yaml.

Config file location (in order of precedence):
1. SMARTSTAY_CONFIG_PATH environment variable
2. data/config.yaml (default - created on first run)

Secrets (JWT secret, database URL) belong in the environment, not the YAML file.
"""

import os
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic_settings import BaseSettings

from dashboard.config_schema import get_validation_errors


def get_project_root() -> Path:
    """Get the project root directory"""
    return Path(__file__).parent.parent


def get_config_path() -> Path:
    """
    Get the path to config.yaml.

    Priority:
    1. SMARTSTAY_CONFIG_PATH environment variable (if set)
    2. data/config.yaml (default location)
    """
    env_path = os.environ.get("SMARTSTAY_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    return get_project_root() / "data" / "config.yaml"


def get_version() -> str:
    """Read version from VERSION file"""
    version_file = get_project_root() / "VERSION"
    if version_file.exists():
        return version_file.read_text().strip()
    return "0.0.0"


class APISettings(BaseSettings):
    """API Server Settings"""

    # API Configuration
    api_title: str = "SmartStay Dashboard API"
    api_version: str = get_version()
    api_prefix: str = "/api/v1"
    debug: bool = False

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000

    # Durable store (hotels + links)
    database_url: str = f"sqlite:///{get_project_root() / 'data' / 'smartstay_dashboard.db'}"

    # Auth provider tokens
    jwt_secret: str = "change-this-in-production"
    jwt_audience: str = "authenticated"
    jwt_algorithm: str = "HS256"
    login_path: str = "/login"

    # Guest portal
    portal_base_url: str = "https://smartstay.app"

    # Rate Limiting (write endpoints, per user)
    rate_limit_per_minute: int = 300

    # Editor sessions (one EntityStore per signed-in user)
    session_idle_minutes: int = 30
    max_sessions: int = 500

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = True

    class Config:
        env_prefix = "SMARTSTAY_"
        env_file = ".env"
        extra = "ignore"


DEFAULT_CONFIG = """# SmartStay Dashboard Configuration
# Non-secret application settings. Secrets go in the environment (.env):
#   SMARTSTAY_JWT_SECRET, SMARTSTAY_DATABASE_URL

# Guest Portal
portal:
  # Public URL of the guest-facing portal; the hotel id is appended
  base_url: "https://smartstay.app"

# Application Settings
application:
  logging:
    level: "INFO"             # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_to_file: true         # Write dated log files under logs/

  # Write requests allowed per user per minute
  rate_limit_per_minute: 300

  # Editor sessions are reloaded from the database after this much idle time
  sessions:
    idle_minutes: 30
    max_sessions: 500          # Least recently used session is dropped beyond this
"""


def load_yaml_config(config_path: str | None = None) -> dict:
    """Load configuration from YAML file, creating default if missing"""
    config_file = get_config_path() if config_path is None else Path(config_path)

    if not config_file.exists():
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, "w", encoding="utf-8") as f:
            f.write(DEFAULT_CONFIG)
        print(f"Created default configuration file: {config_file}")

    with open(config_file, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@lru_cache
def get_api_settings() -> APISettings:
    """Get cached API settings instance"""
    config = load_yaml_config()

    # Schema problems are reported, not fatal
    for error in get_validation_errors(config):
        print(f"Config validation warning: {error}")

    overrides = {}
    portal_config = config.get("portal") or {}
    if portal_config.get("base_url"):
        overrides["portal_base_url"] = str(portal_config["base_url"]).rstrip("/")

    app_config = config.get("application") or {}
    logging_config = app_config.get("logging") or {}
    if "level" in logging_config:
        overrides["log_level"] = logging_config["level"]
    if "log_to_file" in logging_config:
        overrides["log_to_file"] = logging_config["log_to_file"]
    if "rate_limit_per_minute" in app_config:
        overrides["rate_limit_per_minute"] = app_config["rate_limit_per_minute"]
    sessions_config = app_config.get("sessions") or {}
    if "idle_minutes" in sessions_config:
        overrides["session_idle_minutes"] = sessions_config["idle_minutes"]
    if "max_sessions" in sessions_config:
        overrides["max_sessions"] = sessions_config["max_sessions"]

    # Environment variables win over config.yaml
    env_prefix = APISettings.Config.env_prefix
    overrides = {
        key: value
        for key, value in overrides.items()
        if f"{env_prefix}{key.upper()}" not in os.environ
    }

    return APISettings(**overrides)
