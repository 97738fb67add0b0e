"""Configuration loading from YAML and environment variables."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import load_dotenv

from .gate import SESSION_MAX_AGE


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: str = "logs/content-protector.log"


@dataclass
class WebConfig:
    host: str = "127.0.0.1"
    port: int = 8080
    secret_key: str = ""
    admin_password: str = ""


@dataclass
class ProtectionSettings:
    session_max_age: int = SESSION_MAX_AGE
    admin_prefix: str = "/admin"
    api_prefix: str = "/api/"


@dataclass
class Config:
    database_path: str = "data/content.db"
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    web: WebConfig = field(default_factory=WebConfig)
    protection: ProtectionSettings = field(default_factory=ProtectionSettings)


def load_config(config_path: str = "config.yaml", env_path: str = ".env") -> Config:
    """Load configuration from YAML file and environment variables."""
    # Load .env file for secrets
    env_file = Path(env_path)
    if env_file.exists():
        load_dotenv(env_file)

    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_file) as f:
        raw = yaml.safe_load(f) or {}

    config = Config()

    # Database
    db_raw = raw.get("database", {})
    config.database_path = db_raw.get("path", config.database_path)

    # Logging
    log_raw = raw.get("logging", {})
    config.logging = LoggingConfig(
        level=log_raw.get("level", "INFO"),
        file=log_raw.get("file", "logs/content-protector.log"),
    )

    # Web UI settings
    web_raw = raw.get("web", {})
    config.web = WebConfig(
        host=web_raw.get("host", "127.0.0.1"),
        port=web_raw.get("port", 8080),
        secret_key=os.environ.get("SECRET_KEY", ""),
        admin_password=os.environ.get("ADMIN_PASSWORD", ""),
    )

    # Protection behaviour
    prot_raw = raw.get("protection", {})
    config.protection = ProtectionSettings(
        session_max_age=prot_raw.get("session_max_age", SESSION_MAX_AGE),
        admin_prefix=prot_raw.get("admin_prefix", "/admin"),
        api_prefix=prot_raw.get("api_prefix", "/api/"),
    )

    return config


def validate_config(config: Config) -> list[str]:
    """Validate configuration and return a list of errors (empty if valid)."""
    errors = []

    if not config.web.admin_password:
        errors.append("ADMIN_PASSWORD environment variable is not set; the settings pages are open to anyone")

    if not config.web.secret_key:
        errors.append("SECRET_KEY environment variable is not set")

    if not isinstance(config.protection.session_max_age, int) or config.protection.session_max_age <= 0:
        errors.append(f"protection.session_max_age must be a positive number of seconds, got {config.protection.session_max_age!r}")

    for name in ("admin_prefix", "api_prefix"):
        value = getattr(config.protection, name)
        if not value or not value.startswith("/"):
            errors.append(f"protection.{name} must start with '/', got {value!r}")
        elif not value.rstrip("/"):
            errors.append(f"protection.{name} must not be '/', it would exclude every page from protection")

    return errors
