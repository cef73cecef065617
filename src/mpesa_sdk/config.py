"""Configuration management for the M-Pesa SDK.

Loads credentials from .env and environment host profiles from environments.yaml.
"""

from __future__ import annotations

import os
from enum import Enum
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from dotenv import load_dotenv


class Environment(str, Enum):
    SANDBOX = "sandbox"
    PRODUCTION = "production"


DEFAULT_HOSTS: dict[str, str] = {
    Environment.SANDBOX.value: "https://sandbox.safaricom.co.ke",
    Environment.PRODUCTION.value: "https://api.safaricom.co.ke",
}

# Env var names for each required setting, first match wins
_REQUIRED_ENV: dict[str, tuple[str, ...]] = {
    "consumer_key": ("MPESA_CONSUMER_KEY",),
    "consumer_secret": ("MPESA_CONSUMER_SECRET",),
    "short_code": ("MPESA_SHORTCODE", "MPESA_SHORT_CODE"),
    "pass_key": ("MPESA_PASSKEY", "MPESA_PASSPHRASE"),
}


class Settings(BaseModel):
    """Client credentials and defaults, fixed once the client is built."""
    consumer_key: str = Field(description="Daraja app consumer key")
    consumer_secret: str = Field(description="Daraja app consumer secret")
    environment: Environment = Field(default=Environment.SANDBOX, description="sandbox or production")
    short_code: str = Field(description="Paybill or till number")
    pass_key: str = Field(default="", alias="passphrase", description="Lipa Na M-Pesa Online passkey")
    callback_base_url: str = Field(default="http://localhost:3000", description="Public URL for vendor callbacks")
    timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    model_config = {"populate_by_name": True, "frozen": True}


class Config(BaseModel):
    """Full SDK configuration."""
    settings: Settings
    hosts: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_HOSTS))

    @property
    def base_url(self) -> str:
        """API host for the configured environment.

        Anything other than production talks to the sandbox.
        """
        if self.settings.environment == Environment.PRODUCTION:
            return self.hosts[Environment.PRODUCTION.value]
        return self.hosts[Environment.SANDBOX.value]

    def callback_url(self, path: str) -> str:
        """Join a callback path onto the public base URL."""
        if path.startswith("http"):
            return path
        return self.settings.callback_base_url.rstrip("/") + "/" + path.lstrip("/")


def _parse_environment(value: str) -> Environment:
    if value.strip().lower() == Environment.PRODUCTION.value:
        return Environment.PRODUCTION
    return Environment.SANDBOX


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (where config/ lives)."""
    current = Path(__file__).resolve().parent
    for parent in [current, *current.parents]:
        if (parent / "config" / "environments.yaml").exists():
            return parent
    # Fallback: cwd
    return Path.cwd()


def _load_hosts(project_root: Path) -> dict[str, str]:
    """Load environment hosts from environments.yaml, falling back to the vendor defaults."""
    hosts = dict(DEFAULT_HOSTS)
    hosts_path = project_root / "config" / "environments.yaml"
    if not hosts_path.exists():
        return hosts

    with open(hosts_path) as f:
        data = yaml.safe_load(f) or {}

    for name, profile in (data.get("environments") or {}).items():
        name = name.lower()
        if name not in hosts:
            raise ValueError(
                f"Unknown environment '{name}' in {hosts_path}. "
                f"Available: {', '.join(sorted(hosts))}"
            )
        hosts[name] = profile["api_endpoint"].rstrip("/")
    return hosts


def _env(*keys: str, default: str = "") -> str:
    """Try multiple env var names, return the first one found."""
    for key in keys:
        val = os.environ.get(key, "")
        if val:
            return val.strip().strip('"')
    return default


def missing_env_vars() -> list[str]:
    """Primary names of required variables that are unset."""
    return [keys[0] for keys in _REQUIRED_ENV.values() if not _env(*keys)]


def _load_settings() -> Settings:
    """Load settings from environment variables.

    Raises:
        ValueError: If any required variable is missing.
    """
    missing = missing_env_vars()
    if missing:
        raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

    values = {field: _env(*keys) for field, keys in _REQUIRED_ENV.items()}
    return Settings(
        **values,
        environment=_parse_environment(_env("MPESA_ENVIRONMENT", default="sandbox")),
        callback_base_url=_env("MPESA_CALLBACK_BASE_URL", "BASE_URL", default="http://localhost:3000"),
        timeout=float(_env("MPESA_TIMEOUT", default="30")),
    )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Load and cache the full SDK configuration."""
    project_root = _find_project_root()

    # Load .env from project root if it exists
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    settings = _load_settings()
    hosts = _load_hosts(project_root)

    return Config(settings=settings, hosts=hosts)
