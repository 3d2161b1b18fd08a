"""
Loads and handles config from config.yml
Connector auth codes (GMAIL_AUTH_CODE, SLACK_AUTH_CODE, NOTION_AUTH_CODE) are loaded from .env
"""
import logging
import os
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

logger = logging.getLogger(__name__)

AUTH_CODE_ENV = {
    "gmail": "GMAIL_AUTH_CODE",
    "slack": "SLACK_AUTH_CODE",
    "notion": "NOTION_AUTH_CODE",
}


class ConnectorConfig(BaseModel):
    """Configuration for a single source connector."""
    type: str  # gmail, slack, notion
    enabled: bool = True
    timeout: float = 10.0  # seconds
    retries: int = 3  # fetch attempts
    max_results: int = 100  # For gmail
    channels: List[str] = ["general"]  # For slack
    database_id: Optional[str] = None  # For notion


class CacheConfig(BaseModel):
    """Configuration for the result cache."""
    max_entries: Optional[int] = None  # None keeps the cache unbounded


class Config(BaseModel):
    LOG_LEVEL: str = "INFO"
    cache: CacheConfig = CacheConfig()
    connectors: List[ConnectorConfig] = []

    # Resolved from the environment
    auth_codes: Dict[str, str] = {}


def _bool(value: str | bool) -> bool:
    """Convert string or bool to boolean."""
    if isinstance(value, bool):
        return value
    return str(value).lower() in ("1", "true", "yes", "on")


def _get_config_path() -> str:
    """Get the path to config.yml, handling different working directories."""
    # Try relative path first
    if os.path.exists('resources/config.yml'):
        return 'resources/config.yml'

    # Try from project root
    project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    config_path = os.path.join(project_root, 'resources', 'config.yml')
    if os.path.exists(config_path):
        return config_path

    raise FileNotFoundError("Cannot find resources/config.yml")


def _parse_connector_config(name: str, data: Dict[str, Any]) -> ConnectorConfig:
    """Parse a single connector entry from YAML data."""
    channels = data.get("channels") or ["general"]
    if isinstance(channels, str):
        channels = [c.strip() for c in channels.split(",") if c.strip()]

    return ConnectorConfig(
        type=str(data.get("type", name)).lower(),
        enabled=_bool(data.get("enabled", True)),
        timeout=float(data.get("timeout", 10.0)),
        retries=int(data.get("retries", 3)),
        max_results=int(data.get("max_results", 100)),
        channels=channels,
        database_id=data.get("database_id"),
    )


def _load_auth_codes() -> Dict[str, str]:
    codes = {}
    for source, env_name in AUTH_CODE_ENV.items():
        value = os.getenv(env_name)
        if value:
            codes[source] = value
    return codes


def load_config(path: Optional[str] = None) -> Config:
    """Load configuration from config.yml and auth codes from .env."""
    # Load .env for sensitive credentials
    load_dotenv()

    config_path = path or _get_config_path()
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Cannot find {config_path}")

    with open(config_path, 'r') as file:
        config = yaml.safe_load(file) or {}

    connectors = []
    for connector_name, connector_data in (config.get("connectors") or {}).items():
        try:
            connectors.append(_parse_connector_config(connector_name, connector_data or {}))
        except Exception as e:
            logger.error(f"Failed to parse connector '{connector_name}': {e}")

    cache_data = config.get("cache") or {}
    max_entries = cache_data.get("max_entries")

    return Config(
        LOG_LEVEL=str(config.get("LOG_LEVEL", "INFO")).upper(),
        cache=CacheConfig(
            max_entries=int(max_entries) if max_entries else None,
        ),
        connectors=connectors,
        auth_codes=_load_auth_codes(),
    )


def get_enabled_connectors(config: Config) -> List[ConnectorConfig]:
    """Get only enabled connectors from a config."""
    return [c for c in config.connectors if c.enabled]
