"""
Source Factory - Creates connectors from configuration.
"""
import logging
from typing import List

from ingestion.base import SourceConnector
from ingestion.gmail import GmailConnector
from ingestion.notion import NotionConnector
from ingestion.slack import SlackConnector
from services.config import Config, ConnectorConfig, get_enabled_connectors

logger = logging.getLogger(__name__)


def create_connector(connector_config: ConnectorConfig) -> SourceConnector:
    """
    Create a connector from configuration.

    Args:
        connector_config: Configuration for the connector

    Returns:
        Configured SourceConnector instance

    Raises:
        ValueError: If connector type is unknown
    """
    connector_type = connector_config.type.lower()

    if connector_type == "gmail":
        connector = GmailConnector(max_results=connector_config.max_results)

    elif connector_type == "slack":
        if not connector_config.channels:
            raise ValueError("Slack connector requires at least one channel")
        connector = SlackConnector(channels=connector_config.channels)

    elif connector_type == "notion":
        connector = NotionConnector(database_id=connector_config.database_id)

    else:
        raise ValueError(f"Unknown connector type: {connector_type}")

    connector.timeout = connector_config.timeout
    connector.retries = connector_config.retries
    return connector


def create_connectors_from_config(config: Config) -> List[SourceConnector]:
    """
    Create all enabled connectors from configuration.

    Args:
        config: Application configuration

    Returns:
        List of configured SourceConnector instances
    """
    connectors = []

    for connector_config in get_enabled_connectors(config):
        try:
            connector = create_connector(connector_config)
            connectors.append(connector)
            logger.info(f"Created {connector_config.type} connector")
        except Exception as e:
            logger.error(f"Failed to create connector for {connector_config.type}: {e}")

    return connectors
