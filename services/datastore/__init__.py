"""Structured data store backends."""

import logging
from typing import Optional

from config.settings import DataStoreConfig, get_datastore_config
from .base import DataStore
from .local_store import LocalDataStore
from .dynamodb_store import DynamoDataStore

logger = logging.getLogger(__name__)


def create_data_store(config: Optional[DataStoreConfig] = None) -> DataStore:
    """Pick the local or DynamoDB backend from configuration."""
    config = config or get_datastore_config()
    if config.backend == "dynamodb":
        logger.info(f"Data store running on DynamoDB (tables {config.table_prefix}*)")
        return DynamoDataStore(config)

    logger.info("Data store running in LOCAL mode.")
    return LocalDataStore(config.local_dir)


__all__ = ["DataStore", "LocalDataStore", "DynamoDataStore", "create_data_store"]
