"""Object storage backends for submission uploads."""

import logging
from typing import Optional

from config.settings import StorageConfig, get_storage_config
from .base import ObjectStorage
from .local_storage import LocalObjectStorage
from .s3_storage import S3ObjectStorage

logger = logging.getLogger(__name__)


def create_object_storage(config: Optional[StorageConfig] = None) -> ObjectStorage:
    """Pick the local or S3 backend from configuration."""
    config = config or get_storage_config()
    if config.env == "local":
        logger.info(f"Object storage running in LOCAL mode. Root: {config.local_root}")
        return LocalObjectStorage(config.local_root, config.submissions_bucket, config.key_prefix)

    logger.info("Object storage running in AWS mode.")
    return S3ObjectStorage(config)


__all__ = ["ObjectStorage", "LocalObjectStorage", "S3ObjectStorage", "create_object_storage"]
