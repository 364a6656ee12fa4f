import logging
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from config.settings import StorageConfig
from services.errors import TransferError
from .base import ObjectStorage

logger = logging.getLogger(__name__)


class S3ObjectStorage(ObjectStorage):
    """Stores submission files in an S3 bucket."""

    def __init__(self, config: StorageConfig, client=None):
        self.bucket = config.submissions_bucket
        self.prefix = config.key_prefix
        self.s3 = client or boto3.client(
            "s3",
            region_name=config.region,
            aws_access_key_id=config.aws_access_key,
            aws_secret_access_key=config.aws_secret_key,
            aws_session_token=config.aws_session_token,
        )

    def store(self, name: str, data: bytes, mime_type: str | None = None) -> str:
        key = self._object_key(self.prefix, name)
        logger.info(f"[AWS] Upload BYTES: s3://{self.bucket}/{key}")
        try:
            self.s3.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=mime_type or "application/octet-stream",
                # S3 user metadata must be ASCII
                Metadata={"original_name": quote(name)},
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"[AWS] Upload failed for s3://{self.bucket}/{key}: {e}")
            raise TransferError(f"Could not upload {name}: {e}") from e

        return f"s3://{self.bucket}/{key}"
