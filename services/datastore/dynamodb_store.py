import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import BotoCoreError, ClientError

from config.settings import DataStoreConfig
from services.errors import PersistenceError
from .base import DataStore

logger = logging.getLogger(__name__)


class DynamoDataStore(DataStore):
    """
    DynamoDB-backed data store.

    - One table per collection, named `<table_prefix><collection>`
    - `id` (string) is the hash key
    - Numbers come back as Decimal and are converted to int/float
    """

    def __init__(self, config: DataStoreConfig, resource=None):
        self.table_prefix = config.table_prefix
        self.dynamodb = resource or boto3.resource("dynamodb", region_name=config.region)

    def _table(self, collection: str):
        return self.dynamodb.Table(f"{self.table_prefix}{collection}")

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def fetch_all(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        table = self._table(collection)
        kwargs: Dict[str, Any] = {}
        condition = None
        for field, value in (filters or {}).items():
            clause = Attr(field).eq(value)
            condition = clause if condition is None else condition & clause
        if condition is not None:
            kwargs["FilterExpression"] = condition

        items: List[Dict[str, Any]] = []
        try:
            while True:
                response = table.scan(**kwargs)
                items.extend(response.get("Items", []))
                if "LastEvaluatedKey" in response:
                    kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]
                else:
                    break
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error scanning {collection}: {e}")
            raise PersistenceError(f"Failed to read {collection}: {e}") from e

        records = [self._from_dynamo(item) for item in items]
        return self._sorted(records, order_by, descending)

    def fetch_one(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        try:
            response = self._table(collection).get_item(Key={"id": str(key)})
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error reading {collection}/{key}: {e}")
            raise PersistenceError(f"Failed to read {collection}/{key}: {e}") from e

        item = response.get("Item")
        return self._from_dynamo(item) if item else None

    def insert(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        if "id" not in record:
            raise PersistenceError(f"Record for '{collection}' has no id.")

        try:
            self._table(collection).put_item(Item=self._to_dynamo(record))
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error writing {collection}/{record['id']}: {e}")
            raise PersistenceError(f"Failed to write {collection}: {e}") from e

        logger.debug(f"Inserted {collection}/{record['id']}")
        return record

    # -------------------------------------------------------------------------
    # Type conversion
    # -------------------------------------------------------------------------

    def _to_dynamo(self, value: Any) -> Any:
        if isinstance(value, float):
            return Decimal(str(value))
        if isinstance(value, dict):
            return {k: self._to_dynamo(v) for k, v in value.items() if v is not None}
        if isinstance(value, list):
            return [self._to_dynamo(v) for v in value]
        return value

    def _from_dynamo(self, value: Any) -> Any:
        if isinstance(value, Decimal):
            return int(value) if value == value.to_integral_value() else float(value)
        if isinstance(value, dict):
            return {k: self._from_dynamo(v) for k, v in value.items()}
        if isinstance(value, list):
            return [self._from_dynamo(v) for v in value]
        return value
