import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from services.errors import PersistenceError
from .base import DataStore

logger = logging.getLogger(__name__)


class LocalDataStore(DataStore):
    """In-memory data store, optionally mirrored to one JSON file per collection."""

    def __init__(self, local_dir: Optional[str] = None):
        self.local_dir = Path(local_dir) if local_dir else None
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

        if self.local_dir:
            self.local_dir.mkdir(parents=True, exist_ok=True)
            for path in self.local_dir.glob("*.json"):
                self._collections[path.stem] = self._load_file(path)

    # ================================================================
    # LOCAL FILESYSTEM HELPERS
    # ================================================================

    def _load_file(self, path: Path) -> Dict[str, Dict[str, Any]]:
        try:
            with path.open("r", encoding="utf-8") as fh:
                rows = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Failed to load collection file {path}: {e}") from e
        return {str(r["id"]): r for r in rows if isinstance(r, dict) and "id" in r}

    def _flush(self, collection: str):
        if not self.local_dir:
            return
        path = self.local_dir / f"{collection}.json"
        try:
            with path.open("w", encoding="utf-8") as fh:
                json.dump(list(self._collections[collection].values()), fh, indent=2, default=str)
        except OSError as e:
            raise PersistenceError(f"Failed to write collection file {path}: {e}") from e

    # ================================================================
    # PUBLIC METHODS
    # ================================================================

    def fetch_all(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        rows = self._collections.get(collection, {}).values()
        matched = [copy.deepcopy(r) for r in rows if self._matches(r, filters)]
        return self._sorted(matched, order_by, descending)

    def fetch_one(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        row = self._collections.get(collection, {}).get(str(key))
        return copy.deepcopy(row) if row is not None else None

    def insert(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        if "id" not in record:
            raise PersistenceError(f"Record for '{collection}' has no id.")

        rows = self._collections.setdefault(collection, {})
        key = str(record["id"])
        previous = rows.get(key)
        rows[key] = copy.deepcopy(record)
        try:
            self._flush(collection)
        except PersistenceError:
            # roll back so memory matches what reached disk
            if previous is None:
                del rows[key]
            else:
                rows[key] = previous
            raise
        logger.debug(f"[LOCAL] Inserted {collection}/{record['id']}")
        return record
