"""Structured data store interface."""

import abc
from typing import Any, Dict, List, Optional


class DataStore(abc.ABC):
    """Collection-oriented record store keyed by `id`.

    Records are plain JSON-compatible dicts. Every backend failure surfaces
    as PersistenceError.
    """

    @abc.abstractmethod
    def fetch_all(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        """Return records whose fields equal every value in `filters`."""
        raise NotImplementedError()

    @abc.abstractmethod
    def fetch_one(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        """Return the record with id `key`, or None."""
        raise NotImplementedError()

    @abc.abstractmethod
    def insert(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """Write `record` (which must carry an `id`) and return it.

        Writing a record whose id already exists replaces it, so re-inserting
        the same record is idempotent.
        """
        raise NotImplementedError()

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _matches(record: Dict[str, Any], filters: Optional[Dict[str, Any]]) -> bool:
        return all(record.get(k) == v for k, v in (filters or {}).items())

    @staticmethod
    def _sorted(records: List[Dict[str, Any]], order_by: Optional[str], descending: bool) -> List[Dict[str, Any]]:
        if not order_by:
            return records
        # records missing the column sort last regardless of direction
        present = [r for r in records if r.get(order_by) is not None]
        missing = [r for r in records if r.get(order_by) is None]
        present.sort(key=lambda r: r[order_by], reverse=descending)
        return present + missing
