"""In-process record cache keyed by identity key."""
from typing import Dict, Iterator, Optional

from .protocols import Record


class RecordCache:
    """
    Most recently integrated record per identity key.

    The cache owns the stored instances. Callers that hand records downstream
    should use ``get_clone`` so later mutation cannot reach the cached copy.
    """

    def __init__(self):
        self._records: Dict[str, Record] = {}

    def put(self, key: str, record: Record) -> None:
        """Store ``record`` under ``key``, replacing any earlier record."""
        self._records[key] = record

    def get(self, key: str) -> Optional[Record]:
        """Return the cached instance itself, or None."""
        return self._records.get(key)

    def get_clone(self, key: str) -> Record:
        """
        Return an independent copy of the cached record.

        Raises:
            KeyError: If nothing is cached under ``key``
        """
        return self._records[key].clone()

    def clear(self) -> None:
        """Clear all cached entries."""
        self._records.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)
