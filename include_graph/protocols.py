"""
Core protocols defining the interfaces the inheritance engine talks to.

The engine never reads files or parses syntax itself. It consumes records
handed over by a host pipeline, asks an Extractor for the raw references a
record declares, and asks a PathNormalizer to turn paths into identity keys.
"""
from typing import Iterable, Iterator, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class Record(Protocol):
    """A file-like unit flowing through the host pipeline."""

    path: str                    # Current location
    history: List[str]           # Prior locations, index 0 is the original
    contents: Optional[bytes]

    def clone(self) -> "Record":
        """Returns an independent copy safe for downstream mutation."""
        ...


@runtime_checkable
class Extractor(Protocol):
    """Extract raw dependency references from a record."""

    def extract(self, record: Record) -> Iterable[str]:
        """Returns the references in the order they were declared."""
        ...


@runtime_checkable
class PathNormalizer(Protocol):
    """Map a raw path to the canonical identity key."""

    def normalize(self, raw_path: str) -> str:
        """Returns the identity key for ``raw_path``."""
        ...


class RecordSource(Protocol):
    """Iterator over records from a host data source."""

    def iter_records(self) -> Iterator[Record]:
        """Yields Record objects."""
        ...
