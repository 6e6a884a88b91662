"""
Long-lived graph and cache shared across batches.

Incremental behaviour comes from keeping one InheritanceState alive between
pipeline invocations. Engines use DEFAULT_STATE unless handed their own;
independent projects in one process should each create an InheritanceState
so their records do not cross-pollinate.
"""
import logging

from .cache import RecordCache
from .graph import DependencyGraph

logger = logging.getLogger(__name__)


class InheritanceState:
    """Dependency graph plus record cache with an explicit lifecycle."""

    def __init__(self):
        self.graph = DependencyGraph()
        self.cache = RecordCache()

    def reset(self) -> None:
        """
        Clear the graph and the cache back to empty.

        Must not be called between an engine's integration and emission of
        the same batch.
        """
        logger.debug(f"Resetting state: {len(self.graph)} nodes, {len(self.cache)} cached records")
        self.graph.clear()
        self.cache.clear()

    def __enter__(self) -> "InheritanceState":
        return self

    def __exit__(self, *exc_info) -> None:
        self.reset()

    def __repr__(self):
        return f"InheritanceState(graph={self.graph!r}, cached={len(self.cache)})"


DEFAULT_STATE = InheritanceState()


def flush_cache() -> None:
    """Reset the process-wide default state."""
    DEFAULT_STATE.reset()
