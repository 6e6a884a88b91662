"""
Incremental inheritance engine.

Tracks which records include which, and on every batch decides which cached
records have to be re-emitted:

1. Integration (``integrate``, once per record): key the record, replace its
   outgoing edges with the references it declares now, cache it, and note
   the key for this batch.
2. Emission (``flush``, once per batch): walk the batch keys and emit each
   record that nothing depends on, plus every record that depends on one of
   the batch keys. With ``include_all`` every batch record is emitted along
   with its direct dependents.

Each key is emitted at most once per batch, always as a clone of the cached
record.
"""
import logging
import os
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from tqdm import tqdm

from .config import InheritanceConfig
from .protocols import Record
from .state import DEFAULT_STATE, InheritanceState

logger = logging.getLogger(__name__)


class InheritanceEngine:
    """
    One pipeline stage instance bound to a configuration and a state.

    Engines are cheap; create one per pipeline invocation. Incremental memory
    lives in the InheritanceState, which defaults to the process-wide
    DEFAULT_STATE and can be shared between engines.
    """

    def __init__(
        self,
        config: Optional[InheritanceConfig] = None,
        state: Optional[InheritanceState] = None,
        **options,
    ):
        """
        Args:
            config: Engine configuration; built from ``options`` when omitted
            state: Graph and cache to use; defaults to DEFAULT_STATE
            **options: InheritanceConfig fields, used only without ``config``

        Raises:
            ConfigurationError: If no extractor is configured
            TypeError: If both ``config`` and ``options`` are given
        """
        if config is None:
            config = InheritanceConfig.from_options(options)
        elif options:
            raise TypeError(f"Pass either config or options, not both (got {sorted(options)})")

        self.config = config
        self.state = state if state is not None else DEFAULT_STATE
        self._batch_keys: List[str] = []

    @property
    def batch_keys(self) -> Tuple[str, ...]:
        """Keys integrated since the last flush, in integration order."""
        return tuple(self._batch_keys)

    def identity_of(self, record: Record) -> str:
        """Identity key for a record's current (or original) location."""
        raw_path = record.history[0] if self.config.original_paths else record.path
        return self.config.normalizer.normalize(raw_path)

    def resolve_reference(self, key: str, reference: str) -> str:
        """
        Identity key for a reference declared by the record keyed ``key``.

        The reference is taken relative to the directory of ``key``, made
        absolute, then passed through the configured normalizer.
        """
        resolved = os.path.abspath(os.path.join(os.path.dirname(key), reference))
        return self.config.normalizer.normalize(resolved)

    def integrate(self, record: Record) -> Optional[str]:
        """
        Fold one record into the graph and cache.

        Args:
            record: Incoming record; records without contents are ignored

        Returns:
            The record's identity key, or None if it was skipped
        """
        if record is None or not record.contents:
            logger.debug(f"Skipping record without contents: {record!r}")
            return None

        graph = self.state.graph
        key = self.identity_of(record)

        graph.add_node(key)
        graph.remove_all_outgoing(key)

        self.state.cache.put(key, record)
        self._batch_keys.append(key)

        references = self.config.extractor.extract(record)
        for reference in references:
            graph.add_dependency(key, self.resolve_reference(key, reference))

        if references and graph.is_cyclic(key):
            logger.warning(f"Dependency cycle through {key}")

        logger.debug(f"Integrated {key} with {len(graph.dependencies_of(key))} dependencies")
        return key

    def _dependents(self, key: str) -> Set[str]:
        if self.config.include_all:
            return self.state.graph.direct_dependents(key)
        return self.state.graph.transitive_dependents(key)

    def flush(self) -> Iterator[Record]:
        """
        Emit the records this batch requires, then start a new batch.

        Yields:
            Clones of cached records, each identity key at most once
        """
        cache = self.state.cache
        emitted: Set[str] = set()
        batch_size = len(self._batch_keys)

        try:
            for key in self._batch_keys:
                dependents = self._dependents(key)

                if key not in emitted and (self.config.include_all or not dependents):
                    emitted.add(key)
                    logger.debug(f"Emitting {key}")
                    yield cache.get_clone(key)

                # Sorted so a given graph state always emits in the same order
                for dependent in sorted(dependents):
                    if dependent not in emitted:
                        emitted.add(dependent)
                        logger.debug(f"Emitting {dependent} (depends on {key})")
                        yield cache.get_clone(dependent)
        finally:
            self._batch_keys = []

        logger.info(f"Batch complete: {batch_size} records integrated, {len(emitted)} emitted")

    def stream(self, records: Iterable[Record], show_progress: bool = False) -> Iterator[Record]:
        """
        Integrate every record, then yield the batch's emissions.

        Nothing is yielded until ``records`` is exhausted.
        """
        for record in tqdm(
            records,
            disable=not show_progress,
            desc="Integrating",
            unit="files",
        ):
            self.integrate(record)

        yield from self.flush()

    def process(self, records: Iterable[Record], show_progress: bool = False) -> List[Record]:
        """Run one complete batch and return the emitted records."""
        return list(self.stream(records, show_progress=show_progress))
