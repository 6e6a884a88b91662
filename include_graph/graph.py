"""
Mutable directed dependency graph over identity keys.

An edge ``dependent -> dependency`` means the dependent's output must be
refreshed when the dependency changes. Nodes are never removed once added;
only edges are, which is how a record's dependency list shrinks between runs.
"""
from collections import deque
from typing import Dict, Iterator, Set


class DependencyGraph:
    """
    Directed graph with both edge directions indexed.

    ``_outgoing[a]`` holds what ``a`` depends on, ``_incoming[b]`` holds what
    depends on ``b``. Both maps always have the same key set (the node set).
    Cycles and self-edges are accepted; reachability queries are
    visited-set guarded.

    Examples:
        >>> graph = DependencyGraph()
        >>> graph.add_dependency("page", "layout")
        >>> graph.add_dependency("layout", "base")
        >>> sorted(graph.transitive_dependents("base"))
        ['layout', 'page']
    """

    def __init__(self):
        self._outgoing: Dict[str, Set[str]] = {}
        self._incoming: Dict[str, Set[str]] = {}

    def add_node(self, key: str) -> None:
        """Add ``key`` if absent."""
        if key not in self._outgoing:
            self._outgoing[key] = set()
            self._incoming[key] = set()

    def add_dependency(self, dependent: str, dependency: str) -> None:
        """Add the edge ``dependent -> dependency``, creating missing nodes."""
        self.add_node(dependent)
        self.add_node(dependency)
        self._outgoing[dependent].add(dependency)
        self._incoming[dependency].add(dependent)

    def remove_all_outgoing(self, dependent: str) -> None:
        """Drop every edge leaving ``dependent``; nodes stay in the graph."""
        for dependency in self._outgoing.get(dependent, ()):
            self._incoming[dependency].discard(dependent)
        if dependent in self._outgoing:
            self._outgoing[dependent] = set()

    def dependencies_of(self, key: str) -> Set[str]:
        """Nodes ``key`` has a direct edge to."""
        return set(self._outgoing.get(key, ()))

    def direct_dependents(self, key: str) -> Set[str]:
        """Nodes with a direct edge into ``key``."""
        return set(self._incoming.get(key, ()))

    def transitive_dependents(self, key: str) -> Set[str]:
        """
        Everything that directly or indirectly depends on ``key``.

        Args:
            key: Node to walk backward from

        Returns:
            Set of dependent keys, never including ``key`` itself even when
            it sits on a cycle
        """
        reachable = self._reachable_dependents(key)
        reachable.discard(key)
        return reachable

    def is_cyclic(self, key: str) -> bool:
        """True if ``key`` transitively depends on itself."""
        return key in self._reachable_dependents(key)

    def _reachable_dependents(self, key: str) -> Set[str]:
        # Breadth-first over incoming edges; each node is expanded once.
        visited: Set[str] = set()
        queue = deque(self._incoming.get(key, ()))
        while queue:
            node = queue.popleft()
            if node in visited:
                continue
            visited.add(node)
            queue.extend(self._incoming[node] - visited)
        return visited

    def clear(self) -> None:
        """Remove every node and edge."""
        self._outgoing.clear()
        self._incoming.clear()

    def edge_count(self) -> int:
        return sum(len(targets) for targets in self._outgoing.values())

    def __contains__(self, key: object) -> bool:
        return key in self._outgoing

    def __len__(self) -> int:
        return len(self._outgoing)

    def __iter__(self) -> Iterator[str]:
        return iter(self._outgoing)

    def __repr__(self):
        return f"DependencyGraph(nodes={len(self)}, edges={self.edge_count()})"
