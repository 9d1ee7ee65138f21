"""Component dependency graph.

Records which query, mutation and form-value names each rendered component
declared, so a caller can tell which components a data change affects.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set

from pagecompose.core.utils.equality import shallow_equal

logger = logging.getLogger(__name__)


@dataclass
class DependencyNode:
    component_id: str
    used_queries: List[str] = field(default_factory=list)
    used_form_values: List[str] = field(default_factory=list)
    used_mutations: List[str] = field(default_factory=list)
    parent: Optional[str] = None
    children: List[str] = field(default_factory=list)

    def depends_on(self, names: Set[str]) -> bool:
        return any(
            name in names
            for name in (*self.used_queries, *self.used_form_values, *self.used_mutations)
        )


class DependencyGraph:
    """Component id -> ``DependencyNode``, with parent/child links."""

    def __init__(self) -> None:
        self._nodes: Dict[str, DependencyNode] = {}

    def add_node(self, node: DependencyNode) -> None:
        """Register ``node``, replacing any node with the same id."""
        self._nodes[node.component_id] = node
        if node.parent is not None:
            parent = self._nodes.get(node.parent)
            if parent is not None and node.component_id not in parent.children:
                parent.children.append(node.component_id)

    def get_node(self, component_id: str) -> Optional[DependencyNode]:
        return self._nodes.get(component_id)

    def has_node(self, component_id: str) -> bool:
        return component_id in self._nodes

    def nodes(self) -> Dict[str, DependencyNode]:
        return dict(self._nodes)

    def remove_node(self, component_id: str) -> None:
        node = self._nodes.pop(component_id, None)
        if node is None:
            return
        if node.parent is not None:
            parent = self._nodes.get(node.parent)
            if parent is not None:
                parent.children = [c for c in parent.children if c != component_id]
        for child_id in node.children:
            child = self._nodes.get(child_id)
            if child is not None:
                child.parent = None

    def affected_components(self, changed: Iterable[str]) -> List[str]:
        """Ids of components that declared any of the ``changed`` names, in insertion order."""
        names = set(changed)
        if not names:
            return []
        return [cid for cid, node in self._nodes.items() if node.depends_on(names)]

    def detect_circular_dependencies(self) -> List[List[str]]:
        """Return every parent/child cycle as a path that starts and ends on the same id."""
        cycles: List[List[str]] = []
        visited: Set[str] = set()
        on_stack: Set[str] = set()

        def visit(node_id: str, path: List[str]) -> None:
            if node_id in on_stack:
                cycles.append(path[path.index(node_id):] + [node_id])
                return
            if node_id in visited:
                return
            visited.add(node_id)
            on_stack.add(node_id)
            node = self._nodes.get(node_id)
            if node is not None:
                for child_id in node.children:
                    visit(child_id, path + [node_id])
            on_stack.discard(node_id)

        for node_id in list(self._nodes):
            if node_id not in visited:
                visit(node_id, [])
        if cycles:
            logger.warning("Detected %d circular component dependencies", len(cycles))
        return cycles

    def depth(self, component_id: str) -> int:
        """Number of ancestors of ``component_id`` (0 for roots and unknown ids)."""
        depth = 0
        seen = {component_id}
        node = self._nodes.get(component_id)
        while node is not None and node.parent is not None and node.parent not in seen:
            depth += 1
            seen.add(node.parent)
            node = self._nodes.get(node.parent)
        return depth

    def leaf_nodes(self) -> List[DependencyNode]:
        return [node for node in self._nodes.values() if not node.children]

    def root_nodes(self) -> List[DependencyNode]:
        return [node for node in self._nodes.values() if node.parent is None]

    def clear(self) -> None:
        self._nodes.clear()

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, component_id: object) -> bool:
        return component_id in self._nodes


def changed_keys(
    previous: Optional[Mapping[str, Any]], current: Optional[Mapping[str, Any]]
) -> List[str]:
    """Names whose values differ between two mappings, including added and removed names."""
    previous = previous or {}
    current = current or {}
    changed: List[str] = []
    for name in current:
        if name not in previous or not shallow_equal(previous[name], current[name]):
            changed.append(name)
    changed.extend(name for name in previous if name not in current)
    return changed


__all__ = ["DependencyNode", "DependencyGraph", "changed_keys"]
