"""
ReadWeaver v0.1.0

Eulerian path reconstruction over a de Bruijn graph.

Two equivalent traversals are offered:
- hierholzer: iterative, explicit stack (default)
- recursive:  depth-first recursion, guarded by an edge budget

Both walk a private copy of the adjacency lists so the graph itself is never
consumed and can be reused for alternate paths.
"""

from collections import deque
from typing import Deque, Dict, List, Optional
import logging
import sys

from readweaver.assembly_core.data_structures import DeBruijnGraph
from readweaver.config.methods import EulerParams, HierholzerParams, RecursiveParams
from readweaver.errors import RecursionDepthError, UnknownMethodError

logger = logging.getLogger(__name__)

Adjacency = Dict[str, List[str]]


def select_start_node(graph: DeBruijnGraph, adjacency: Optional[Adjacency] = None) -> Optional[str]:
    """
    Pick the walk's start node.

    The first node (adjacency order) with out-degree - in-degree == 1. When
    the graph has none, the first node that still has outgoing edges, so a
    source tip emptied by simplification does not swallow the walk; the
    first node when every list is empty. None for an empty graph.
    """
    adjacency = graph.adjacency if adjacency is None else adjacency
    if not adjacency:
        return None

    for node in adjacency:
        if graph.out_degree(node) - graph.in_degree(node) == 1:
            return node

    start = next((node for node, successors in adjacency.items() if successors), None)
    if start is None:
        start = next(iter(adjacency))
    logger.debug(f"No node with surplus out-degree; starting from {start}")
    return start


def hierholzer_path(adjacency: Adjacency, start: str) -> List[str]:
    """
    Iterative Hierholzer walk.

    Successors are consumed from the front of each list.

    Args:
        adjacency: Adjacency lists (not modified)
        start: Start node

    Returns:
        Node path in walk order
    """
    local: Dict[str, Deque[str]] = {node: deque(successors) for node, successors in adjacency.items()}
    stack = [start]
    path: List[str] = []

    while stack:
        node = stack[-1]
        successors = local.get(node)
        if successors:
            stack.append(successors.popleft())
        else:
            path.append(stack.pop())

    path.reverse()
    return path


def recursive_path(adjacency: Adjacency, start: str, max_depth: int = 5000) -> List[str]:
    """
    Recursive depth-first Eulerian walk.

    Successors are consumed from the end of each list. The walk recurses
    once per edge, so max_depth is an edge budget: a graph with exactly
    max_depth edges is walked, one more edge raises. The interpreter-wide
    recursion limit is raised by the edge count for the duration of the
    walk and restored afterwards, even when the walk fails; other threads
    see the raised limit while the walk runs.

    Args:
        adjacency: Adjacency lists (not modified)
        start: Start node
        max_depth: Maximum number of edges (recursion frames) the walk may use

    Returns:
        Node path in walk order

    Raises:
        RecursionDepthError: If the graph has more edges than max_depth
    """
    edge_count = sum(len(successors) for successors in adjacency.values())
    if edge_count > max_depth:
        raise RecursionDepthError(
            f"Recursive Eulerian walk over {edge_count} edges exceeds max_depth={max_depth}; "
            "use the hierholzer method"
        )

    graph_copy: Adjacency = {node: list(successors) for node, successors in adjacency.items()}
    path: List[str] = []

    def dfs(node: str) -> None:
        successors = graph_copy.get(node)
        while successors:
            dfs(successors.pop())
        path.append(node)

    # One frame per edge on top of whatever the caller already uses
    old_limit = sys.getrecursionlimit()
    sys.setrecursionlimit(old_limit + edge_count)
    try:
        dfs(start)
    finally:
        sys.setrecursionlimit(old_limit)

    path.reverse()
    return path


def path_to_sequence(path: List[str]) -> str:
    """
    Linearize a node path.

    The first node is taken in full; each following node adds its last
    character.

    Example:
        >>> path_to_sequence(["AC", "CT", "TG"])
        'ACTG'
    """
    if not path:
        return ''
    return path[0] + ''.join(node[-1] for node in path[1:])


class EulerianPathFinder:
    """Find an Eulerian (or best-effort) path with a configured traversal."""

    def __init__(self, params: Optional[EulerParams] = None):
        self.params = params if params is not None else HierholzerParams()
        if not isinstance(self.params, (HierholzerParams, RecursiveParams)):
            raise UnknownMethodError('euler', str(getattr(self.params, 'method', self.params)),
                                     ('hierholzer', 'recursive'))

    @property
    def method(self) -> str:
        return self.params.method

    def find_path(self, graph: DeBruijnGraph, adjacency: Optional[Adjacency] = None) -> List[str]:
        """
        Walk the graph.

        Args:
            graph: De Bruijn graph (degree tables drive start selection)
            adjacency: Alternative adjacency lists to walk (e.g. a perturbed
                copy); defaults to the graph's own

        Returns:
            Node path; [] for an empty graph
        """
        adjacency = graph.adjacency if adjacency is None else adjacency
        start = select_start_node(graph, adjacency)
        if start is None:
            return []

        if isinstance(self.params, RecursiveParams):
            return recursive_path(adjacency, start, self.params.max_depth)
        return hierholzer_path(adjacency, start)

    def assemble(self, graph: DeBruijnGraph, adjacency: Optional[Adjacency] = None) -> str:
        """Walk the graph and linearize the path."""
        return path_to_sequence(self.find_path(graph, adjacency))


__all__ = [
    'EulerianPathFinder',
    'select_start_node',
    'hierholzer_path',
    'recursive_path',
    'path_to_sequence',
]
