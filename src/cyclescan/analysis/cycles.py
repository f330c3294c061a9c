"""
Circular dependency detection.

Two views of the cycles in a completed import graph:

    CycleDetector: three-colour depth-first search. Every back edge met
        during one DFS forest (roots taken in sorted node order, edges in
        import order) yields one reported cycle. This is not an enumeration
        of every elementary cycle: once a node is BLACK it is never
        revisited, so of several cycles through the same nodes only the
        first one met is guaranteed to surface.

    strongly_connected_components: Tarjan's algorithm. Lists every group of
        mutually dependent files, i.e. every file that takes part in at least
        one cycle, without enumerating the cycles themselves.

Both traversals use explicit stacks and give the same results a recursive
implementation would.

Example:
    >>> from cyclescan.core.types import Graph
    >>> graph = Graph()
    >>> graph.add_node("a", ["b"])
    >>> graph.add_node("b", ["a"])
    >>> [c.render() for c in CycleDetector(graph).find_cycles()]
    ['a -> b -> a']
"""

from __future__ import annotations

from collections.abc import Iterator

from ..core.types import Cycle, Graph, GraphEntry, Node, VisitState
from ..utils.error_handling import GraphInvariantError


class CycleDetector:
    """Three-colour DFS over a fully built graph."""

    def __init__(self, graph: Graph):
        self.graph = graph

    def find_cycles(self) -> list[Cycle]:
        """
        Find one cycle per back edge.

        All entries are reset to WHITE first, so calling this again on the
        same graph gives the same answer.

        Returns:
            Cycles in discovery order; each starts and ends on the node the
            back edge points to.
        """
        self.graph.reset_states()
        cycles: list[Cycle] = []
        for node in self.graph.sorted_nodes():
            if self.graph[node].state is VisitState.WHITE:
                self._visit(node, cycles)
        return cycles

    def _entry(self, node: Node, source: Node | None = None) -> GraphEntry:
        try:
            return self.graph[node]
        except KeyError:
            raise GraphInvariantError(
                f"Edge target is not a node of the graph: {node}",
                context={"node": node, "source": source},
            ) from None

    def _visit(self, start: Node, cycles: list[Cycle]) -> None:
        path: list[Node] = []
        position: dict[Node, int] = {}
        stack: list[tuple[Node, Iterator[Node]]] = []

        def enter(node: Node, entry: GraphEntry) -> None:
            entry.state = VisitState.GRAY
            position[node] = len(path)
            path.append(node)
            stack.append((node, iter(entry.edges)))

        enter(start, self._entry(start))
        while stack:
            node, edges = stack[-1]
            target = next(edges, None)
            if target is None:
                self.graph[node].state = VisitState.BLACK
                path.pop()
                del position[node]
                stack.pop()
                continue

            entry = self._entry(target, node)
            if entry.state is VisitState.GRAY:
                cycles.append(Cycle(path[position[target] :] + [target]))
            elif entry.state is VisitState.WHITE:
                enter(target, entry)


def find_cycles(graph: Graph) -> list[Cycle]:
    """Convenience wrapper around ``CycleDetector(graph).find_cycles()``."""
    return CycleDetector(graph).find_cycles()


def strongly_connected_components(graph: Graph, cyclic_only: bool = True) -> list[list[Node]]:
    """
    Tarjan's strongly connected components, iteratively.

    Args:
        graph: Completed import graph
        cyclic_only: Keep only components that contain a cycle (more than
            one node, or a single node importing itself)

    Returns:
        Components in completion order, each sorted lexicographically
    """
    index: dict[Node, int] = {}
    lowlinks: dict[Node, int] = {}
    on_stack: set[Node] = set()
    stack: list[Node] = []
    sccs: list[list[Node]] = []
    counter = 0

    def dependencies(node: Node) -> list[Node]:
        try:
            return graph[node].edges
        except KeyError:
            raise GraphInvariantError(
                f"Edge target is not a node of the graph: {node}", context={"node": node}
            ) from None

    for root in graph.sorted_nodes():
        if root in index:
            continue

        index[root] = lowlinks[root] = counter
        counter += 1
        stack.append(root)
        on_stack.add(root)
        work: list[tuple[Node, Iterator[Node]]] = [(root, iter(dependencies(root)))]

        while work:
            node, edges = work[-1]
            dependency = next(edges, None)
            if dependency is not None:
                if dependency not in index:
                    index[dependency] = lowlinks[dependency] = counter
                    counter += 1
                    stack.append(dependency)
                    on_stack.add(dependency)
                    work.append((dependency, iter(dependencies(dependency))))
                elif dependency in on_stack:
                    lowlinks[node] = min(lowlinks[node], index[dependency])
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                lowlinks[parent] = min(lowlinks[parent], lowlinks[node])

            if lowlinks[node] == index[node]:
                scc: list[Node] = []
                while True:
                    w = stack.pop()
                    on_stack.remove(w)
                    scc.append(w)
                    if w == node:
                        break
                sccs.append(sorted(scc))

    if cyclic_only:
        sccs = [
            scc for scc in sccs if len(scc) > 1 or scc[0] in graph[scc[0]].edges
        ]
    return sccs
