"""Graph algorithms: strongly connected components, cycles, condensation."""

from collections import deque

from .models import CycleGroup, DependencyGraph


def tarjan_scc(adjacency: dict[str, list[str]], all_nodes: frozenset[str]) -> list[list[str]]:
    """Strongly connected components by Tarjan's algorithm, without recursion.

    Each DFS frame is ``[node, successors, next position]``; deep import
    chains never touch the interpreter's recursion limit. Roots and
    successors are visited in sorted order, so the output is the same for
    the same graph. Components come out dependencies first, each sorted.
    """
    index: dict[str, int] = {}
    lowlink: dict[str, int] = {}
    stack: list[str] = []
    on_stack: set[str] = set()
    components: list[list[str]] = []

    def enter(node: str) -> list:
        index[node] = lowlink[node] = len(index)
        stack.append(node)
        on_stack.add(node)
        return [node, sorted(w for w in adjacency.get(node, ()) if w in all_nodes), 0]

    for root in sorted(all_nodes):
        if root in index:
            continue
        frames = [enter(root)]
        while frames:
            frame = frames[-1]
            node, successors, pos = frame
            if pos < len(successors):
                frame[2] = pos + 1
                succ = successors[pos]
                if succ not in index:
                    frames.append(enter(succ))
                elif succ in on_stack:
                    lowlink[node] = min(lowlink[node], index[succ])
                continue

            frames.pop()
            if frames:
                parent = frames[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[node])
            if lowlink[node] == index[node]:
                components.append(_pop_component(stack, on_stack, node))

    return components


def _pop_component(stack: list[str], on_stack: set[str], root: str) -> list[str]:
    """Everything above and including ``root`` on the DFS stack is one component."""
    start = len(stack) - 1
    while stack[start] != root:
        start -= 1
    component = stack[start:]
    del stack[start:]
    on_stack.difference_update(component)
    return sorted(component)


def find_cycles(graph: DependencyGraph) -> list[CycleGroup]:
    """Return every SCC with two or more modules, ordered by first member."""
    groups: list[CycleGroup] = []
    for scc in tarjan_scc(graph.adjacency, graph.all_nodes):
        if len(scc) < 2:
            continue
        members = set(scc)
        edges = tuple(
            (src, tgt) for src in scc for tgt in graph.dependencies(src) if tgt in members
        )
        groups.append(CycleGroup(nodes=tuple(scc), edges=edges))
    return sorted(groups, key=lambda g: g.nodes[0])


def cycle_path(graph: DependencyGraph, cycle: CycleGroup) -> list[str]:
    """A concrete closed path through ``cycle``, e.g. ``["a", "b", "a"]``.

    Starts at the smallest member and follows the shortest path back to it
    (BFS restricted to the component, neighbors in sorted order).
    """
    start = cycle.nodes[0]
    members = set(cycle.nodes)
    parent: dict[str, str] = {}
    queue: deque[str] = deque([start])
    seen = {start}

    while queue:
        node = queue.popleft()
        for dep in graph.dependencies(node):
            if dep not in members:
                continue
            if dep == start:
                path = [node]
                while path[-1] != start:
                    path.append(parent[path[-1]])
                path.reverse()
                return path + [start]
            if dep not in seen:
                seen.add(dep)
                parent[dep] = node
                queue.append(dep)

    # Unreachable for a real SCC; fall back to the member list.
    return list(cycle.nodes) + [start]


def condense(graph: DependencyGraph) -> tuple[list[list[str]], dict[str, int], dict[int, set[int]]]:
    """Collapse SCCs into single nodes.

    Returns:
        (components, node -> component index, component -> set of component
        indices it depends on). The condensed graph is always acyclic.
    """
    components = tarjan_scc(graph.adjacency, graph.all_nodes)
    component_of: dict[str, int] = {}
    for i, component in enumerate(components):
        for node in component:
            component_of[node] = i

    condensed: dict[int, set[int]] = {i: set() for i in range(len(components))}
    for src, tgt in graph.edges():
        a, b = component_of[src], component_of[tgt]
        if a != b:
            condensed[a].add(b)

    return components, component_of, condensed
