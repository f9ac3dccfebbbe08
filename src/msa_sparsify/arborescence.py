from __future__ import annotations

from collections import defaultdict
from typing import AbstractSet, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from .graph import Edge


def _fresh_vertex(vertices: AbstractSet[int], edges: AbstractSet[Edge]) -> int:
    """Id strictly above every vertex and every edge endpoint in play."""
    top = max(vertices)
    for u, v in edges:
        if u > top:
            top = u
        if v > top:
            top = v
    return top + 1


def _min_incoming(
    vertices: AbstractSet[int],
    edges: AbstractSet[Edge],
    root: int,
    weights: Mapping[Edge, int],
) -> Dict[int, int]:
    """Predecessor map from the cheapest edge entering each non-root vertex.

    Edges are scanned in (tail, head) order and the first minimum wins, so
    ties resolve to the lexicographically smallest edge. Any winner among
    equal weights is a valid choice; callers should not depend on it.
    """
    best: Dict[int, Edge] = {}
    for e in sorted(edges):
        v = e[1]
        if v == root:
            continue
        if v not in best or weights[e] < weights[best[v]]:
            best[v] = e
    return {v: e[0] for v, e in best.items() if v in vertices}


def _find_cycle(vertices: AbstractSet[int], pred: Mapping[int, int]) -> Optional[Set[int]]:
    """Vertices of the first cycle in the predecessor graph, or None."""
    visited: Set[int] = set()
    hit = None
    for start in sorted(vertices):
        path: Set[int] = set()
        v = start
        while v not in visited and v in pred:
            if v in path:
                hit = v
                break
            path.add(v)
            v = pred[v]
        visited |= path
        if hit is not None:
            break

    if hit is None:
        return None

    cycle: Set[int] = set()
    v = hit
    while v not in cycle:
        cycle.add(v)
        v = pred[v]
    return cycle


def _contract_cycle(
    vertices: AbstractSet[int],
    edges: AbstractSet[Edge],
    weights: Mapping[Edge, int],
    cycle: AbstractSet[int],
    pred: Mapping[int, int],
    vc: int,
) -> Tuple[Set[int], Set[Edge], Dict[Edge, int], Dict[Edge, Edge]]:
    """Collapse `cycle` into vertex `vc`.

    Returns the reduced vertices, edges and weights, plus `origin`, which maps
    every reduced edge to the original edge it stands for. Edges entering the
    cycle are charged relative to the predecessor edge they would displace.
    """
    sub_vertices = (set(vertices) - set(cycle)) | {vc}
    sub_edges: Set[Edge] = set()
    sub_weights: Dict[Edge, int] = {}
    origin: Dict[Edge, Edge] = {}

    for e in sorted(edges):
        u, v = e
        if u not in cycle and v in cycle:
            new, w = (u, vc), weights[e] - weights[(pred[v], v)]
        elif u in cycle and v not in cycle:
            new, w = (vc, v), weights[e]
        elif u not in cycle and v not in cycle:
            new, w = e, weights[e]
        else:
            continue  # internal to the cycle
        if new not in sub_weights or w < sub_weights[new]:
            sub_weights[new] = w
            origin[new] = e
        sub_edges.add(new)

    return sub_vertices, sub_edges, sub_weights, origin


def _expand_cycle(
    tree: AbstractSet[Edge],
    cycle: AbstractSet[int],
    pred: Mapping[int, int],
    vc: int,
    origin: Mapping[Edge, Edge],
) -> Set[Edge]:
    """Undo one contraction.

    The cycle edge into the vertex where the tree enters the cycle is
    dropped; all other cycle edges are kept.
    """
    out = {origin[e] for e in tree}
    out |= {(pred[v], v) for v in cycle}
    for e in tree:
        if e[1] == vc:
            x = origin[e][1]
            out.discard((pred[x], x))
            break
    return out


def _search(edges: AbstractSet[Edge], root: int) -> Tuple[Set[int], Set[Edge]]:
    """Vertices reachable from `root` over `edges`, and the edges used to reach them."""
    children: Dict[int, List[int]] = defaultdict(list)
    for u, v in edges:
        children[u].append(v)

    used: Set[Edge] = set()
    seen = {root}
    stack = [root]
    while stack:
        u = stack.pop()
        for v in children[u]:
            if v not in seen:
                seen.add(v)
                used.add((u, v))
                stack.append(v)
    return seen, used


def minimum_spanning_arborescence(
    vertices: Iterable[int],
    edges: Iterable[Edge],
    root: int,
    weights: Mapping[Edge, int],
    *,
    verbose: bool = False,
) -> Set[Edge]:
    """Minimum spanning arborescence rooted at `root` (Chu-Liu-Edmonds).

    Parameters
    ----------
    vertices:
        Vertex ids.
    edges:
        Directed (tail, head) pairs; every edge needs an entry in `weights`.
    root:
        Root vertex, must be in `vertices`.
    weights:
        Integer weight per edge.

    Returns
    -------
    tree: set of edges
        Arborescence over the vertices reachable from `root`. Vertices the
        root cannot reach are left out. If a contraction level selects a
        self-loop as a vertex's cheapest incoming edge, that level yields no
        edges and the result covers less of the graph.

    Cycles are contracted in a loop and expanded in reverse order, so the
    depth of nesting is bounded by the vertex count without using the call
    stack.
    """
    vertices = set(vertices)
    edges = set(edges)
    if root not in vertices:
        raise ValueError(f"Root {root} is not a vertex of the graph.")

    # only the part the root can reach takes part in the selection
    vertices, _ = _search(edges, root)
    edges = {e for e in edges if e[0] in vertices}

    frames = []
    while True:
        pred = _min_incoming(vertices, edges, root, weights)
        cycle = _find_cycle(vertices, pred)
        if cycle is None:
            tree = {(u, v) for v, u in pred.items()}
            break
        if len(cycle) == 1:
            if verbose:
                print(f"  self-loop cycle at vertex {next(iter(cycle))} (level {len(frames)})")
            tree = set()
            break

        vc = _fresh_vertex(vertices, edges)
        if verbose:
            print(f"  contracting cycle of {len(cycle)} vertices into {vc} (level {len(frames)})")
        vertices, edges, weights, origin = _contract_cycle(vertices, edges, weights, cycle, pred, vc)
        frames.append((cycle, pred, vc, origin))

    for cycle, pred, vc, origin in reversed(frames):
        tree = _expand_cycle(tree, cycle, pred, vc, origin)

    return _search(tree, root)[1]


def biased_msa(
    vertices: Iterable[int],
    edges: Iterable[Edge],
    root: int,
    preferred: AbstractSet[Edge],
    *,
    verbose: bool = False,
) -> Set[Edge]:
    """MSA under 0/1 weights: 0 for edges in `preferred`, 1 otherwise."""
    edges = set(edges)
    weights = {e: 0 if e in preferred else 1 for e in edges}
    return minimum_spanning_arborescence(vertices, edges, root, weights, verbose=verbose)
