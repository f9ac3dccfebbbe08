from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set, Tuple

Edge = Tuple[int, int]


@dataclass
class Digraph:
    """Directed graph on integer vertices with a per-pair weight table.

    `out_adj[u]` lists heads of edges leaving u, `in_adj[v]` lists tails of
    edges entering v. Repeated insertions of a pair leave repeated adjacency
    entries but a single weight entry.
    """
    vertices: Set[int] = field(default_factory=set)
    out_adj: Dict[int, List[int]] = field(default_factory=lambda: defaultdict(list))
    in_adj: Dict[int, List[int]] = field(default_factory=lambda: defaultdict(list))
    weights: Dict[Edge, int] = field(default_factory=dict)

    @classmethod
    def from_edges(cls, edges: Iterable[Edge]) -> "Digraph":
        g = cls()
        for u, v in edges:
            g.add_edge(u, v)
        return g

    def add_edge(self, u: int, v: int) -> None:
        u, v = int(u), int(v)
        self.vertices.add(u)
        self.vertices.add(v)
        self.out_adj[u].append(v)
        self.in_adj[v].append(u)
        self.weights[(u, v)] = 1

    def edges(self) -> Set[Edge]:
        return {(u, v) for u, nbrs in self.out_adj.items() for v in nbrs}

    @property
    def num_vertices(self) -> int:
        return len(self.vertices)

    @property
    def num_edges(self) -> int:
        return len(self.edges())

    def reverse(self) -> "Digraph":
        """Same vertex set, every edge flipped.

        Weights are not carried over: the flipped edges get the default
        weight through `add_edge`.
        """
        rev = Digraph(vertices=set(self.vertices))
        for u, nbrs in self.out_adj.items():
            for v in nbrs:
                rev.add_edge(v, u)
        return rev

    def copy(self) -> "Digraph":
        g = Digraph(vertices=set(self.vertices), weights=dict(self.weights))
        for u, nbrs in self.out_adj.items():
            g.out_adj[u].extend(nbrs)
        for v, nbrs in self.in_adj.items():
            g.in_adj[v].extend(nbrs)
        return g

    def replace_edges(self, edges: Iterable[Edge]) -> None:
        """Reset adjacency to exactly `edges`; vertices and weights are kept."""
        self.out_adj = defaultdict(list)
        self.in_adj = defaultdict(list)
        for u, v in sorted(set(edges)):
            self.out_adj[u].append(v)
            self.in_adj[v].append(u)


def flip_edges(edges: Iterable[Edge]) -> Set[Edge]:
    return {(v, u) for u, v in edges}
