from __future__ import annotations

import math
from typing import List, Optional, Set

import numpy as np
from tqdm.auto import tqdm

from .arborescence import biased_msa
from .graph import Digraph, Edge, flip_edges


def round_count(m: int) -> int:
    """Number of sampling rounds for a graph with `m` edges: ceil(log2 m) + 1."""
    if m <= 0:
        raise ValueError("Round count needs a positive edge count.")
    return int(math.ceil(math.log2(m))) + 1


def minimal_spanning_subgraph(
    graph: Digraph,
    bias: Set[Edge],
    *,
    rng: Optional[np.random.Generator] = None,
    root: Optional[int] = None,
    progress: bool = False,
    verbose: bool = False,
    trace: Optional[List[dict]] = None,
) -> Digraph:
    """Sparse subgraph keeping reachability from and to a root.

    Each round takes a forward arborescence out of the root and an arborescence
    into the root (computed on the reversed graph), both biased towards edges
    already in `bias`. The working graph is reset to their union and the
    edges only the inverse tree needed are appended to `bias`.

    Parameters
    ----------
    graph:
        Input graph; left untouched.
    bias:
        Preferred edges. Grown in place, never shrunk.
    rng:
        Source for the random root. Defaults to a fresh unseeded generator.
    root:
        Fix the root instead of drawing it.
    progress:
        Show a tqdm bar over rounds.
    verbose:
        Print the chosen root, the round count and the final edge count.
    trace:
        If given, one dict per round is appended with edge counts.

    Returns
    -------
    H: Digraph
        Copy of `graph` whose edge set is the final forward tree plus the
        extra inverse-tree edges.
    """
    H = graph.copy()
    m = H.num_edges
    if root is not None and root not in H.vertices:
        raise ValueError(f"Root {root} is not a vertex of the graph.")
    if m == 0:
        return H

    if root is None:
        if rng is None:
            rng = np.random.default_rng()
        order = sorted(H.vertices)
        root = order[int(rng.integers(len(order)))]

    iterations = round_count(m)
    if verbose:
        print(f"Sampling from root {root}: {m} edges, {iterations} rounds")

    for i in tqdm(range(iterations), desc="Sampling rounds", disable=not progress):
        forward = biased_msa(H.vertices, H.edges(), root, bias)

        reversed_H = H.reverse()
        inverse = flip_edges(
            biased_msa(reversed_H.vertices, reversed_H.edges(), root, flip_edges(forward))
        )
        added = inverse - forward

        H.replace_edges(forward | added)
        bias |= added

        if trace is not None:
            trace.append({
                "round": i + 1,
                "root": root,
                "forward": len(forward),
                "inverse": len(inverse),
                "added": len(added),
                "edges": H.num_edges,
                "bias": len(bias),
            })

    if verbose:
        print(f"Number of edges in the resulting minimal spanning subgraph: {H.num_edges}")
    return H
