from __future__ import annotations

from typing import Dict, List, Set, Tuple

import numpy as np
from scipy import sparse
from scipy.sparse.csgraph import breadth_first_order, connected_components

from .graph import Digraph


def _index(graph: Digraph) -> Tuple[np.ndarray, Dict[int, int]]:
    idx_to_id = np.array(sorted(graph.vertices), dtype=np.int64)
    id_to_idx = {int(v): i for i, v in enumerate(idx_to_id)}
    return idx_to_id, id_to_idx


def to_csr(graph: Digraph) -> Tuple[sparse.csr_matrix, np.ndarray, Dict[int, int]]:
    """Unit-weight CSR adjacency over the sorted vertex ids."""
    idx_to_id, id_to_idx = _index(graph)
    n = len(idx_to_id)
    edges = sorted(graph.edges())
    src = np.array([id_to_idx[u] for u, _ in edges], dtype=np.int32)
    dst = np.array([id_to_idx[v] for _, v in edges], dtype=np.int32)
    A = sparse.csr_matrix((np.ones(len(edges), dtype=np.int8), (src, dst)), shape=(n, n))
    return A, idx_to_id, id_to_idx


def reachable_from(graph: Digraph, root: int, *, reverse: bool = False) -> Set[int]:
    """Vertices reachable from `root` (or, with `reverse`, that reach it)."""
    if root not in graph.vertices:
        raise ValueError(f"Root {root} is not a vertex of the graph.")
    A, idx_to_id, id_to_idx = to_csr(graph)
    if reverse:
        A = A.transpose().tocsr()
    order = breadth_first_order(A, id_to_idx[root], directed=True, return_predecessors=False)
    return set(int(v) for v in idx_to_id[order])


def strong_components(graph: Digraph) -> Tuple[Dict[int, int], List[List[int]]]:
    """Strongly connected components of `graph`.

    Returns
    -------
    comp_id:
        vertex id -> component index in [0, m-1].
    comps:
        list of components; comps[c] is the sorted list of vertex ids in c.
    """
    A, idx_to_id, _ = to_csr(graph)
    if A.shape[0] == 0:
        return {}, []
    m, labels = connected_components(A, directed=True, connection="strong")
    comps: List[List[int]] = [[] for _ in range(m)]
    for v, c in zip(idx_to_id, labels):
        comps[int(c)].append(int(v))
    comp_id = {int(v): int(c) for v, c in zip(idx_to_id, labels)}
    return comp_id, comps


def reachability_summary(original: Digraph, subgraph: Digraph, root: int) -> dict:
    """Compare reach from/to `root` and the root's SCC size before and after."""
    comp_o, comps_o = strong_components(original)
    comp_s, comps_s = strong_components(subgraph)
    fwd_o = reachable_from(original, root)
    bwd_o = reachable_from(original, root, reverse=True)
    fwd_s = reachable_from(subgraph, root)
    bwd_s = reachable_from(subgraph, root, reverse=True)
    return {
        "reach_from_root": len(fwd_o),
        "reach_from_root_kept": len(fwd_s),
        "reach_to_root": len(bwd_o),
        "reach_to_root_kept": len(bwd_s),
        "root_scc_size": len(comps_o[comp_o[root]]),
        "root_scc_size_kept": len(comps_s[comp_s[root]]),
        "preserved": fwd_o == fwd_s and bwd_o == bwd_s,
    }
