"""Minimum spanning arborescences and reachability-preserving sparsification.

This package provides a minimal implementation of:
- an integer-labelled directed graph store,
- minimum spanning arborescences via Chu-Liu-Edmonds cycle contraction,
- biased arborescences that prefer a given edge set,
- a randomized sampler that keeps a sparse subgraph in which a root reaches
  and is reached by the same vertices as before.
"""

from .graph import Digraph, flip_edges
from .arborescence import minimum_spanning_arborescence, biased_msa
from .sampler import minimal_spanning_subgraph, round_count
from .scc import strong_components, reachable_from, reachability_summary
from .io import read_graph, write_graph, GraphInputError, GraphFileError, GraphFormatError
from .pipeline import run_subgraph_experiment

__all__ = [
    "Digraph",
    "flip_edges",
    "minimum_spanning_arborescence",
    "biased_msa",
    "minimal_spanning_subgraph",
    "round_count",
    "strong_components",
    "reachable_from",
    "reachability_summary",
    "read_graph",
    "write_graph",
    "GraphInputError",
    "GraphFileError",
    "GraphFormatError",
    "run_subgraph_experiment",
]
