from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
import pandas as pd

from .graph import Digraph

FORMAT_HINT = "Each line should contain two integers separated by a space."


class GraphInputError(ValueError):
    """Graph description could not be loaded."""


class GraphFileError(GraphInputError):
    pass


class GraphFormatError(GraphInputError):
    pass


def _header_int(line: str, what: str) -> int:
    tokens = line.split()
    if len(tokens) != 1:
        raise GraphFormatError(f"Expected a single integer {what}, got {line.strip()!r}.")
    try:
        return int(tokens[0])
    except ValueError:
        raise GraphFormatError(f"Expected an integer {what}, got {tokens[0]!r}.") from None


def read_graph(path: Union[str, Path]) -> Digraph:
    """Load a graph description.

    Format: vertex count, edge count n, then n lines `u v`. The vertex count
    is informational only. Raises GraphFileError if the file cannot be opened
    and GraphFormatError on any malformed content; nothing is returned for a
    partially valid file.
    """
    path = Path(path)
    try:
        fh = open(path, "r")
    except OSError as exc:
        raise GraphFileError(f"File {path} not found.") from exc

    with fh:
        header = [fh.readline(), fh.readline()]
        if not header[1]:
            raise GraphFormatError(f"Missing vertex/edge count header. {FORMAT_HINT}")
        _header_int(header[0], "vertex count")
        n_edges = _header_int(header[1], "edge count")
        if n_edges < 0:
            raise GraphFormatError(f"Negative edge count {n_edges}.")
        if n_edges == 0:
            return Digraph()

        try:
            df = pd.read_csv(fh, sep=r"\s+", header=None, nrows=n_edges, dtype=str, engine="python")
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
            raise GraphFormatError(f"File is not in the expected format. {FORMAT_HINT}") from exc

    if len(df) != n_edges:
        raise GraphFormatError(f"Expected {n_edges} edge lines, found {len(df)}.")
    if df.shape[1] != 2 or df.isna().any().any():
        raise GraphFormatError(f"File is not in the expected format. {FORMAT_HINT}")
    if not df.apply(lambda col: col.str.fullmatch(r"[+-]?\d+")).all().all():
        raise GraphFormatError(f"File is not in the expected format. {FORMAT_HINT}")
    pairs = df.to_numpy().astype(np.int64)

    g = Digraph()
    for u, v in pairs:
        g.add_edge(int(u), int(v))
    return g


def write_graph(graph: Digraph, path: Union[str, Path]) -> Path:
    """Write `graph` in the same format `read_graph` accepts (sorted edges)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    edges = sorted(graph.edges())
    with open(path, "w") as f:
        f.write(f"{graph.num_vertices}\n{len(edges)}\n")
        for u, v in edges:
            f.write(f"{u} {v}\n")
    return path
