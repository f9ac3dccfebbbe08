#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import matplotlib.pyplot as plt

from msa_sparsify.pipeline import DEFAULT_OUTPUTS_DIR, run_subgraph_experiment


def main() -> None:
    ap = argparse.ArgumentParser(
        description="Extract a sparse subgraph preserving reachability to and from a random root.")

    ap.add_argument("graph_file", help="Graph description: vertex count, edge count, then one 'u v' per line.")
    ap.add_argument("--seed", type=int, default=None, help="Seed for the random root choice.")
    ap.add_argument("--root", type=int, default=None, help="Fix the root instead of drawing it.")
    ap.add_argument("--outputs-dir", default=str(DEFAULT_OUTPUTS_DIR), help="Directory to save edges/CSVs/figures.")
    ap.add_argument("--no-progress", action="store_true", help="Hide the per-round progress bar.")
    ap.add_argument("--plot", action="store_true", help="Save a figure of edge counts per round.")

    args = ap.parse_args()

    try:
        H, rounds, summary = run_subgraph_experiment(
            args.graph_file,
            seed=args.seed,
            root=args.root,
            outputs_dir=args.outputs_dir,
            progress=(not args.no_progress),
        )
    except ValueError as exc:
        print(exc)
        sys.exit(1)

    outputs_dir = Path(args.outputs_dir)
    print("\nSaved:", outputs_dir / "subgraph_edges.txt")
    print(rounds.to_string(index=False))
    if not summary.get("preserved", True):
        print("Warning: root reachability was not fully preserved.")

    if args.plot and not rounds.empty:
        (outputs_dir / "figures").mkdir(parents=True, exist_ok=True)
        plt.figure()
        plt.plot(rounds["round"], rounds["edges"], marker="o", label="subgraph edges")
        plt.plot(rounds["round"], rounds["bias"], marker="s", label="bias set")
        plt.axhline(summary["edges_before"], linestyle="--", color="gray", label="input edges")
        plt.xlabel("Round")
        plt.ylabel("Edges")
        plt.title("Edge count per sampling round")
        plt.legend()
        plt.tight_layout()
        fig = outputs_dir / "figures" / "edges_per_round.png"
        plt.savefig(fig, dpi=300, bbox_inches="tight")
        plt.close()
        print("Saved figure:", fig)


if __name__ == "__main__":
    main()
