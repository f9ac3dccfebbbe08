import numpy as np
import pytest

from msa_sparsify.graph import Digraph
from msa_sparsify.sampler import minimal_spanning_subgraph, round_count
from msa_sparsify.scc import reachable_from


def make_strong_graph(n=12, seed=0):
    """Ring 0 -> 1 -> ... -> n-1 -> 0 plus random chords (strongly connected)."""
    rng = np.random.default_rng(seed)
    g = Digraph()
    for i in range(n):
        g.add_edge(i, (i + 1) % n)
    for _ in range(3 * n):
        u, v = (int(x) for x in rng.integers(n, size=2))
        if u != v:
            g.add_edge(u, v)
    return g


@pytest.mark.parametrize("m, expected", [(1, 1), (2, 2), (3, 3), (4, 3), (5, 4), (8, 4), (1000, 11)])
def test_round_count(m, expected):
    assert round_count(m) == expected


def test_round_count_rejects_empty():
    with pytest.raises(ValueError):
        round_count(0)


def test_runs_expected_number_of_rounds():
    g = make_strong_graph()
    trace = []
    minimal_spanning_subgraph(g, set(), rng=np.random.default_rng(1), trace=trace)
    assert len(trace) == round_count(g.num_edges)
    assert [row["round"] for row in trace] == list(range(1, len(trace) + 1))


def test_preserves_reachability_on_strongly_connected_graph():
    g = make_strong_graph(n=15, seed=4)
    n = g.num_vertices
    H = minimal_spanning_subgraph(g, set(), root=6)

    assert H.edges() <= g.edges()
    assert H.num_edges <= 2 * (n - 1)
    assert H.num_edges < g.num_edges
    assert reachable_from(H, 6) == g.vertices
    assert reachable_from(H, 6, reverse=True) == g.vertices


def test_input_graph_is_untouched():
    g = make_strong_graph()
    edges = g.edges()
    weights = dict(g.weights)
    minimal_spanning_subgraph(g, set(), rng=np.random.default_rng(2))
    assert g.edges() == edges
    assert g.weights == weights


def test_bias_set_only_grows():
    g = make_strong_graph(n=10, seed=3)
    initial = {(0, 1), (1, 2)}
    bias = set(initial)
    trace = []
    minimal_spanning_subgraph(g, bias, root=0, trace=trace)

    assert initial <= bias
    sizes = [row["bias"] for row in trace]
    assert sizes == sorted(sizes)
    assert sizes[0] >= len(initial)


def test_bias_set_is_mutated_in_place():
    g = make_strong_graph(n=10, seed=5)
    bias = set()
    H = minimal_spanning_subgraph(g, bias, root=0)
    assert bias <= g.edges()
    assert bias & H.edges()
    # the inverse tree always needs edges back into the root
    assert any(v == 0 for _, v in bias)


def test_same_seed_same_subgraph():
    g = make_strong_graph(n=20, seed=8)
    a = minimal_spanning_subgraph(g, set(), rng=np.random.default_rng(42))
    b = minimal_spanning_subgraph(g, set(), rng=np.random.default_rng(42))
    assert a.edges() == b.edges()


def test_unknown_root_is_rejected():
    g = make_strong_graph()
    with pytest.raises(ValueError):
        minimal_spanning_subgraph(g, set(), root=999)


def test_graph_without_edges_is_returned_as_copy():
    g = Digraph(vertices={1, 2})
    trace = []
    H = minimal_spanning_subgraph(g, set(), trace=trace)
    assert H is not g
    assert H.vertices == {1, 2}
    assert H.num_edges == 0
    assert trace == []


def test_keeps_reach_sets_on_graph_that_is_not_strongly_connected():
    g = Digraph.from_edges([(0, 3), (1, 3), (2, 3), (4, 0), (4, 3), (5, 1), (5, 4),
                            (6, 7), (7, 3), (7, 5), (7, 6)])
    H = minimal_spanning_subgraph(g, set(), root=0)

    assert reachable_from(H, 0) == reachable_from(g, 0) == {0, 3}
    assert reachable_from(H, 0, reverse=True) == reachable_from(g, 0, reverse=True) == {0, 4, 5, 6, 7}


def test_keeps_reach_sets_on_random_digraphs():
    rng = np.random.default_rng(19)
    for trial in range(40):
        n = 5 + trial % 6
        g = Digraph(vertices=set(range(n)))
        for u in range(n):
            for v in range(n):
                if u != v and rng.random() < 0.25:
                    g.add_edge(u, v)
        if g.num_edges == 0:
            continue
        root = int(rng.integers(n))
        H = minimal_spanning_subgraph(g, set(), root=root)

        assert H.edges() <= g.edges()
        assert reachable_from(H, root) == reachable_from(g, root)
        assert reachable_from(H, root, reverse=True) == reachable_from(g, root, reverse=True)


def test_unknown_root_is_rejected_on_graph_without_edges():
    g = Digraph(vertices={1, 2})
    with pytest.raises(ValueError):
        minimal_spanning_subgraph(g, set(), root=5)
