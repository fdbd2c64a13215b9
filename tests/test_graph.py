import numpy as np
import pytest

from graph import (DIST_DTYPE, MAX_NODES, deinfinitize, gen_graph,
                   infinitize, infinity)


def test_infinity_is_n_plus_one():
    assert infinity(4) == 5
    assert infinity(200) == 201


@pytest.mark.parametrize("n", [0, -3, MAX_NODES + 1])
def test_infinity_rejects_bad_sizes(n):
    with pytest.raises(ValueError):
        infinity(n)


def test_infinitize_replaces_missing_edges_and_keeps_diagonal():
    l = np.array([[0, 1, 0],
                  [0, 0, 1],
                  [1, 0, 0]], dtype=DIST_DTYPE)
    out = infinitize(l)
    assert out is l
    np.testing.assert_array_equal(l, [[0, 1, 4],
                                      [4, 0, 1],
                                      [1, 4, 0]])


def test_deinfinitize_restores_zero_convention():
    l = np.array([[0, 1, 4],
                  [4, 0, 2],
                  [1, 4, 0]], dtype=DIST_DTYPE)
    deinfinitize(l)
    np.testing.assert_array_equal(l, [[0, 1, 0],
                                      [0, 0, 2],
                                      [1, 0, 0]])


def test_gen_graph_is_deterministic():
    np.testing.assert_array_equal(gen_graph(50, 0.1), gen_graph(50, 0.1))
    assert not np.array_equal(gen_graph(50, 0.1, seed=1), gen_graph(50, 0.1, seed=2))


def test_gen_graph_draws_column_by_column():
    n, p, seed = 6, 0.4, 7
    np.random.seed(seed)
    draws = np.random.random((n, n))
    l = gen_graph(n, p, seed)
    for i in range(n):
        for j in range(n):
            expected = 0 if i == j else int(draws[j, i] < p)
            assert l[i, j] == expected


def test_gen_graph_shape_and_values():
    l = gen_graph(30, 0.2)
    assert l.shape == (30, 30)
    assert l.dtype == DIST_DTYPE
    assert l.flags["C_CONTIGUOUS"]
    assert set(np.unique(l)) <= {0, 1}
    assert (np.diag(l) == 0).all()


def test_gen_graph_extreme_probabilities():
    assert (gen_graph(10, 0.0) == 0).all()
    full = gen_graph(10, 1.0)
    assert (full == 1 - np.eye(10, dtype=DIST_DTYPE)).all()
