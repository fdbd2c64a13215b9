import numpy as np

DIST_DTYPE = np.int32
DEFAULT_SEED = 10302011

# l[i, j] and l[j, i] for an unknown path are both infinity(n), so a single
# candidate sum reaches 2 * (n + 1) and has to stay inside int32.
MAX_NODES = (np.iinfo(DIST_DTYPE).max - 2) // 2


def infinity(n):
    """Distance used for "no path known yet" on an unweighted graph of n nodes.

    Any loop-free path visits at most n - 1 edges, so n + 1 is longer than
    every real shortest path.
    """
    if n < 1:
        raise ValueError(f"n must be positive, got {n}")
    if n > MAX_NODES:
        raise ValueError(f"n={n} overflows {np.dtype(DIST_DTYPE).name} distances")
    return n + 1


def gen_graph(n, p, seed=DEFAULT_SEED):
    """G(n, p) random graph as a 0/1 adjacency matrix.

    Draws are consumed column by column (j outer, i inner), so the same seed
    gives the same graph on every process.
    """
    np.random.seed(seed)
    draws = np.random.random((n, n))
    l = (draws < p).astype(DIST_DTYPE).T.copy()
    np.fill_diagonal(l, 0)
    return l


def infinitize(l):
    n = l.shape[0]
    l[l == 0] = infinity(n)
    np.fill_diagonal(l, 0)
    return l


def deinfinitize(l):
    n = l.shape[0]
    l[l == infinity(n)] = 0
    return l
