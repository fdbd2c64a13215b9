import numpy as np
import pytest

from graph import DIST_DTYPE


def floyd_warshall(l):
    """Reference distances for an already infinitized matrix."""
    dist = l.astype(np.int64)
    for k in range(dist.shape[0]):
        dist = np.minimum(dist, dist[:, k, np.newaxis] + dist[np.newaxis, k, :])
    return dist.astype(DIST_DTYPE)


@pytest.fixture
def chain():
    """Directed chain 0 -> 1 -> 2 -> 3."""
    l = np.zeros((4, 4), dtype=DIST_DTYPE)
    l[0, 1] = l[1, 2] = l[2, 3] = 1
    return l


CHAIN_DISTANCES = np.array([[0, 1, 2, 3],
                            [0, 0, 1, 2],
                            [0, 0, 0, 1],
                            [0, 0, 0, 0]], dtype=DIST_DTYPE)
