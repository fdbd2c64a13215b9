import numpy as np

from graph import infinitize, deinfinitize
from partition import Tile


def square(tile, l, lnew):
    """
    One min-plus squaring step restricted to `tile`.

    If l holds the shortest distances using at most 2**s hops, then
    l[i, k] + l[k, j] minimized over k gives the distances using at most
    2**(s+1) hops. Only lnew[tile] is written, and only downwards.

    Args:
        tile: Tile(imin, imax, jmin, jmax) owned by the caller
        l: distances at step s, shape (n, n), read only
        lnew: distances at step s+1, updated in place inside the tile

    Returns:
        bool: True if no entry of the tile improved
    """
    imin, imax, jmin, jmax = tile
    done = True
    l_cols = l[:, jmin:jmax]
    for i in range(imin, imax):
        # candidates[k, j] = l[i, k] + l[k, j]
        candidates = l[i, :, np.newaxis] + l_cols
        best = candidates.min(axis=0)
        row = lnew[i, jmin:jmax]
        improved = best < row
        if improved.any():
            row[improved] = best[improved]
            done = False
    return done


def shortest_paths(l, tiles=None):
    """
    Single-process reference: runs the same rounds as the MPI driver, with
    every tile squared by this process.

    Args:
        l: 0/1 adjacency matrix, overwritten with the distances
        tiles: tiles to square each round, defaults to the whole matrix

    Returns:
        (l, rounds)
    """
    n = l.shape[0]
    if tiles is None:
        tiles = [Tile(0, n, 0, n)]

    infinitize(l)
    lnew = l.copy()
    rounds = 0
    done = False
    while not done:
        # square every tile before reading the flags
        flags = [square(tile, l, lnew) for tile in tiles]
        done = all(flags)
        np.copyto(l, lnew)
        rounds += 1
    deinfinitize(l)
    return l, rounds
