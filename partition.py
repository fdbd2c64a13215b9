from collections import namedtuple

Tile = namedtuple("Tile", ["imin", "imax", "jmin", "jmax"])


class ConfigurationError(Exception):
    """Process grid or problem size that cannot be run."""


def partition(total, parts, index):
    """
    Split `total` indices into `parts` contiguous blocks.

    The first `total % parts` blocks get one extra index.

    Returns:
        (start, length) of block `index`
    """
    if parts < 1:
        raise ConfigurationError(f"number of parts must be positive, got {parts}")
    if parts > total:
        raise ConfigurationError(f"cannot split {total} indices into {parts} non-empty parts")
    if not 0 <= index < parts:
        raise ConfigurationError(f"part index {index} outside [0, {parts})")

    q, r = divmod(total, parts)
    if index < r:
        length = q + 1
        start = index * length
    else:
        length = q
        start = r * (q + 1) + (index - r) * q
    return start, length


def compute_tile(n, dims, coords):
    """Rows are split along grid axis 0, columns along grid axis 1."""
    imin, nx = partition(n, dims[0], coords[0])
    jmin, ny = partition(n, dims[1], coords[1])
    return Tile(imin, imin + nx, jmin, jmin + ny)


def all_tiles(n, dims):
    return [compute_tile(n, dims, (px, py))
            for px in range(dims[0]) for py in range(dims[1])]


def validate_grid(n, npx, npy, size):
    if npx < 1 or npy < 1:
        raise ConfigurationError(f"grid dimensions must be positive, got {npx}x{npy}")
    if npx * npy != size:
        raise ConfigurationError(
            f"{npx * npy} procs requested while only {size} procs available")
    if npx > n or npy > n:
        raise ConfigurationError(
            f"grid {npx}x{npy} leaves processes without rows or columns for n={n}")
