import numpy as np


def fletcher16(data):
    """
    Fletcher-16 checksum of an integer matrix.

    Two-dimensional input is linearized column by column, matching the order
    of the text dump. Both running sums are taken mod 255.
    """
    data = np.asarray(data, dtype=np.int64)
    if data.ndim == 2:
        data = data.ravel(order="F")
    # sum1 after each element is the prefix sum mod 255, sum2 adds those up
    sum1 = np.cumsum(data) % 255
    s1 = int(sum1[-1]) if sum1.size else 0
    s2 = int(sum1.sum() % 255)
    return (s2 << 8) | s1


def write_matrix(fname, l):
    """File row i holds l[i, 0] ... l[i, n-1], each followed by a space."""
    n = l.shape[0]
    with open(fname, "w") as f:
        for i in range(n):
            f.write("".join(f"{v} " for v in l[i, :]))
            f.write("\n")


def read_matrix(fname):
    rows = []
    with open(fname) as f:
        for line in f:
            if line.strip():
                rows.append([int(v) for v in line.split()])
    return np.array(rows, dtype=np.int32)
