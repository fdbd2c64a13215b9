# path_mpi.py
import argparse
import sys
import time

import numpy as np
from mpi4py import MPI

from checks import fletcher16, write_matrix
from graph import DEFAULT_SEED, gen_graph, infinitize, deinfinitize, infinity
from kernel import square
from partition import ConfigurationError, compute_tile, validate_grid


def make_cart(comm, npx, npy):
    cart = comm.Create_cart([npx, npy], periods=[False, False], reorder=True)
    coords = cart.Get_coords(cart.Get_rank())
    return cart, coords


def shortest_paths(comm, tile, l):
    """
    Repeated squaring of l over all processes of `comm`.

    Every process squares its own tile into its copy of lnew. Cells it does
    not own keep older values there, which are never below the owner's, so a
    cell-wise MIN over all processes assembles the next matrix. The loop stops
    once every process reports an unchanged tile.

    Returns:
        (l, rounds), l identical on every process
    """
    infinitize(l)

    lnew = np.empty_like(l)
    comm.Allreduce(l, lnew, op=MPI.MAX)

    rounds = 0
    done = False
    while not done:
        mydone = square(tile, l, lnew)
        done = comm.allreduce(mydone, op=MPI.LAND)
        comm.Allreduce(lnew, l, op=MPI.MIN)
        rounds += 1

    deinfinitize(l)
    return l, rounds


def get_parser():
    parser = argparse.ArgumentParser(
        prog="path_mpi.py",
        description="Parallel all-pairs shortest path on a random graph")
    parser.add_argument("-n", type=int, default=200, help="number of nodes")
    parser.add_argument("-p", type=float, default=0.05, help="probability of including edges")
    parser.add_argument("-s", type=int, default=DEFAULT_SEED, help="random graph seed")
    parser.add_argument("-i", default=None, help="file where the adjacency matrix should be stored")
    parser.add_argument("-o", default=None, help="file where the output matrix should be stored")
    parser.add_argument("-x", type=int, required=True, help="number of processes in i-direction")
    parser.add_argument("-y", type=int, required=True, help="number of processes in j-direction")
    return parser


def check_config(args, size):
    if not 0.0 <= args.p <= 1.0:
        raise ConfigurationError(f"edge probability must be in [0, 1], got {args.p}")
    try:
        infinity(args.n)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
    validate_grid(args.n, args.x, args.y, size)


def dump_matrix(fname, l):
    try:
        write_matrix(fname, l)
    except OSError:
        print(f"Could not open output file: {fname}", file=sys.stderr)
        return False
    return True


def main(argv=None):
    args = get_parser().parse_args(argv)

    comm = MPI.COMM_WORLD
    rank = comm.Get_rank()
    size = comm.Get_size()

    # every rank reaches the same verdict, nobody is left waiting in a collective
    try:
        check_config(args, size)
    except ConfigurationError as e:
        if rank == 0:
            print(f"ERROR: {e}", file=sys.stderr)
        return 1

    l = gen_graph(args.n, args.p, args.s)

    if args.i:
        ok = dump_matrix(args.i, l) if rank == 0 else None
        if not comm.bcast(ok, root=0):
            return 1

    comm.Barrier()
    start_time = time.time()

    cart, coords = make_cart(comm, args.x, args.y)
    tile = compute_tile(args.n, (args.x, args.y), coords)
    l, rounds = shortest_paths(cart, tile, l)
    cart.Free()

    comm.Barrier()
    total_time = time.time() - start_time

    if rank == 0:
        print(f"== MPI with {size} processes")
        print(f"Grid:  {args.x}x{args.y}")
        print(f"n:     {args.n}")
        print(f"p:     {args.p:g}")
        print(f"Rounds: {rounds}")
        print(f"Time:  {total_time:g}")
        print(f"Check: {fletcher16(l):X}")

        if args.o and not dump_matrix(args.o, l):
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
