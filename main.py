import argparse
import csv
import os
import subprocess
import sys
import time
from math import sqrt
from statistics import mean, stdev

import numpy as np

from checks import fletcher16, read_matrix, write_matrix
from graph import DEFAULT_SEED, gen_graph
from kernel import shortest_paths

SCRIPT = os.path.join(os.path.dirname(os.path.abspath(__file__)), "path_mpi.py")


def grid_shapes(num_processes, n):
    """All (x, y) with x * y == num_processes and both at most n."""
    return [(x, num_processes // x) for x in range(1, num_processes + 1)
            if num_processes % x == 0 and x <= n and num_processes // x <= n]


def run_sequential_version(n, p, seed):
    graph = gen_graph(n, p, seed)
    start_time = time.time()
    dist, rounds = shortest_paths(graph)
    total_time = time.time() - start_time
    return dist, rounds, total_time


def parse_report(stdout):
    elapsed = None
    checksum = None
    for line in stdout.splitlines():
        if line.startswith("Time:"):
            elapsed = float(line.split(":")[-1].strip())
        elif line.startswith("Check:"):
            checksum = int(line.split(":")[-1].strip(), 16)
    return elapsed, checksum


def compare_results(sequential_result, parallel_result_file, label):
    if os.path.exists(parallel_result_file):
        parallel_dist = read_matrix(parallel_result_file)
        if np.array_equal(sequential_result, parallel_dist):
            print(f"{label} result ok.")
            return True
        print(f"{label} result DIFFER.")
    else:
        print(f"{label} {parallel_result_file} file not found.")
    return False


def run_parallel_version(args, grid, sequential_result, sequential_check):
    x, y = grid
    num_processes = x * y
    label = f"numprocs {num_processes} ({x}x{y})"
    parallel_result_file = os.path.join(
        args.output_dir, f"parallel_result_{x}x{y}.txt")

    times = []
    checks_ok = True
    for run in range(args.num_repeats):
        command = [args.mpiexec, "-np", str(num_processes),
                   sys.executable, SCRIPT,
                   "-n", str(args.n), "-p", str(args.p), "-s", str(args.seed),
                   "-x", str(x), "-y", str(y), "-o", parallel_result_file]

        print(f"\nRun {run+1}/{args.num_repeats}: {' '.join(command)}")
        try:
            result = subprocess.run(
                command, capture_output=True, text=True, check=True)
        except subprocess.CalledProcessError as e:
            print("Subprocess failed:")
            print(f"Stdout: {e.stdout}")
            print(f"Stderr: {e.stderr}")
            checks_ok = False
            continue

        print(result.stdout)
        elapsed, checksum = parse_report(result.stdout)
        if elapsed is None or checksum is None:
            print(f"Failed to parse report of {label}")
            checks_ok = False
            continue
        times.append(elapsed)
        if checksum != sequential_check:
            print(f"{label} checksum {checksum:X} DIFFER from {sequential_check:X}.")
            checks_ok = False

    checks_ok = compare_results(sequential_result, parallel_result_file, label) and checks_ok

    if times:
        mean_time = mean(times)
        stderr = stdev(times) / sqrt(len(times)) if len(times) > 1 else 0.0
        return mean_time, stderr, checks_ok
    return None, None, checks_ok


def get_parser():
    parser = argparse.ArgumentParser(
        description="Compare the MPI shortest path runs against the single-process reference")
    parser.add_argument("n", type=int, help="number of vertices")
    parser.add_argument("max_processes", type=int, help="largest process count to launch")
    parser.add_argument("num_repeats", type=int, help="runs per grid shape")
    parser.add_argument("-p", type=float, default=0.05, help="edge probability")
    parser.add_argument("-s", "--seed", type=int, default=DEFAULT_SEED)
    parser.add_argument("--mpiexec", default="mpiexec")
    parser.add_argument("--output-dir", default="apsp_output")
    parser.add_argument("--csv-dir", default="csv_result")
    return parser


def main(argv=None):
    args = get_parser().parse_args(argv)
    if args.num_repeats < 1:
        print("num_repeats must be positive", file=sys.stderr)
        return 1

    os.makedirs(args.output_dir, exist_ok=True)
    print(f"All output files will be saved to: {args.output_dir}")

    print(f"Generating graph with {args.n} vertices...")
    write_matrix(os.path.join(args.output_dir, "input_graph.txt"),
                 gen_graph(args.n, args.p, args.seed))

    print("\nRunning sequential shortest paths...")
    seq_dist, seq_rounds, seq_time = run_sequential_version(args.n, args.p, args.seed)
    seq_check = fletcher16(seq_dist)
    write_matrix(os.path.join(args.output_dir, "sequential_result.txt"), seq_dist)
    print(f"Sequential version time: {seq_time:.4f} seconds, "
          f"{seq_rounds} rounds, check {seq_check:X}")

    parallel_stats = {}
    all_ok = True

    print("\nRunning parallel shortest paths with different process grids...")
    for num_processes in range(1, args.max_processes + 1):
        for grid in grid_shapes(num_processes, args.n):
            mean_time, stderr, ok = run_parallel_version(
                args, grid, seq_dist, seq_check)
            all_ok = all_ok and ok
            if mean_time is not None:
                parallel_stats[grid] = (mean_time, stderr)

    print("\nExecution time summary:")
    print(f"Sequential version: {seq_time:.4f} seconds")
    for (x, y), (mean_time, stderr) in parallel_stats.items():
        print(f"Parallel ({x}x{y} proc): mean = {mean_time:.4f}s, stderr = {stderr:.4f}s")

    os.makedirs(args.csv_dir, exist_ok=True)
    csv_filename = os.path.join(
        args.csv_dir, f"execution_times_n{args.n}_maxp{args.max_processes}.csv")
    with open(csv_filename, "w", newline='') as f:
        writer = csv.writer(f)
        writer.writerow(["numprocs", "grid", "mean_time (s)", "stderr (s)"])

        writer.writerow([1, "sequential", f"{seq_time:.4f}", "0.0000"])

        for (x, y) in sorted(parallel_stats.keys(), key=lambda g: (g[0] * g[1], g)):
            mean_time, stderr = parallel_stats[(x, y)]
            writer.writerow([x * y, f"{x}x{y}", f"{mean_time:.4f}", f"{stderr:.4f}"])

    return 0 if all_ok else 1


if __name__ == "__main__":
    sys.exit(main())
