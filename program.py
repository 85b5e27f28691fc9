import argparse
import logging
import math
import sys
import time

import numpy as np

from typing import TextIO

from convex_hull_andrew import AndrewHullBuilder
from convex_hull_graham import GrahamHullBuilder
from geometry import Point, is_integral
from graham_scan import CollinearityPolicy


logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# built-in set, the last points repeat earlier ones on purpose
DEMO_POINTS = [
    Point(3, 7), Point(5, 4), Point(9, 21), Point(6, 14), Point(0, 20), Point(2, 0),
    Point(-5, 10), Point(10, 8), Point(0, 2), Point(0, 0), Point(4, 0),
    Point(0, 0), Point(9, 21), Point(4, 0), Point(-5, 10),
]

ALGORITHMS = {
    "graham": GrahamHullBuilder,
    "andrew": AndrewHullBuilder,
}

DISTRIBUTIONS = ("uniform", "uniform_int", "circle", "gaussian", "clusters")


def parse_number(token: str):
    try:
        return int(token)
    except ValueError:
        pass
    try:
        value = float(token)
    except ValueError:
        raise ValueError(f"Not a number: {token!r}") from None
    if not math.isfinite(value):
        raise ValueError(f"Coordinates must be finite, got {token!r}")
    return value


def parse_points(text: str) -> list[Point]:
    """
    Parse "n x1 y1 ... xn yn", any whitespace between tokens.
    Returns an empty list for n <= 0.
    """
    tokens = text.split()
    if not tokens:
        return []

    try:
        n = int(tokens[0])
    except ValueError:
        raise ValueError(f"Point count must be an integer, got {tokens[0]!r}") from None
    if n <= 0:
        return []

    coords = tokens[1:1 + 2 * n]
    if len(coords) < 2 * n:
        raise ValueError(f"Expected {n} points, got {len(coords) // 2} complete pairs")
    if len(tokens) > 1 + 2 * n:
        logger.warning("Ignoring %d trailing tokens", len(tokens) - 1 - 2 * n)

    values = [parse_number(t) for t in coords]
    return [Point(values[i], values[i + 1]) for i in range(0, 2 * n, 2)]


def load_points(stream: TextIO) -> list[Point] | None:
    """
    Read points from a stream. None means there was no input at all.
    """
    text = stream.read()
    if not text.strip():
        return None
    return parse_points(text)


def generate_random_points(n: int, distribution: str, seed: int = 42) -> list[Point]:
    rng = np.random.default_rng(seed)

    if distribution == "uniform":
        xs = rng.uniform(0, 1000, n)
        ys = rng.uniform(0, 1000, n)
    elif distribution == "uniform_int":
        xs = rng.integers(0, 1000, n)
        ys = rng.integers(0, 1000, n)
    elif distribution == "circle":
        angle = rng.uniform(0, 2 * np.pi, n)
        r = np.sqrt(rng.uniform(0, 1, n)) * 500
        xs = 500 + r * np.cos(angle)
        ys = 500 + r * np.sin(angle)
    elif distribution == "gaussian":
        xs = rng.normal(500, 150, n)
        ys = rng.normal(500, 150, n)
    elif distribution == "clusters":
        n_clusters = 5
        centers = rng.uniform(100, 900, (n_clusters, 2))
        labels = rng.integers(0, n_clusters, n)
        xs = rng.normal(centers[labels, 0], 50)
        ys = rng.normal(centers[labels, 1], 50)
    else:
        raise ValueError(f"Unknown distribution: {distribution}")

    if distribution == "uniform_int":
        return [Point(int(x), int(y)) for x, y in zip(xs, ys)]
    return [Point(float(x), float(y)) for x, y in zip(xs, ys)]


def format_coord(value) -> str:
    if is_integral(value):
        return str(int(value))
    return f"{float(value):.10g}"


def format_point(p: Point) -> str:
    return f"{format_coord(p.x)} {format_coord(p.y)}"


def write_hull(hull: list[Point], out: TextIO):
    out.write(f"{len(hull)}\n")
    for p in hull:
        out.write(format_point(p) + "\n")


def write_steps(steps: list[tuple[Point, ...]], out: TextIO):
    """
    Print every intermediate stack, top of the stack first.
    """
    for i, stack in enumerate(steps):
        out.write(f"# step {i}\n")
        for p in reversed(stack):
            out.write(f"({format_coord(p.x)}, {format_coord(p.y)})\n")
        out.write("\n")


def compare_algorithms(points: list[Point], policy: CollinearityPolicy) -> dict[str, dict]:
    results = {}
    for name, algo_class in ALGORITHMS.items():
        algo = algo_class(policy=policy)
        start = time.perf_counter()
        hull = algo.compute_hull(points)
        exec_time = time.perf_counter() - start
        results[name] = {
            'time': exec_time,
            'size': len(hull),
            'hull': hull,
        }
    return results


def write_comparison(results: dict[str, dict], n_points: int, out: TextIO):
    out.write(f"{'algorithm':<10} {'time (s)':>12} {'size':>6} {'points/s':>12}\n")
    for name, res in results.items():
        speed = n_points / res['time'] if res['time'] > 0 else 0
        out.write(f"{name:<10} {res['time']:>12.6f} {res['size']:>6} {speed:>12.0f}\n")

    hulls = [res['hull'] for res in results.values()]
    agree = all(h == hulls[0] for h in hulls[1:])
    out.write(f"hulls agree: {'yes' if agree else 'NO'}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="graham-hull",
        description="Convex hull of 2D points with Graham's scan. "
                    "Input: point count followed by coordinate pairs.",
    )
    parser.add_argument("input", nargs="?", help="input file, standard input if omitted")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--demo", action="store_true", help="use the built-in point set")
    source.add_argument("--random", type=int, metavar="N", help="generate N random points")
    parser.add_argument("--distribution", choices=DISTRIBUTIONS, default="uniform")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument(
        "--policy",
        choices=[p.value for p in CollinearityPolicy],
        default=CollinearityPolicy.KEEP_EXTREME_ONLY.value,
        help="what to do with collinear points on the hull boundary",
    )
    parser.add_argument("--trace", action="store_true", help="print intermediate stacks of the scan")
    parser.add_argument("--compare", action="store_true", help="time graham against andrew")
    parser.add_argument("--plot", metavar="FILE", help="save a picture of the hull")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def read_input(args, stdin: TextIO) -> list[Point]:
    if args.demo:
        return list(DEMO_POINTS)
    if args.random is not None:
        logger.info("Generating %d points (%s)", args.random, args.distribution)
        return generate_random_points(args.random, args.distribution, args.seed)

    if args.input:
        with open(args.input, 'r', encoding='utf-8') as f:
            points = load_points(f)
    elif stdin.isatty():
        points = None
    else:
        points = load_points(stdin)

    if points is None:
        logger.info("No input, using the built-in point set")
        return list(DEMO_POINTS)
    return points


def main(argv: list[str] | None = None, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout

    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    try:
        points = read_input(args, stdin)
    except (OSError, ValueError) as e:
        logger.error("Could not read points: %s", e)
        return 1
    logger.info("Loaded %d points", len(points))

    if not points:
        write_hull([], stdout)
        return 0

    policy = CollinearityPolicy(args.policy)
    builder = GrahamHullBuilder(policy=policy, trace=args.trace)
    builder.set_points(points)

    start = time.perf_counter()
    hull = builder.build()
    logger.info("Hull of %d points built in %.6f s", len(points), time.perf_counter() - start)

    if args.trace:
        write_steps(builder.steps, stdout)
    write_hull(hull, stdout)

    if args.compare:
        write_comparison(compare_algorithms(points, policy), len(points), stdout)

    if args.plot:
        from visualization import save_hull_figure
        try:
            save_hull_figure(points, hull, args.plot, steps=builder.steps)
        except OSError as e:
            logger.error("Could not save plot: %s", e)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
