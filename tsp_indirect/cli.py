import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

import numpy as np

from tsp_indirect.context import LocalSearchConfig
from tsp_indirect.data import Instance, load_instance, load_tsplib_instances
from tsp_indirect.errors import TSPError
from tsp_indirect.evaluation import gap
from tsp_indirect.problem import TravellingSalesmanProblem
from tsp_indirect.search.base import Problem, Solution


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected an integer >= 1, got {value}")
    return number


def _load(path: Path, max_nodes: Optional[int] = None) -> List[Instance]:
    if path.is_dir():
        instances = load_tsplib_instances(path, max_nodes=max_nodes)
        if not instances:
            raise RuntimeError(f"No TSPLIB instances found in {path}.")
        return instances
    return [load_instance(path)]


def improve(problem: Problem, rng: np.random.Generator) -> Solution:
    """Construct a solution from a random decision vector and run local search on it."""
    solution = problem.construct(rng.random(problem.dimension).tolist())
    solution.local_search()
    return solution


def info(args) -> None:
    for inst in _load(Path(args.path), args.max_nodes):
        optimum = "unknown" if inst.optimum is None else f"{inst.optimum:.0f}"
        print(f"{inst.name}: dimension={inst.dimension} optimum={optimum} path={inst.path}")


def search(args) -> None:
    cfg = LocalSearchConfig(
        max_sweeps=args.max_sweeps,
        backend=args.backend,
        device=args.device,
    )
    rng = np.random.default_rng(args.seed)
    for inst in _load(Path(args.path), args.max_nodes):
        t0 = time.perf_counter()
        problem = TravellingSalesmanProblem.from_instance(inst, config=cfg)
        best = None
        for restart in range(args.restarts):
            solution = improve(problem, rng)
            log(f"{inst.name} restart {restart + 1}/{args.restarts}: fitness={solution.fitness}")
            if best is None or solution.fitness < best.fitness:
                best = solution
        runtime = time.perf_counter() - t0
        line = f"{inst.name}: best={best.fitness} tried={problem.tried_solutions} time={runtime:.2f}s"
        if inst.optimum is not None:
            line += f" gap={gap(best.fitness, inst.optimum):.2%}"
        log(line)
        if args.show_path:
            best.print()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Indirect-encoding TSP core CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    info_parser = subparsers.add_parser("info", help="Describe a TSPLIB instance (or a directory of them)")
    info_parser.add_argument("path")
    info_parser.add_argument("--max-nodes", type=int, default=None)
    info_parser.set_defaults(func=info)

    search_parser = subparsers.add_parser("search", help="2-opt local search from random decision vectors")
    search_parser.add_argument("path")
    search_parser.add_argument("--max-nodes", type=int, default=None)
    search_parser.add_argument("--restarts", type=_positive_int, default=1)
    search_parser.add_argument("--seed", type=int, default=123)
    search_parser.add_argument("--max-sweeps", type=_positive_int, default=None)
    search_parser.add_argument("--backend", choices=["python", "torch"], default="python")
    search_parser.add_argument("--device", default=None)
    search_parser.add_argument("--show-path", action="store_true")
    search_parser.set_defaults(func=search)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(asctime)s] %(levelname)s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    try:
        args.func(args)
    except TSPError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
