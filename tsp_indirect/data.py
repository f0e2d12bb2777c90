import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

import networkx as nx
import tsplib95

from .distance import build_distance_matrix
from .encoding import is_permutation
from .errors import InstanceShapeError
from .evaluation import tour_length


log = logging.getLogger(__name__)

TOUR_SUFFIXES = (".opt.tour", ".opt", ".tour")


@dataclass
class Instance:
    name: str
    path: Path
    graph: nx.Graph
    coords: List[Tuple[float, float]]
    optimum: Optional[float]

    @property
    def dimension(self) -> int:
        return len(self.coords)


def _node_coords(problem) -> List[Tuple[float, float]]:
    # TSPLIB nodes are 1-based; position i in the list is node i + 1.
    coords = problem.node_coords
    if not coords and problem.dimension:
        raise InstanceShapeError(f"{problem.name}: instance has no NODE_COORD_SECTION")
    points = []
    for node in sorted(coords):
        if len(coords[node]) != 2:
            raise InstanceShapeError(
                f"{problem.name}: node {node} has {len(coords[node])} coordinates, expected 2"
            )
        points.append(tuple(coords[node]))
    return points


def _optimal_tour_length(path: Path, coords: List[Tuple[float, float]]) -> Optional[float]:
    """Length of the first readable reference tour next to ``path``, in our distance convention."""
    if not coords:
        return None
    candidates = [path.with_suffix(".opt.tour")]
    candidates += [path.parent / "solutions" / f"{path.stem}{ext}" for ext in TOUR_SUFFIXES]
    for candidate in candidates:
        if not candidate.is_file():
            continue
        try:
            tour = [node - 1 for node in tsplib95.load(candidate).tours[0]]
        except Exception as exc:
            log.warning("skipping unreadable tour file %s: %s", candidate, exc)
            continue
        if len(tour) != len(coords) or not is_permutation(tour):
            log.warning("skipping tour file %s: not a tour over %d nodes", candidate, len(coords))
            continue
        return float(tour_length(build_distance_matrix(coords), tour))
    return None


def _to_instance(problem, path: Path) -> Instance:
    coords = _node_coords(problem)
    return Instance(
        name=problem.name or path.stem,
        path=path,
        graph=problem.get_graph(),
        coords=coords,
        optimum=_optimal_tour_length(path, coords),
    )


def load_instance(path: Path) -> Instance:
    path = Path(path)
    return _to_instance(tsplib95.load(path), path)


def load_tsplib_instances(
    root: Path, max_nodes: Optional[int] = None, max_instances: Optional[int] = None
) -> List[Instance]:
    instances: List[Instance] = []
    for path in sorted(Path(root).glob("*.tsp")):
        problem = tsplib95.load(path)
        if max_nodes is not None and (problem.dimension or 0) > max_nodes:
            log.debug("skipping %s: %s nodes > %d", path.name, problem.dimension, max_nodes)
            continue
        instances.append(_to_instance(problem, path))
        if max_instances is not None and len(instances) >= max_instances:
            break
    return instances
