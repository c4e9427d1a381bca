import logging
import sqlite3
from contextlib import closing
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import networkx as nx
import tsplib95

from .distance import DEFAULT_PENALTY_FACTOR, DistanceModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class City:
    id: int
    name: str = field(compare=False)
    country: str = field(compare=False, default="")
    latitude: float = field(compare=False, default=0.0)
    longitude: float = field(compare=False, default=0.0)
    population: int = field(compare=False, default=0)

    def __str__(self) -> str:
        return f"{self.name}, {self.country}"


@dataclass
class Instance:
    name: str
    path: Path
    cities: Dict[int, City]
    graph: nx.Graph
    model: DistanceModel


def _read_dimension(path: Path) -> Optional[int]:
    try:
        with path.open("r") as f:
            for line in f:
                if "DIMENSION" in line.upper():
                    parts = line.replace(":", " ").split()
                    for token in parts:
                        if token.isdigit():
                            return int(token)
        return None
    except OSError:
        return None


def load_sqlite_instance(db_path: Path, penalty_factor: float = DEFAULT_PENALTY_FACTOR) -> Instance:
    db_path = Path(db_path)
    if not db_path.exists():
        raise FileNotFoundError(f"SQLite database not found: {db_path}")
    graph = nx.Graph()
    cities: Dict[int, City] = {}
    with closing(sqlite3.connect(db_path)) as conn:
        conn.row_factory = sqlite3.Row
        for row in conn.execute(
            "SELECT id, name, country, latitude, longitude, population FROM cities ORDER BY id"
        ):
            city = City(
                id=int(row["id"]),
                name=row["name"],
                country=row["country"],
                latitude=float(row["latitude"]),
                longitude=float(row["longitude"]),
                population=int(row["population"]),
            )
            cities[city.id] = city
            graph.add_node(city.id, city=city)
        for row in conn.execute("SELECT id_city_1, id_city_2, distance FROM connections"):
            a, b = int(row["id_city_1"]), int(row["id_city_2"])
            graph.add_edge(a, b, weight=float(row["distance"]))
    logger.info(
        "loaded %d cities and %d connections from %s",
        len(cities),
        graph.number_of_edges(),
        db_path,
    )
    model = DistanceModel.from_graph(graph, penalty_factor=penalty_factor)
    return Instance(name=db_path.stem, path=db_path, cities=cities, graph=graph, model=model)


def load_tsplib_instance(path: Path, penalty_factor: float = DEFAULT_PENALTY_FACTOR) -> Instance:
    path = Path(path)
    problem = tsplib95.load(path)
    graph = problem.get_graph()
    cities = {int(n): City(id=int(n), name=str(n)) for n in graph.nodes()}
    model = DistanceModel.from_graph(graph, penalty_factor=penalty_factor)
    return Instance(name=problem.name or path.stem, path=path, cities=cities, graph=graph, model=model)


def load_tsplib_instances(
    root: Path,
    max_nodes: Optional[int] = None,
    max_instances: Optional[int] = None,
    penalty_factor: float = DEFAULT_PENALTY_FACTOR,
) -> List[Instance]:
    tsp_files = sorted(Path(root).glob("*.tsp"))
    instances: List[Instance] = []
    for p in tsp_files:
        if max_nodes is not None:
            dim = _read_dimension(p)
            if dim is not None and dim > max_nodes:
                logger.debug("skipping %s: dimension %d > %d", p.name, dim, max_nodes)
                continue
        instances.append(load_tsplib_instance(p, penalty_factor=penalty_factor))
        if max_instances is not None and len(instances) >= max_instances:
            break
    return instances


def load_instance(path: Path, penalty_factor: float = DEFAULT_PENALTY_FACTOR) -> Instance:
    path = Path(path)
    if path.suffix == ".tsp":
        return load_tsplib_instance(path, penalty_factor=penalty_factor)
    return load_sqlite_instance(path, penalty_factor=penalty_factor)
