import logging
from typing import Iterable, Optional, Sequence, Tuple

import networkx as nx
import numpy as np

from .errors import CityIndexError, EmptyGraphError

logger = logging.getLogger(__name__)

DEFAULT_PENALTY_FACTOR = 2.0


class DistanceModel:
    """Pairwise distances over a fixed universe of integer city ids.

    Any non-positive stored value means the two cities are not directly
    connected. ``max_distance`` and ``avg_distance`` are computed once over
    the positive edges of the whole graph, and ``default_distance`` (the
    penalty substituted for a missing edge) is ``max_distance * penalty_factor``.
    The matrix is read-only after construction.
    """

    def __init__(
        self,
        distances,
        penalty_factor: float = DEFAULT_PENALTY_FACTOR,
        city_ids: Optional[Iterable[int]] = None,
    ):
        matrix = np.array(distances, dtype=float)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ValueError(f"Distance matrix must be square, got shape {matrix.shape}")
        if penalty_factor < 1:
            raise ValueError(f"penalty_factor must be >= 1, got {penalty_factor}")

        both = (matrix > 0) & (matrix.T > 0)
        if not np.allclose(matrix[both], matrix.T[both]):
            raise ValueError("Distance matrix is not symmetric.")
        matrix = np.maximum(matrix, matrix.T)
        np.fill_diagonal(matrix, 0.0)
        matrix.setflags(write=False)

        upper = matrix[np.triu_indices(matrix.shape[0], k=1)]
        edges = upper[upper > 0]
        if edges.size == 0:
            raise EmptyGraphError("Graph has no positive edges; average distance is undefined.")

        self._distances = matrix
        self._penalty_factor = float(penalty_factor)
        self._max = float(edges.max())
        self._avg = float(edges.sum() / edges.size)
        self._default = self._max * self._penalty_factor
        if city_ids is None:
            self._city_ids: Tuple[int, ...] = tuple(range(matrix.shape[0]))
        else:
            self._city_ids = tuple(sorted(int(c) for c in city_ids))
            for c in self._city_ids:
                self._check(c)
        self._city_set = frozenset(self._city_ids)
        logger.debug(
            "distance model: size=%d edges=%d max=%.4f avg=%.4f default=%.4f",
            self.size,
            edges.size,
            self._max,
            self._avg,
            self._default,
        )

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[Tuple[int, int, float]],
        size: Optional[int] = None,
        penalty_factor: float = DEFAULT_PENALTY_FACTOR,
        city_ids: Optional[Iterable[int]] = None,
    ) -> "DistanceModel":
        edges = [(int(a), int(b), float(d)) for a, b, d in edges]
        if size is None:
            ids = [a for a, _, _ in edges] + [b for _, b, _ in edges]
            if city_ids is not None:
                city_ids = list(city_ids)
                ids.extend(city_ids)
            size = max(ids) + 1 if ids else 0
        matrix = np.zeros((size, size), dtype=float)
        for a, b, d in edges:
            if a < 0 or b < 0 or a >= size or b >= size:
                raise CityIndexError(f"Edge ({a}, {b}) outside city universe of size {size}")
            matrix[a, b] = d
            matrix[b, a] = d
        return cls(matrix, penalty_factor=penalty_factor, city_ids=city_ids)

    @classmethod
    def from_graph(cls, graph: nx.Graph, penalty_factor: float = DEFAULT_PENALTY_FACTOR) -> "DistanceModel":
        nodes = [int(n) for n in graph.nodes()]
        edges = [
            (u, v, w)
            for u, v, w in graph.edges(data="weight", default=0.0)
            if u != v and w is not None and w > 0
        ]
        size = max(nodes) + 1 if nodes else 0
        return cls.from_edges(edges, size=size, penalty_factor=penalty_factor, city_ids=nodes)

    @property
    def size(self) -> int:
        return self._distances.shape[0]

    @property
    def city_ids(self) -> Tuple[int, ...]:
        return self._city_ids

    def city_count(self) -> int:
        return len(self._city_ids)

    @property
    def distances(self) -> np.ndarray:
        return self._distances

    @property
    def penalty_factor(self) -> float:
        return self._penalty_factor

    @property
    def max_distance(self) -> float:
        return self._max

    @property
    def avg_distance(self) -> float:
        return self._avg

    @property
    def default_distance(self) -> float:
        return self._default

    def _check(self, city: int) -> int:
        if not 0 <= city < self.size:
            raise CityIndexError(f"City id {city} outside universe [0, {self.size})")
        return city

    def stored(self, a: int, b: int) -> float:
        return float(self._distances[self._check(a), self._check(b)])

    def has_edge(self, a: int, b: int) -> bool:
        return self.stored(a, b) > 0

    def distance(self, a: int, b: int) -> float:
        d = self.stored(a, b)
        return d if d > 0 else self._default

    def penalized_matrix(self) -> np.ndarray:
        return np.where(self._distances > 0, self._distances, self._default)

    def check_ids(self, cities: Sequence[int]) -> None:
        for c in cities:
            if c not in self._city_set:
                raise CityIndexError(f"City id {c} is not a city of this model")

    def __repr__(self) -> str:
        return (
            f"DistanceModel(size={self.size}, max={self._max:g}, "
            f"avg={self._avg:g}, default={self._default:g})"
        )
