import random
from itertools import combinations
from typing import Iterable, Iterator, Tuple

from .distance import DistanceModel
from .errors import EmptyGraphError, InvalidTourError


class Tour:
    """An open Hamiltonian path over the cities of a ``DistanceModel``.

    The tour is immutable. Its cost is evaluated once at construction, using
    the whole-graph statistics cached on ``model``, unless a trusted cost is
    supplied through ``Tour.with_cost``.
    """

    __slots__ = ("_order", "_model", "_cost")

    def __init__(self, order: Iterable[int], model: DistanceModel):
        self._order = _validated_order(order, model)
        self._model = model
        self._cost = self._evaluate_cost()

    @classmethod
    def with_cost(cls, order: Iterable[int], model: DistanceModel, cost: float) -> "Tour":
        tour = cls.__new__(cls)
        tour._order = _validated_order(order, model)
        tour._model = model
        tour._cost = float(cost)
        return tour

    @property
    def order(self) -> Tuple[int, ...]:
        return self._order

    @property
    def model(self) -> DistanceModel:
        return self._model

    @property
    def cost(self) -> float:
        return self._cost

    def _edges(self) -> Iterator[Tuple[int, int]]:
        return zip(self._order, self._order[1:])

    def _evaluate_cost(self) -> float:
        n = len(self._order)
        if n < 2:
            return 0.0
        m = self._model
        penalty = m.max_distance * m.penalty_factor
        total = 0.0
        for a, b in self._edges():
            total += m.stored(a, b) if m.has_edge(a, b) else penalty
        return total / (m.avg_distance * (n - 1))

    def is_feasible(self) -> bool:
        for a, b in self._edges():
            if not self._model.has_edge(a, b):
                return False
        return True

    def sum_of_distances(self) -> float:
        return float(sum(self._model.distance(a, b) for a, b in self._edges()))

    def _pair_distances(self) -> list:
        # Every unordered pair in the tour, not just consecutive ones.
        stored = (self._model.stored(a, b) for a, b in combinations(self._order, 2))
        return [d for d in stored if d > 0]

    def max_pair_distance(self) -> float:
        return max(self._pair_distances(), default=0.0)

    def avg_pair_distance(self) -> float:
        pairs = self._pair_distances()
        if not pairs:
            raise EmptyGraphError(f"No connected pair among the cities of {list(self._order)}")
        return sum(pairs) / len(pairs)

    def crossover(self, other: "Tour", rng: random.Random) -> "Tour":
        from .crossover import order_crossover

        return order_crossover(self, other, rng)

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[int]:
        return iter(self._order)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Tour):
            return NotImplemented
        return self._model is other._model and self._order == other._order

    def __hash__(self) -> int:
        return hash((id(self._model), self._order))

    def __repr__(self) -> str:
        return f"Tour(order={list(self._order)}, cost={self._cost:.6f})"

    def __str__(self) -> str:
        return (
            f"Sum of distances: {self.sum_of_distances()}, Cost: {self._cost}, "
            f"feasible: {self.is_feasible()}\n"
            f"Cities: \n{', '.join(str(c) for c in self._order)}\n"
        )


def _validated_order(order: Iterable[int], model: DistanceModel) -> Tuple[int, ...]:
    cities = tuple(int(c) for c in order)
    if not cities:
        raise InvalidTourError("A tour needs at least one city.")
    model.check_ids(cities)
    if len(set(cities)) != len(cities):
        raise InvalidTourError(f"Tour visits a city more than once: {list(cities)}")
    return cities
