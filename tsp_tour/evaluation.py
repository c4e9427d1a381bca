from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import torch

from .distance import DistanceModel
from .tour import Tour


@dataclass
class Fitness:
    cost: float
    sum_of_distances: float
    feasible: bool


def evaluate_tour(tour: Tour) -> Fitness:
    return Fitness(
        cost=tour.cost,
        sum_of_distances=tour.sum_of_distances(),
        feasible=tour.is_feasible(),
    )


def _path_lengths_torch(dist: torch.Tensor, idx: torch.Tensor) -> torch.Tensor:
    a = idx[:, :-1]
    b = idx[:, 1:]
    return dist[a, b].sum(dim=1)


def batch_costs(
    model: DistanceModel,
    orders: Sequence[Sequence[int]],
    device: Optional[torch.device] = None,
) -> torch.Tensor:
    """Normalised cost of many equal-length orders in one gather.

    Gives the same values as ``Tour.cost`` for each order.
    """
    if not orders:
        return torch.zeros(0, dtype=torch.float64, device=device)
    n = len(orders[0])
    if any(len(o) != n for o in orders):
        raise ValueError("All orders in a batch must have the same length.")
    for o in orders:
        model.check_ids(o)
    if n < 2:
        return torch.zeros(len(orders), dtype=torch.float64, device=device)
    dist = torch.as_tensor(model.penalized_matrix(), dtype=torch.float64, device=device)
    idx = torch.tensor([list(o) for o in orders], dtype=torch.long, device=dist.device)
    lengths = _path_lengths_torch(dist, idx)
    return lengths / (model.avg_distance * (n - 1))


def aggregate_fitness(fitnesses: List[Fitness]) -> Dict[str, float]:
    if not fitnesses:
        return {"best_cost": float("inf"), "mean_cost": float("inf"), "feasible_ratio": 0.0}
    best = min(f.cost for f in fitnesses)
    mean = sum(f.cost for f in fitnesses) / len(fitnesses)
    feasible = sum(1 for f in fitnesses if f.feasible) / len(fitnesses)
    return {"best_cost": best, "mean_cost": mean, "feasible_ratio": feasible}
