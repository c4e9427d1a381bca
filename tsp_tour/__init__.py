"""
Tour representation, penalised cost model and order crossover for sparse-graph TSP instances.
"""

from .distance import DistanceModel
from .errors import (
    CityIndexError,
    DegenerateIntervalError,
    EmptyGraphError,
    IncompatibleParentsError,
    InvalidTourError,
    TourError,
)
from .tour import Tour
from .crossover import draw_interval, order_crossover

__all__ = [
    "DistanceModel",
    "Tour",
    "draw_interval",
    "order_crossover",
    "TourError",
    "EmptyGraphError",
    "IncompatibleParentsError",
    "DegenerateIntervalError",
    "CityIndexError",
    "InvalidTourError",
    "config",
    "data",
    "evaluation",
]
