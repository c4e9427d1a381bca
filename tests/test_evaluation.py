"""Tests for fitness summaries and torch batch cost evaluation."""

from __future__ import annotations

import random

import pytest
import torch

from tsp_tour.errors import CityIndexError
from tsp_tour.evaluation import Fitness, aggregate_fitness, batch_costs, evaluate_tour
from tsp_tour.tour import Tour


def test_batch_costs_match_tour_cost(four_city_model, complete_model) -> None:
    rng = random.Random(8)
    for model in (four_city_model, complete_model):
        orders = []
        for _ in range(10):
            order = list(model.city_ids)
            rng.shuffle(order)
            orders.append(order)
        costs = batch_costs(model, orders)
        assert isinstance(costs, torch.Tensor)
        for order, cost in zip(orders, costs.tolist()):
            assert cost == pytest.approx(Tour(order, model).cost)


def test_batch_costs_edge_cases(four_city_model) -> None:
    assert batch_costs(four_city_model, []).numel() == 0
    assert batch_costs(four_city_model, [[1], [2]]).tolist() == [0.0, 0.0]
    with pytest.raises(ValueError):
        batch_costs(four_city_model, [[1, 2], [1, 2, 3]])
    with pytest.raises(CityIndexError):
        batch_costs(four_city_model, [[1, 7]])


def test_evaluate_and_aggregate(four_city_model) -> None:
    fitnesses = [
        evaluate_tour(Tour([1, 3, 4, 2], four_city_model)),
        evaluate_tour(Tour([1, 4, 2, 3], four_city_model)),
    ]
    assert fitnesses[0] == Fitness(cost=pytest.approx(70 / 78.75), sum_of_distances=70.0, feasible=True)

    agg = aggregate_fitness(fitnesses)
    assert agg["best_cost"] == pytest.approx(70 / 78.75)
    assert agg["mean_cost"] == pytest.approx((70 + 130) / 2 / 78.75)
    assert agg["feasible_ratio"] == 0.5


def test_aggregate_of_nothing() -> None:
    assert aggregate_fitness([]) == {"best_cost": float("inf"), "mean_cost": float("inf"), "feasible_ratio": 0.0}


def test_batch_costs_reject_ids_outside_city_set(four_city_db) -> None:
    from tsp_tour.data import load_sqlite_instance

    model = load_sqlite_instance(four_city_db).model
    with pytest.raises(CityIndexError):
        batch_costs(model, [[0, 1, 2, 3]])
