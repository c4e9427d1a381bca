"""Shared fixtures: the four-city sparse instance and a small complete graph."""

from __future__ import annotations

import math
import sqlite3

import pytest

from tsp_tour.distance import DistanceModel

# Ids 1..4, row/column 0 unused; -1 marks a missing connection.
FOUR_CITY_DISTANCES = [
    [0, 0, 0, 0, 0],
    [0, 0, -1, 15, -1],
    [0, -1, 0, 35, 25],
    [0, 15, 35, 0, 30],
    [0, -1, 25, 30, 0],
]

FOUR_CITIES = [
    (1, "Guadalajara", "Mexico", 0.0, 0.0, 200),
    (2, "Brasilia", "Brazil", 0.0, 0.0, 200),
    (3, "Sidney", "Australia", 0.0, 0.0, 200),
    (4, "Beijing", "China", 0.0, 0.0, 200),
]

FOUR_CONNECTIONS = [(1, 3, 15.0), (2, 3, 35.0), (2, 4, 25.0), (3, 4, 30.0)]


@pytest.fixture
def four_city_model() -> DistanceModel:
    return DistanceModel(FOUR_CITY_DISTANCES, penalty_factor=2)


@pytest.fixture
def complete_model() -> DistanceModel:
    """Eight cities on a circle, every pair connected."""
    n = 8
    points = [(math.cos(2 * math.pi * k / n), math.sin(2 * math.pi * k / n)) for k in range(n)]
    edges = []
    for i in range(n):
        for j in range(i + 1, n):
            edges.append((i, j, math.dist(points[i], points[j])))
    return DistanceModel.from_edges(edges)


@pytest.fixture
def four_city_db(tmp_path):
    db_path = tmp_path / "tsp.db"
    conn = sqlite3.connect(db_path)
    conn.executescript(
        """
        CREATE TABLE cities (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            country TEXT NOT NULL,
            latitude REAL NOT NULL,
            longitude REAL NOT NULL,
            population INTEGER NOT NULL
        );
        CREATE TABLE connections (
            id_city_1 INTEGER NOT NULL,
            id_city_2 INTEGER NOT NULL,
            distance REAL NOT NULL
        );
        """
    )
    conn.executemany("INSERT INTO cities VALUES (?, ?, ?, ?, ?, ?)", FOUR_CITIES)
    conn.executemany("INSERT INTO connections VALUES (?, ?, ?)", FOUR_CONNECTIONS)
    conn.commit()
    conn.close()
    return db_path


TINY_TSPLIB = """NAME: tiny
TYPE: TSP
COMMENT: rectangle 3x4
DIMENSION: 4
EDGE_WEIGHT_TYPE: EUC_2D
NODE_COORD_SECTION
1 0 0
2 3 0
3 3 4
4 0 4
EOF
"""


@pytest.fixture
def tiny_tsplib(tmp_path):
    path = tmp_path / "tiny.tsp"
    path.write_text(TINY_TSPLIB, encoding="utf-8")
    return path
