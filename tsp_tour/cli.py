import argparse
import dataclasses
import logging
import random
import sys
import time
from pathlib import Path
from typing import List, Optional

from tsp_tour.config import ModelConfig, load_config
from tsp_tour.data import Instance, load_sqlite_instance, load_tsplib_instance
from tsp_tour.errors import TourError
from tsp_tour.evaluation import evaluate_tour
from tsp_tour.tour import Tour


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def _parse_ids(text: str) -> List[int]:
    return [int(tok) for tok in text.replace(",", " ").split()]


def _resolve_config(args) -> ModelConfig:
    cfg = load_config(Path(args.config)) if args.config else ModelConfig()
    if args.penalty_factor is not None:
        cfg = dataclasses.replace(cfg, penalty_factor=args.penalty_factor)
    return cfg


def _load(args, cfg: ModelConfig) -> Instance:
    if args.tsplib:
        path = Path(args.tsplib)
        log(f"loading TSPLIB instance from {path}")
        return load_tsplib_instance(path, penalty_factor=cfg.penalty_factor)
    db = args.db or cfg.db_path
    if not db:
        raise SystemExit("Either --db, --tsplib or a config with db_path is required.")
    log(f"loading cities from {db}")
    return load_sqlite_instance(Path(db), penalty_factor=cfg.penalty_factor)


def info(args, cfg: ModelConfig) -> None:
    inst = _load(args, cfg)
    m = inst.model
    print(f"instance: {inst.name}")
    print(f"cities: {m.city_count()}")
    print(f"max distance: {m.max_distance:.4f}")
    print(f"avg distance: {m.avg_distance:.4f}")
    print(f"default distance: {m.default_distance:.4f} (C={m.penalty_factor:g})")


def evaluate(args, cfg: ModelConfig) -> None:
    inst = _load(args, cfg)
    tour = Tour(args.ids, inst.model)
    fitness = evaluate_tour(tour)
    print(tour, end="")
    names = [str(inst.cities[c]) if c in inst.cities else str(c) for c in tour]
    print(" -> ".join(names))
    log(f"cost={fitness.cost:.6f} feasible={fitness.feasible}")


def crossover(args, cfg: ModelConfig) -> None:
    inst = _load(args, cfg)
    seed = args.seed if args.seed is not None else cfg.random_seed
    p1 = Tour(_parse_ids(args.parent1), inst.model)
    p2 = Tour(_parse_ids(args.parent2), inst.model)
    child = p1.crossover(p2, random.Random(seed))
    log(f"parent costs: {p1.cost:.6f} / {p2.cost:.6f} (seed={seed})")
    print(child, end="")


def _add_source_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--db", help="SQLite database with cities/connections tables")
    p.add_argument("--tsplib", help="TSPLIB .tsp file")
    p.add_argument("--config", help="JSON config file")
    p.add_argument("--penalty-factor", type=float, default=None)
    p.add_argument("--verbose", action="store_true")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="TSP tour evaluation CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    info_parser = subparsers.add_parser("info", help="Show distance model statistics")
    _add_source_args(info_parser)
    info_parser.set_defaults(func=info)

    eval_parser = subparsers.add_parser("evaluate", help="Evaluate a tour given as city ids")
    _add_source_args(eval_parser)
    eval_parser.add_argument("ids", nargs="+", type=int)
    eval_parser.set_defaults(func=evaluate)

    cx_parser = subparsers.add_parser("crossover", help="Breed a child tour with order crossover")
    _add_source_args(cx_parser)
    cx_parser.add_argument("--parent1", required=True, help="comma or space separated ids")
    cx_parser.add_argument("--parent2", required=True, help="comma or space separated ids")
    cx_parser.add_argument("--seed", type=int, default=None)
    cx_parser.set_defaults(func=crossover)

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(asctime)s] %(levelname)s | %(name)s | %(message)s")
    try:
        cfg = _resolve_config(args)
        args.func(args, cfg)
    except TourError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
