import logging
import random
from typing import List, Optional, Tuple

from .errors import DegenerateIntervalError, IncompatibleParentsError
from .tour import Tour

logger = logging.getLogger(__name__)


def draw_interval(n: int, rng: random.Random) -> Tuple[int, int]:
    """Draw ``begin < end`` in ``[0, n - 1]`` leaving at least one slot to fill.

    Two distinct positions are sampled and sorted. A draw of ``(0, n - 1)``
    would copy the whole first parent, so it is drawn again. Tours shorter
    than three cities have no such interval.
    """
    if n < 3:
        raise DegenerateIntervalError(f"Order crossover needs at least 3 cities, got {n}")
    while True:
        begin, end = sorted(rng.sample(range(n), 2))
        if begin > 0 or end < n - 1:
            return begin, end
        logger.debug("interval (0, %d) spans the whole tour; redrawing", end)


def _check_parents(parent1: Tour, parent2: Tour) -> None:
    if len(parent1) != len(parent2):
        raise IncompatibleParentsError(
            f"Parents have different lengths: {len(parent1)} != {len(parent2)}"
        )
    if parent1.model is not parent2.model:
        raise IncompatibleParentsError("Parents are evaluated against different distance models.")
    if set(parent1.order) != set(parent2.order):
        raise IncompatibleParentsError("Parents do not visit the same set of cities.")


def order_crossover(
    parent1: Tour,
    parent2: Tour,
    rng: random.Random,
    interval: Optional[Tuple[int, int]] = None,
) -> Tour:
    """Order crossover (OX) producing one child.

    ``parent1.order[begin..end]`` (inclusive) keeps its positions. The open
    slots before ``begin`` and then after ``end`` are filled with the
    remaining cities in the order they appear in ``parent2``, using a single
    left-to-right scan.
    """
    _check_parents(parent1, parent2)
    n = len(parent1)
    begin, end = interval if interval is not None else draw_interval(n, rng)
    if not 0 <= begin < end < n:
        raise DegenerateIntervalError(f"Invalid crossover interval ({begin}, {end}) for {n} cities")

    child: List[Optional[int]] = [None] * n
    child[begin : end + 1] = parent1.order[begin : end + 1]
    copied = set(parent1.order[begin : end + 1])

    donors = (city for city in parent2.order if city not in copied)
    for i in list(range(begin)) + list(range(end + 1, n)):
        child[i] = next(donors)

    return Tour(child, parent1.model)
