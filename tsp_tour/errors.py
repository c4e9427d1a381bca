class TourError(Exception):
    """Base class for errors raised by tsp_tour."""


class EmptyGraphError(TourError, ValueError):
    """No positive edge exists, so the average distance is undefined."""


class IncompatibleParentsError(TourError, ValueError):
    """Crossover parents differ in length, city set or distance model."""


class DegenerateIntervalError(TourError, ValueError):
    """No crossover interval leaves a slot for the second parent."""


class InvalidTourError(TourError, ValueError):
    """An order is empty or visits a city more than once."""


class CityIndexError(TourError, IndexError):
    """A city id is not part of the distance model."""
