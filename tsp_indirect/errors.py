class TSPError(Exception):
    """Base class for errors raised by the TSP core."""


class EmptyInstanceError(TSPError, ValueError):
    """An instance with zero nodes; there is nothing to optimize."""


class InstanceShapeError(TSPError, ValueError):
    pass


class DecisionVectorError(TSPError, ValueError):
    pass


class InvalidPermutationError(TSPError, ValueError):
    pass
