"""Bus dispatch simulation: a bounded seat pool raced by a periodic deadline."""

__version__ = "0.1.0"
