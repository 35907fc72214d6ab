class DispatchError(Exception):
    """Base class for errors raised by the dispatch core."""


class CapacityViolation(DispatchError):
    """The pool held more passengers than seats. Never recoverable."""

    def __init__(self, size: int, capacity: int):
        super().__init__(f"pool size {size} outside [0, {capacity}]")
        self.size = size
        self.capacity = capacity


class DoubleOutcomeError(DispatchError):
    """A batch tried to record a second dispatch outcome."""


class ConfigError(ValueError):
    """Invalid simulation configuration."""
