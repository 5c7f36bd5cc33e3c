"""
Errors - Exception types raised by the drift field core

Out-of-grid particles are not errors: they are re-initialised in place
and never surface here.
"""


class DriftFieldError(Exception):
    """Base class for drift field errors."""


class SeedError(DriftFieldError, TypeError):
    """Seed argument is not a string, number, callable or None."""


class StaleGeometryError(DriftFieldError):
    """
    A particle population was ticked against a grid it was not built for.

    Happens when the viewport is resized between rebuilds. The sketch
    context catches this, drops the frame and rebuilds on the next step.
    """

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"particles built for grid generation {expected}, got {actual}"
        )
        self.expected = expected
        self.actual = actual


class ConfigError(DriftFieldError):
    """Sketch configuration could not be loaded."""
