# errors.py
"""
Exceptions raised by the gas-dynamics relations and the numerical solvers.

The value-type errors (bad gamma, bad Mach number, out-of-range angle)
derive from ValueError and the solver failures derive from RuntimeError,
so callers that already catch those built-in exceptions keep working.
"""


class GasDynamicsError(Exception):
    """Base class for all failures raised by the supersonic package."""
    pass


class InvalidSpecificHeatRatio(GasDynamicsError, ValueError):
    """Ratio of specific heats g is not greater than 1."""

    def __init__(self, g):
        super().__init__("Ratio of specific heats must exceed 1, got g=%g" % g)
        self.g = g


class InvalidMachNumber(GasDynamicsError, ValueError):
    """Mach number is negative, or subsonic where supersonic flow is needed."""

    def __init__(self, M, message=None):
        if message is None:
            message = "Invalid Mach number: %g" % M
        super().__init__(message)
        self.M = M


class DomainError(GasDynamicsError, ValueError):
    """An angle or ratio lies outside its valid interval, or a result is NaN."""
    pass


class NonConvergence(GasDynamicsError, RuntimeError):
    """An iterative solver reached its iteration cap without converging."""

    def __init__(self, message, iterations=None, last=None):
        super().__init__(message)
        self.iterations = iterations
        self.last = last


class SingularDerivative(GasDynamicsError, RuntimeError):
    """Newton-Raphson met a derivative too small (or NaN) to step with."""

    def __init__(self, x, slope):
        super().__init__("Cannot proceed with near-zero slope %g at x=%g" % (slope, x))
        self.x = x
        self.slope = slope


class UndeterminedCrossing(GasDynamicsError, RuntimeError):
    """
    The Taylor-Maccoll march reached its final angle without V_theta
    changing sign, so no cone surface was found.

    The partial trace is kept on the exception for diagnostics.
    """

    def __init__(self, message, trace=None):
        super().__init__(message)
        self.trace = trace
