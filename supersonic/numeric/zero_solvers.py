# zero_solvers.py
"""
Solve nonlinear functions of a single variable.

Two methods are provided:
  * bisection, for when a bracket with a sign change is known
    and no derivative is available (e.g. the cone-angle residual);
  * newton, for when the derivative is cheap and a decent guess exists.

Both stop with an exception rather than hand back an unconverged guess.
solve_root() picks between them depending on whether a derivative is given.

golden_section_max locates the peak of a unimodal function, which is
how a bisection bracket is trimmed to one side of a maximum.

Run as a script for a small self-test.
"""

import logging
from math import isnan, isfinite, sqrt

from supersonic import config
from supersonic.errors import DomainError, NonConvergence, SingularDerivative

log = logging.getLogger(__name__)


def _checked(fx, x):
    if isnan(fx):
        raise DomainError('Function value is NaN at x=%g' % x)
    return fx


def bisection(f, bx, ux, tol=config.TOLERANCE, max_iterations=config.MAX_ITERATIONS):
    """
    The iterative bisection method for zero-finding in one-dimension.

    f: user-defined function f(x)
    bx: one limit of the bracket
    ux: the other limit of the bracket
        f(bx) and f(ux) are expected to have opposite signs;
        this is the caller's responsibility and is not checked.
    tol: stopping tolerance on |f(x)| and on the bracket half-width
    max_iterations: to stop the iterations running forever

    Returns: x such that f(x)=0
    """
    if bx > ux: bx, ux = ux, bx
    fb = None
    for i in range(max_iterations):
        midpoint = 0.5*(bx+ux)
        fm = _checked(f(midpoint), midpoint)
        if abs(fm) < tol or 0.5*(ux-bx) < tol:
            log.debug('bisection converged to x=%.12g after %d iterations', midpoint, i+1)
            return midpoint
        # Only look at f(bx) again when bx has moved.
        if fb is None: fb = _checked(f(bx), bx)
        if fb * fm > 0:
            bx, fb = midpoint, fm
        else:
            ux = midpoint
    raise NonConvergence('Bisection did not converge after %d iterations' % max_iterations,
                         iterations=max_iterations, last=0.5*(bx+ux))
    # end bisection()


def newton(fun, fun_dash, x0, tol=config.TOLERANCE, max_iterations=config.MAX_ITERATIONS):
    """
    The iterative Newton-Raphson method for zero-finding in one-dimension.

    fun: user-defined function f(x)
    fun_dash: derivative of the function, d/dx(f(x))
    x0: first guess
    tol: stopping tolerance on the change in x between iterates
    max_iterations: to stop the iterations running forever

    Returns: x such that f(x)=0
    """
    f0 = _checked(fun(x0), x0)
    df0 = fun_dash(x0)
    for i in range(max_iterations):
        if isnan(df0) or abs(df0) < config.SINGULAR_SLOPE:
            raise SingularDerivative(x0, df0)
        x1 = x0 - f0 / df0
        if not isfinite(x1):
            raise DomainError('Newton iterate is not finite after x=%g' % x0)
        f1 = _checked(fun(x1), x1)
        df1 = fun_dash(x1)
        if abs(x1 - x0) <= tol:
            log.debug('newton converged to x=%.12g after %d iterations', x1, i+1)
            return x1
        x0, f0, df0 = x1, f1, df1
    raise NonConvergence('Newton-Raphson did not converge after %d iterations' % max_iterations,
                         iterations=max_iterations, last=x0)
    # end newton()


INV_PHI = 0.5 * (sqrt(5.0) - 1.0)

def golden_section_max(f, bx, ux, tol=config.TOLERANCE, max_iterations=config.MAX_ITERATIONS):
    """
    Golden-section search for the maximum of f on [bx, ux].

    f: user-defined function f(x), assumed unimodal on the interval
    bx, ux: limits of the interval; f is only evaluated inside them
    tol: stopping width of the interval still holding the maximum
    max_iterations: to stop the iterations running forever

    Returns: tuple (x, f(x)) for the best point found
    """
    if bx > ux: bx, ux = ux, bx
    x1 = ux - INV_PHI*(ux-bx); f1 = _checked(f(x1), x1)
    x2 = bx + INV_PHI*(ux-bx); f2 = _checked(f(x2), x2)
    for i in range(max_iterations):
        if ux - bx < tol:
            x, fx = (x1, f1) if f1 >= f2 else (x2, f2)
            log.debug('golden_section_max converged to x=%.12g after %d iterations', x, i+1)
            return x, fx
        if f1 >= f2:
            ux, x2, f2 = x2, x1, f1
            x1 = ux - INV_PHI*(ux-bx); f1 = _checked(f(x1), x1)
        else:
            bx, x1, f1 = x1, x2, f2
            x2 = bx + INV_PHI*(ux-bx); f2 = _checked(f(x2), x2)
    raise NonConvergence('Golden-section search did not converge after %d iterations' % max_iterations,
                         iterations=max_iterations, last=0.5*(bx+ux))
    # end golden_section_max()


def solve_root(f, bounds_or_guess, df=None, tol=None, max_iterations=None):
    """
    Find a zero of f, choosing the method from what we are given.

    f: user-defined function f(x)
    bounds_or_guess: a (lower, upper) bracket when df is None,
        otherwise a single starting guess
    df: optional derivative of f; selects Newton-Raphson
    tol, max_iterations: None means use the package defaults

    Returns: x such that f(x)=0
    """
    if tol is None: tol = config.TOLERANCE
    if max_iterations is None: max_iterations = config.MAX_ITERATIONS
    if df is None:
        bx, ux = bounds_or_guess
        return bisection(f, bx, ux, tol=tol, max_iterations=max_iterations)
    return newton(f, df, bounds_or_guess, tol=tol, max_iterations=max_iterations)


# -------------------------------------------------------------------

def demo():
    print("Begin zero_solvers self-test...")
    #
    from math import sin, cos, exp
    def test_fun_1(x): return x**3 + x**2 - 3*x - 3
    def test_dfun_1(x): return 3*x**2 + 2*x - 3
    print('')
    print('Test function 1: f(x) = x^3 + x^2 - 3x - 3 = 0')
    print('Bisection on [1, 2]: x =', bisection(test_fun_1, 1.0, 2.0))
    print('Newton from x0=2:    x =', newton(test_fun_1, test_dfun_1, 2.0))
    print('Expected x = 1.732051')
    #
    def test_fun_2(x): return 3*x + sin(x) - exp(x)
    def test_dfun_2(x): return 3 + cos(x) - exp(x)
    print('')
    print('Test function 2: f(x) = 3x + sin(x) - e^x = 0')
    print('Bisection on [0, 1]: x =', bisection(test_fun_2, 0.0, 1.0))
    print('Newton from x0=0:    x =', newton(test_fun_2, test_dfun_2, 0.0))
    print('Expected x = 0.3604217')
    #
    print('')
    print('Test function 3 should throw an exception.')
    try:
        newton(lambda x: 1.0, lambda x: 0.0, 0.0)
    except SingularDerivative as e:
        print('Caught SingularDerivative:', e)
    else:
        print('Oops, did not correctly catch SingularDerivative.')
    print('Done.')

if __name__ == '__main__':
    demo()
