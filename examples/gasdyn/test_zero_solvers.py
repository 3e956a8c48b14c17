# test_zero_solvers.py
#
# $ pytest examples/gasdyn/test_zero_solvers.py
#
# Test functions are the Gerald and Wheatley examples (p. 45).

import math
import pytest
from scipy.optimize import brentq
from supersonic.numeric.zero_solvers import bisection, newton, solve_root, golden_section_max
from supersonic.errors import NonConvergence, SingularDerivative, DomainError, GasDynamicsError


def cubic(x): return x**3 + x**2 - 3*x - 3
def cubic_dash(x): return 3*x**2 + 2*x - 3
def trig(x): return 3*x + math.sin(x) - math.exp(x)
def trig_dash(x): return 3 + math.cos(x) - math.exp(x)


def test_0_bisection():
    x = bisection(cubic, 1.0, 2.0)
    print("bisection: x=", x, "expected 1.732051")
    assert math.isclose(x, math.sqrt(3.0), abs_tol=1.0e-8), "cubic root"
    assert 1.0 <= x <= 2.0, "root stays inside the bracket"
    x = bisection(trig, 0.0, 1.0)
    assert math.isclose(x, 0.3604217, abs_tol=1.0e-6), "trig root"
    assert math.isclose(x, brentq(trig, 0.0, 1.0, xtol=1.0e-12), abs_tol=1.0e-8), "agrees with brentq"
    return

def test_1_bisection_reversed_bounds():
    assert math.isclose(bisection(cubic, 2.0, 1.0), math.sqrt(3.0), abs_tol=1.0e-8)
    return

def test_2_bisection_stopping():
    tol = 1.0e-4
    x = bisection(cubic, 1.0, 2.0, tol=tol)
    assert abs(cubic(x)) < tol or abs(x - math.sqrt(3.0)) < tol
    return

def test_3_bisection_nonconvergence():
    with pytest.raises(NonConvergence) as excinfo:
        bisection(cubic, 1.0, 2.0, tol=1.0e-12, max_iterations=5)
    assert excinfo.value.iterations == 5
    assert 1.0 <= excinfo.value.last <= 2.0
    return

def test_4_bisection_nan():
    with pytest.raises(DomainError):
        bisection(lambda x: math.sqrt(x) - 1.0 if x >= 0.0 else float('nan'), -3.0, 2.0)
    return

def test_5_newton_square_root():
    for c in [2.0, 9.0, 1.0e-4, 1.0e6]:
        x = newton(lambda x: x*x - c, lambda x: 2.0*x, max(c, 1.0))
        assert math.isclose(x, math.sqrt(c), rel_tol=1.0e-9), "sqrt(%g)" % c
    x = newton(cubic, cubic_dash, 2.0)
    assert math.isclose(x, math.sqrt(3.0), abs_tol=1.0e-9), "cubic root"
    x = newton(trig, trig_dash, 0.0)
    assert math.isclose(x, 0.36042170296, abs_tol=1.0e-9), "trig root"
    return

def test_6_newton_singular():
    with pytest.raises(SingularDerivative):
        newton(lambda x: 1.0, lambda x: 0.0, 0.0)
    # Flat spot of x^2 - 1 at the starting guess.
    with pytest.raises(SingularDerivative):
        newton(lambda x: x*x - 1.0, lambda x: 2.0*x, 0.0)
    return

def test_7_newton_nonconvergence():
    # x^2 + 1 has no real root; every Newton step is at least one unit long.
    with pytest.raises(NonConvergence):
        newton(lambda x: x*x + 1.0, lambda x: 2.0*x, 0.5, max_iterations=20)
    return

def test_8_solve_root():
    assert math.isclose(solve_root(cubic, (1.0, 2.0)), math.sqrt(3.0), abs_tol=1.0e-8), "bracket"
    assert math.isclose(solve_root(cubic, 2.0, df=cubic_dash), math.sqrt(3.0), abs_tol=1.0e-9), "guess"
    x = solve_root(cubic, (1.0, 2.0), tol=1.0e-3)
    assert abs(x - math.sqrt(3.0)) < 1.0e-2
    with pytest.raises(GasDynamicsError):
        solve_root(cubic, (1.0, 2.0), tol=1.0e-14, max_iterations=3)
    return

def test_9_failures_are_builtin_errors():
    # Callers catching the built-in exceptions still see solver failures.
    with pytest.raises(RuntimeError):
        newton(lambda x: 1.0, lambda x: 0.0, 0.0)
    with pytest.raises(ValueError):
        bisection(lambda x: float('nan'), 0.0, 1.0)
    return

def test_10_golden_section_max():
    x, fx = golden_section_max(math.sin, 0.0, 3.0, tol=1.0e-10)
    print("max of sin on [0, 3]: x=", x, "f=", fx, "expected pi/2, 1")
    assert math.isclose(x, 0.5*math.pi, abs_tol=1.0e-6), "peak of sine"
    assert math.isclose(fx, 1.0, abs_tol=1.0e-12)
    # Lopsided peak at x=1, bounds given in reverse.
    x, fx = golden_section_max(lambda x: x*math.exp(-x), 4.0, 0.0, tol=1.0e-10)
    assert math.isclose(x, 1.0, abs_tol=1.0e-6), "peak of x exp(-x)"
    assert math.isclose(fx, math.exp(-1.0), rel_tol=1.0e-10)
    # Monotone function: the peak is pushed to the upper end.
    x, fx = golden_section_max(lambda x: x, 0.0, 1.0, tol=1.0e-6)
    assert 1.0 - 1.0e-6 < x < 1.0
    with pytest.raises(NonConvergence):
        golden_section_max(math.sin, 0.0, 3.0, tol=1.0e-12, max_iterations=3)
    return

if __name__ == '__main__':
    test_0_bisection()
    test_1_bisection_reversed_bounds()
    test_2_bisection_stopping()
    test_3_bisection_nonconvergence()
    test_4_bisection_nan()
    test_5_newton_square_root()
    test_6_newton_singular()
    test_7_newton_nonconvergence()
    test_8_solve_root()
    test_9_failures_are_builtin_errors()
    test_10_golden_section_max()
