# test_ode.py
#
# $ pytest examples/gasdyn/test_ode.py

import math
import numpy as np
import pytest
from scipy.integrate import solve_ivp
from supersonic.numeric.ode import rk4_step, rk4_integrate


def f_exp(t, y, ydash):
    "y'' = y, so with y(0) = y'(0) = 1 the solution is e^t"
    return y

def f_sine(t, y, ydash):
    "y'' = -y, sine solution"
    return -y


def test_0_single_step():
    # Constant second derivative: y1 is quadratic in t and RK4 is exact.
    t1, y1, y2 = rk4_step(lambda t, y1, y2: 2.0, 0.0, 0.5, 1.0, 3.0)
    assert math.isclose(t1, 0.5)
    assert math.isclose(y1, 1.0 + 3.0*0.5 + 0.5**2, rel_tol=1.0e-12), "y1 after one step"
    assert math.isclose(y2, 3.0 + 2.0*0.5, rel_tol=1.0e-12), "y2 after one step"
    return

def test_1_sine_period():
    ts, ys, ydashs, stopped = rk4_integrate(f_sine, 0.0, 2.0*math.pi, 600, 0.0, 1.0)
    assert not stopped
    assert len(ts) == 601
    assert math.isclose(ts[-1], 2.0*math.pi, rel_tol=1.0e-12)
    assert math.isclose(ys[-1], 0.0, abs_tol=1.0e-8), "y back to zero"
    assert math.isclose(ydashs[-1], 1.0, abs_tol=1.0e-8), "y' back to one"
    return

def test_2_fourth_order_convergence():
    T = 1.0
    errors = []
    for nstep in [10, 20, 40, 80]:
        ts, ys, ydashs, stopped = rk4_integrate(f_exp, 0.0, T, nstep, 1.0, 1.0)
        errors.append(abs(ys[-1] - math.exp(T)))
    print("errors:", errors)
    for coarse, fine in zip(errors[:-1], errors[1:]):
        ratio = coarse / fine
        assert 12.0 < ratio < 20.0, "halving h should cut the error about 16 times"
    return

def test_3_backwards_and_agrees_with_scipy():
    ts, ys, ydashs, stopped = rk4_integrate(f_sine, 1.0, 0.2, 400, math.sin(1.0), math.cos(1.0))
    assert all(np.diff(ts) < 0.0), "t decreases monotonically"
    ref = solve_ivp(lambda t, y: [y[1], -y[0]], (1.0, 0.2), [math.sin(1.0), math.cos(1.0)],
                    rtol=1.0e-10, atol=1.0e-12)
    assert math.isclose(ys[-1], ref.y[0, -1], abs_tol=1.0e-8), "y matches solve_ivp"
    assert math.isclose(ydashs[-1], ref.y[1, -1], abs_tol=1.0e-8), "y' matches solve_ivp"
    assert math.isclose(ys[-1], math.sin(0.2), abs_tol=1.0e-8)
    return

def test_4_stop_predicate():
    # y = sin(t) from t=0; y' = cos(t) turns negative after pi/2,
    # which falls midway between two samples.
    nstep = 101
    ts, ys, ydashs, stopped = rk4_integrate(f_sine, 0.0, math.pi, nstep, 0.0, 1.0,
                                            stop=lambda y, ydash: ydash < 0.0)
    assert stopped
    assert len(ts) <= nstep + 1
    assert ydashs[-1] >= 0.0, "the sample that tripped the stop is dropped"
    assert ts[-1] <= 0.5*math.pi < ts[-1] + math.pi/nstep, "stop brackets the turning point"
    return

if __name__ == '__main__':
    test_0_single_step()
    test_1_sine_period()
    test_2_fourth_order_convergence()
    test_3_backwards_and_agrees_with_scipy()
    test_4_stop_predicate()
