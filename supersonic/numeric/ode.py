"""
ode.py: Integrate a second-order ODE written as a pair of first-order ODEs.

The system has the special form
    y1' = y2
    y2' = f(t, y1, y2)
which is what the Taylor-Maccoll equation looks like with y1 = V_r and
y2 = V_theta.  Only the second derivative needs to be supplied.

Stepping is with the classical fourth-order Runge-Kutta method at a
fixed step size; t may run backwards (h < 0).

Running this module as a Python script integrates y'' = -y over one
period and prints the error.
"""

import math
import logging
import numpy as np

log = logging.getLogger(__name__)


def rk4_step(f, t0, h, y1, y2):
    """
    Single-step the pair of ODEs by the classical Runge-Kutta method.

    f: a callable returning y2' with signature f(t, y1, y2)
    t0: starting value of the independent variable
    h: step size (may be negative)
    y1, y2: starting values of the dependent variables

    Returns: tuple (t0+h, y1, y2) at the end of the step.
    """
    k1_y1 = h * y2
    k1_y2 = h * f(t0, y1, y2)
    k2_y1 = h * (y2 + 0.5*k1_y2)
    k2_y2 = h * f(t0 + 0.5*h, y1 + 0.5*k1_y1, y2 + 0.5*k1_y2)
    k3_y1 = h * (y2 + 0.5*k2_y2)
    k3_y2 = h * f(t0 + 0.5*h, y1 + 0.5*k2_y1, y2 + 0.5*k2_y2)
    k4_y1 = h * (y2 + k3_y2)
    k4_y2 = h * f(t0 + h, y1 + k3_y1, y2 + k3_y2)
    # Weighted combination 1/6, 2/6, 2/6, 1/6.
    y1_new = y1 + (k1_y1 + 2.0*k2_y1 + 2.0*k3_y1 + k4_y1) / 6.0
    y2_new = y2 + (k1_y2 + 2.0*k2_y2 + 2.0*k3_y2 + k4_y2) / 6.0
    return t0 + h, y1_new, y2_new


def rk4_integrate(f, t0, tlast, nstep, y1, y2, stop=None):
    """
    Steps the pair of ODEs from t0 toward tlast in nstep fixed steps.

    f: a callable returning y2' with signature f(t, y1, y2)
    t0: starting value of the independent variable
    tlast: final value of the independent variable (may be less than t0)
    nstep: number of steps to take to arrive at tlast
    y1, y2: starting values of the dependent variables
    stop: optional predicate stop(y1, y2) applied to each new state.
        When it returns True the new state is discarded and the
        integration ends, so the last retained state is the one before.

    Returns: tuple (ts, y1s, y2s, stopped) where the lists include the
        starting point and stopped tells whether the predicate fired.
    """
    assert callable(f)
    assert nstep >= 1
    h = (tlast - t0) / nstep
    ts = [t0]; y1s = [y1]; y2s = [y2]
    t = t0
    for i in range(nstep):
        t_new, y1_new, y2_new = rk4_step(f, t, h, y1, y2)
        if stop is not None and stop(y1_new, y2_new):
            log.debug('rk4_integrate stopped after %d of %d steps at t=%g', i, nstep, t)
            return ts, y1s, y2s, True
        t, y1, y2 = t_new, y1_new, y2_new
        ts.append(t); y1s.append(y1); y2s.append(y2)
    return ts, y1s, y2s, False

#----------------------------------------------------------------------

if __name__ == "__main__":
    def f_sample(t, y, ydash):
        "Second-order linear ODE with sine solution"
        return -y

    print("Start sample integration...")
    print("Second-order linear ODE y''=-y, y(0)=0, y'(0)=1:")
    for nstep in [50, 100, 200]:
        ts, ys, ydashs, stopped = rk4_integrate(f_sample, 0.0, 0.5*math.pi, nstep, 0.0, 1.0)
        err = np.abs(np.array([ys[-1], ydashs[-1]]) - np.array([1.0, 0.0]))
        print("nstep=", nstep, "t1=", ts[-1], "y1=", ys[-1], "err=", err)
    print("Done.")
