# taylor_maccoll.py
"""
Taylor-Maccoll conical flow about a sharp cone at zero incidence.

The flow between an attached conical shock and the cone surface depends
only on the polar angle theta, measured from the cone axis.  With the
velocity scaled by the maximum speed V_max, the components V_r and
V_theta satisfy

    dV_r/dtheta = V_theta
    dV_theta/dtheta = [V_theta^2 V_r - k (1 - V_r^2 - V_theta^2)(2 V_r + V_theta cot(theta))]
                      / [k (1 - V_r^2 - V_theta^2) - V_theta^2]

where k = (g-1)/2.  Starting from the state just behind the shock at
theta = beta, we march toward the axis with fixed RK4 steps until
V_theta reaches zero; that angle is the cone half-angle.

Three ways of building a SupersonicCone are provided:
  * from_mach_and_shock_angle: the direct shooting problem;
  * from_mach_and_cone_angle: bisection on the shock angle until the
    shot lands on the requested cone;
  * from_mach_and_surface_mach: as above, but matching the Mach number
    at the cone surface.
The two inverse searches stay on the weak branch, below the shock angle
returned by max_cone_angle.

References:
   Taylor, G.I. and Maccoll, J.W. (1933)
   The air pressure on a cone moving at high speeds.
   Proc. Roy. Soc. (London) A, 139:278--311

   Ames Research Staff (1953)
   Equations, tables, and charts for compressible flow.
   NACA Report 1135.
"""

import logging
from collections import namedtuple
from math import sin, cos, tan, asin, pi, isfinite, degrees, radians
import numpy as np

from supersonic import config
from supersonic.errors import DomainError, UndeterminedCrossing
from supersonic.numeric.ode import rk4_integrate
from supersonic.numeric.zero_solvers import bisection, golden_section_max
from supersonic.ideal_gas_flow import (
    check_gamma,
    check_supersonic,
    theta_obl,
    M2_obl,
    p2_p1_obl,
    r2_r1_obl,
    T2_T1_obl,
    p02_p01_obl,
    p0_p,
    r0_r,
    T0_T,
    V_from_M,
    M_from_V,
)

log = logging.getLogger(__name__)

# Velocity components scaled by V_max, in the spherical frame fixed to the shock.
FlowState = namedtuple("FlowState", ["V_r", "V_theta"])

# Samples of the march, ordered from the shock toward the cone.
ConeTrace = namedtuple("ConeTrace", ["thetas", "states"])

# Properties are:
#   M1 : free-stream Mach number
#   g : ratio of specific heats
#   beta : shock angle
#   theta_c : cone half-angle
#   shock_turn_angle : beta - theta_c
#   theta_s : flow deflection just behind the shock
#   M2 : Mach number just behind the shock
#   M_c : Mach number at the cone surface
#   p2_p1, r2_r1, T2_T1, p02_p01 : ratios across the shock
#   pc_p1, rc_r1, Tc_T1, p0c_p01 : ratios from free stream to the cone surface
ConeProperties = namedtuple("ConeProperties",
                            ["M1", "g", "beta", "theta_c", "shock_turn_angle",
                             "theta_s", "M2", "M_c",
                             "p2_p1", "r2_r1", "T2_T1", "p02_p01",
                             "pc_p1", "rc_r1", "Tc_T1", "p0c_p01"])

# Mach number and flow direction along selected rays of the shock layer.
ConeFlowfield = namedtuple("ConeFlowfield", ["thetas", "M", "flow_dir"])


def taylor_maccoll(theta, V_r, V_theta, g=1.4):
    """
    Derivative dV_theta/dtheta from the Taylor-Maccoll equation.

    theta: polar angle from the cone axis (radians)
    V_r, V_theta: velocity components scaled by V_max
    g: ratio of specific heats

    The companion equation dV_r/dtheta = V_theta is built into the
    integrator.  The denominator vanishes where V_theta equals the
    local sound speed, so keep the march away from that condition.
    """
    k = 0.5 * (g - 1.0)
    Vt2 = V_theta * V_theta
    a2 = k * (1.0 - V_r*V_r - Vt2)
    denom = a2 - Vt2
    if denom == 0.0:
        raise DomainError("Taylor-Maccoll equation singular at theta=%g" % theta)
    numer = Vt2 * V_r - a2 * (2.0 * V_r + V_theta / tan(theta))
    return numer / denom


def post_shock_state(M1, beta, g=1.4):
    """
    Velocity components just downstream of a conical shock.

    M1: free-stream Mach number
    beta: shock angle (radians)
    g: ratio of specific heats
    Returns: FlowState resolved into the radial and polar directions
    """
    theta_s = theta_obl(M1, beta, g)
    M2 = M2_obl(M1, beta, theta_s, g)
    V = V_from_M(M2, g)
    return FlowState(V * cos(beta - theta_s), -V * sin(beta - theta_s))


def integrate_cone(initial_state, shock_angle, g=1.4, steps=None, final_angle=None):
    """
    March the Taylor-Maccoll equation from the shock toward the axis.

    initial_state: FlowState just behind the shock
    shock_angle: polar angle of the shock, where the march starts (radians)
    g: ratio of specific heats
    steps: number of fixed steps from shock_angle to final_angle
    final_angle: where the march would end if V_theta never reached zero;
        defaults to just off the axis, where the equation is singular.

    Returns: ConeTrace starting at the shock.  Its last sample is the
        final one with V_theta < 0; the sample at which V_theta turned
        non-negative is not kept.
    Raises UndeterminedCrossing, with the trace attached, if V_theta
    is still negative at final_angle.
    """
    check_gamma(g)
    steps = config.merge_options({'steps': steps})['steps']
    if final_angle is None: final_angle = config.AXIS_ANGLE
    V_r, V_theta = initial_state
    if not V_theta < 0.0:
        raise DomainError("V_theta must start negative, got %g" % V_theta)
    #
    def f(theta, y1, y2): return taylor_maccoll(theta, y1, y2, g)
    def at_wall(y1, y2):
        if not (isfinite(y1) and isfinite(y2)):
            raise DomainError("Taylor-Maccoll march produced a non-finite state")
        return y2 >= 0.0
    #
    thetas, V_rs, V_thetas, stopped = rk4_integrate(f, shock_angle, final_angle, steps,
                                                    V_r, V_theta, stop=at_wall)
    trace = ConeTrace(thetas, [FlowState(a, b) for a, b in zip(V_rs, V_thetas)])
    if not stopped:
        raise UndeterminedCrossing("V_theta did not reach zero between %g and %g degrees"
                                   % (degrees(shock_angle), degrees(final_angle)),
                                   trace=trace)
    log.debug("integrate_cone: beta=%g deg, cone surface at %g deg after %d steps",
              degrees(shock_angle), degrees(thetas[-1]), len(thetas) - 1)
    return trace


def _shoot(M1, beta, g, steps):
    """Cone half-angle and surface Mach number for one shock angle."""
    trace = integrate_cone(post_shock_state(M1, beta, g), beta, g, steps)
    return trace.thetas[-1], M_from_V(trace.states[-1].V_r, g), trace


def _weak_shock_surface(M1, beta, g, steps):
    """
    Cone half-angle and surface Mach number for any beta in [0, pi/2].

    At or below the Mach angle the shock is infinitely weak, so there
    is no cone.  Just above the Mach angle the march starts close to the
    singular point of the equation, so we shoot from WEAK_SHOCK_FACTOR*mu
    and interpolate linearly back to the Mach wave.
    """
    mu = asin(1.0/M1)
    if beta <= mu:
        return 0.0, M1
    beta2 = min(config.WEAK_SHOCK_FACTOR * mu, 0.5*pi)
    if beta < beta2:
        theta2, M_c2, _ = _shoot(M1, beta2, g, steps)
        frac = (beta - mu) / (beta2 - mu)
        return frac * theta2, (1.0 - frac) * M1 + frac * M_c2
    theta_c, M_c, _ = _shoot(M1, beta, g, steps)
    return theta_c, M_c


def max_cone_angle(M1, g=1.4, steps=None):
    """
    The largest cone that still carries an attached conical shock.

    M1: free-stream Mach number
    g: ratio of specific heats
    steps: number of RK4 steps for each shooting pass

    Returns: tuple (beta, theta_c) at the peak of the cone angle.
    The cone angle rises with shock angle from zero at the Mach angle
    to this peak (the weak branch) and falls again toward pi/2.
    """
    check_gamma(g); check_supersonic(M1)
    steps = config.merge_options({'steps': steps})['steps']
    def cone_angle(beta): return _weak_shock_surface(M1, beta, g, steps)[0]
    beta, theta_c = golden_section_max(cone_angle, asin(1.0/M1), 0.5*pi,
                                       tol=config.PEAK_TOLERANCE)
    log.debug("max_cone_angle: M1=%g -> theta_c=%g deg at beta=%g deg",
              M1, degrees(theta_c), degrees(beta))
    return beta, theta_c


class SupersonicCone:
    """
    Flow about a sharp cone behind an attached conical shock.

    Build one with a from_mach_and_* class method.  All of the values
    are computed up front and the object cannot be changed afterwards.
    """

    __slots__ = ('_props', '_trace')

    def __init__(self, props, trace=None):
        object.__setattr__(self, '_props', props)
        object.__setattr__(self, '_trace', trace)

    def __setattr__(self, name, value):
        raise AttributeError("SupersonicCone is immutable")

    def __delattr__(self, name):
        raise AttributeError("SupersonicCone is immutable")

    def __repr__(self):
        return ("SupersonicCone(M1=%g, beta=%g deg, theta_c=%g deg, M_c=%g)" %
                (self.M1, degrees(self.beta), degrees(self.theta_c), self.M_c))

    @classmethod
    def from_mach_and_shock_angle(cls, M1, beta, g=1.4, steps=None, keep_trace=False):
        """
        Solve the cone flow for a given free-stream Mach number and shock angle.

        M1: free-stream Mach number
        beta: shock angle (radians), between the Mach angle and pi/2
        g: ratio of specific heats
        steps: number of RK4 steps from the shock to the axis
        keep_trace: hold on to the integration samples (see the trace property)
        """
        check_gamma(g); check_supersonic(M1)
        opts = config.merge_options({'steps': steps})
        mu = asin(1.0/M1)
        if not (mu < beta <= 0.5*pi):
            raise DomainError("Shock angle %g deg is outside (%g, 90] deg for M1=%g" %
                              (degrees(beta), degrees(mu), M1))
        theta_s = theta_obl(M1, beta, g)
        M2 = M2_obl(M1, beta, theta_s, g)
        theta_c, M_c, trace = _shoot(M1, beta, g, opts['steps'])
        # Shock jump, then isentropic compression along to the cone surface.
        p2p1 = p2_p1_obl(M1, beta, g)
        r2r1 = r2_r1_obl(M1, beta, g)
        T2T1 = T2_T1_obl(M1, beta, g)
        p02p01 = p02_p01_obl(M1, beta, g)
        props = ConeProperties(
            M1=M1, g=g, beta=beta, theta_c=theta_c,
            shock_turn_angle=beta - theta_c,
            theta_s=theta_s, M2=M2, M_c=M_c,
            p2_p1=p2p1, r2_r1=r2r1, T2_T1=T2T1, p02_p01=p02p01,
            pc_p1=p2p1 * p0_p(M2, g) / p0_p(M_c, g),
            rc_r1=r2r1 * r0_r(M2, g) / r0_r(M_c, g),
            Tc_T1=T2T1 * T0_T(M2, g) / T0_T(M_c, g),
            p0c_p01=p02p01)
        return cls(props, trace if keep_trace else None)

    @classmethod
    def from_mach_and_cone_angle(cls, M1, theta_c, g=1.4, steps=None, tol=None,
                                 max_iterations=None, keep_trace=False):
        """
        Solve the cone flow for a given free-stream Mach number and cone half-angle.

        M1: free-stream Mach number
        theta_c: cone half-angle (radians)
        g: ratio of specific heats
        steps: number of RK4 steps for each shooting pass
        tol, max_iterations: controls on the shock-angle bisection

        The shock angle of the largest attached cone is located first, then
        the shock angle is found by bisection between the Mach angle and
        that peak, where the cone angle grows with shock angle (the weak
        branch).  Every evaluation of the residual is a full integration.
        """
        check_gamma(g); check_supersonic(M1)
        if not (0.0 < theta_c < 0.5*pi):
            raise DomainError("Cone half-angle must lie in (0, pi/2), got %g" % theta_c)
        opts = config.merge_options({'steps': steps, 'tol': tol,
                                     'max_iterations': max_iterations})
        beta_peak, theta_peak = max_cone_angle(M1, g, opts['steps'])
        if theta_c > theta_peak + 2.0*beta_peak/opts['steps'] + opts['tol']:
            raise DomainError("No attached conical shock for a %g deg cone at M1=%g;"
                              " the largest is %g deg" % (degrees(theta_c), M1, degrees(theta_peak)))
        def error_in_theta(beta_guess):
            theta_guess, M_c = _weak_shock_surface(M1, beta_guess, g, opts['steps'])
            return theta_guess - theta_c
        beta = bisection(error_in_theta, asin(1.0/M1), beta_peak,
                         tol=opts['tol'], max_iterations=opts['max_iterations'])
        log.debug("from_mach_and_cone_angle: M1=%g theta_c=%g deg -> beta=%g deg",
                  M1, degrees(theta_c), degrees(beta))
        cone = cls.from_mach_and_shock_angle(M1, beta, g, opts['steps'], keep_trace)
        # The cone angle is only resolved to within a step or two of the march.
        if abs(cone.theta_c - theta_c) > 2.0*beta/opts['steps'] + opts['tol']:
            raise DomainError("No attached conical shock for a %g deg cone at M1=%g" %
                              (degrees(theta_c), M1))
        return cone

    @classmethod
    def from_mach_and_surface_mach(cls, M1, M_c, g=1.4, steps=None, tol=None,
                                   max_iterations=None, keep_trace=False):
        """
        Solve the cone flow for a given free-stream Mach number and surface Mach number.

        M1: free-stream Mach number
        M_c: Mach number at the cone surface, less than M1
        g: ratio of specific heats
        steps, tol, max_iterations: as for from_mach_and_cone_angle

        The search is confined to the weak branch, from the Mach angle up
        to the shock angle of the largest attached cone.
        """
        check_gamma(g); check_supersonic(M1)
        if not (0.0 < M_c < M1):
            raise DomainError("Surface Mach number must lie in (0, M1), got %g" % M_c)
        opts = config.merge_options({'steps': steps, 'tol': tol,
                                     'max_iterations': max_iterations})
        beta_peak, _ = max_cone_angle(M1, g, opts['steps'])
        def error_in_mach(beta_guess):
            theta_guess, M_guess = _weak_shock_surface(M1, beta_guess, g, opts['steps'])
            return M_guess - M_c
        beta = bisection(error_in_mach, asin(1.0/M1), beta_peak,
                         tol=opts['tol'], max_iterations=opts['max_iterations'])
        log.debug("from_mach_and_surface_mach: M1=%g M_c=%g -> beta=%g deg",
                  M1, M_c, degrees(beta))
        cone = cls.from_mach_and_shock_angle(M1, beta, g, opts['steps'], keep_trace)
        if abs(cone.M_c - M_c) > 1.0e-3 * M_c:
            raise DomainError("Surface Mach number %g is not reachable at M1=%g" % (M_c, M1))
        return cone

    @property
    def properties(self):
        return self._props

    @property
    def trace(self):
        """The ConeTrace of the march, if it was kept, else None."""
        return self._trace

    @property
    def M1(self):
        return self._props.M1

    @property
    def g(self):
        return self._props.g

    @property
    def beta(self):
        return self._props.beta

    @property
    def theta_c(self):
        return self._props.theta_c

    @property
    def shock_turn_angle(self):
        return self._props.shock_turn_angle

    @property
    def theta_s(self):
        return self._props.theta_s

    @property
    def M2(self):
        return self._props.M2

    @property
    def M_c(self):
        return self._props.M_c

    @property
    def p2_p1(self):
        return self._props.p2_p1

    @property
    def r2_r1(self):
        return self._props.r2_r1

    @property
    def T2_T1(self):
        return self._props.T2_T1

    @property
    def p02_p01(self):
        return self._props.p02_p01

    @property
    def pc_p1(self):
        return self._props.pc_p1

    @property
    def rc_r1(self):
        return self._props.rc_r1

    @property
    def Tc_T1(self):
        return self._props.Tc_T1

    @property
    def p0c_p01(self):
        return self._props.p0c_p01

    @property
    def pressure_coefficient(self):
        """Surface pressure coefficient (pc - p1)/(0.5 rho1 V1^2)."""
        return (self.pc_p1 - 1.0) / (0.5 * self.g * self.M1**2)


def cone_flowfield(M1, beta, g=1.4, steps=None, rays=10):
    """
    Mach number and flow direction on rays through the conical shock layer.

    M1: free-stream Mach number
    beta: shock angle (radians)
    g: ratio of specific heats
    steps: number of RK4 steps from the shock to the axis
    rays: number of rays, evenly spaced in sample index from the shock
        (first) to the cone surface (last)

    Returns: ConeFlowfield of numpy arrays.
    """
    assert rays >= 2, "Need at least the shock and the cone-surface rays."
    cone = SupersonicCone.from_mach_and_shock_angle(M1, beta, g, steps, keep_trace=True)
    thetas = np.array(cone.trace.thetas)
    V_r = np.array([s.V_r for s in cone.trace.states])
    V_theta = np.array([s.V_theta for s in cone.trace.states])
    idxs = np.round(np.linspace(0, len(thetas) - 1, rays)).astype(int)
    V = np.hypot(V_r[idxs], V_theta[idxs])
    M = np.sqrt(2.0 / (g - 1.0) * V**2 / (1.0 - V**2))
    flow_dir = thetas[idxs] + np.arctan(V_theta[idxs] / V_r[idxs])
    return ConeFlowfield(thetas[idxs], M, flow_dir)

#------------------------------------------------------------------------

if __name__ == "__main__":
    M1 = 1.5
    print("Taylor-Maccoll cone flow demo with M1=%g" % M1)
    print("for M1=1.5, beta=49 degrees, expect theta=20 degrees from NACA1135.")
    cone = SupersonicCone.from_mach_and_shock_angle(M1, radians(49.0))
    print(cone)
    print("surface pressure coefficient=", cone.pressure_coefficient, "expected 0.385")
    print("Conical shock from cone with half-angle 20 degrees in M1=", M1)
    cone = SupersonicCone.from_mach_and_cone_angle(M1, radians(20.0))
    print("beta(degrees)=", degrees(cone.beta), "expected 49 degrees")
    print("Done.")
