# ideal_gas_flow.py
"""
Steady flow relations for a calorically perfect (ideal) gas.

Contents:

One-dimensional flows:
   * Isentropic flow relations and their inverses.
     State zero (0) refers to the stagnation condition.
     State star is the sonic (throat) condition.
   * 1D (Normal) Shock Relations
     State 1 is before the shock and state 2 after the shock.
     Velocities are in a shock-stationary frame.

Two-dimensional flows:
   * Prandtl-Meyer function and its inverse
   * Oblique-shock relations, including the detachment limit

Speed helpers for the conical-flow code, with the speed scaled by the
maximum (stagnation) speed V_max = sqrt(2 h0).

Angles are in radians throughout.  g is the ratio of specific heats.
Bad arguments raise the typed errors from supersonic.errors.
"""

from math import sqrt, sin, cos, tan, asin, atan, pi, isnan
import logging

from supersonic.errors import InvalidSpecificHeatRatio, InvalidMachNumber, DomainError
from supersonic.numeric.zero_solvers import bisection, newton

log = logging.getLogger(__name__)

# Upper end of the bracket used to invert the normal-shock
# stagnation pressure ratio.
M1_SEARCH_LIMIT = 50.0


def check_gamma(g):
    """Raise InvalidSpecificHeatRatio unless g > 1."""
    if not g > 1.0: raise InvalidSpecificHeatRatio(g)
    return g

def check_mach(M):
    """Raise InvalidMachNumber for negative (or NaN) Mach number."""
    if not M >= 0.0: raise InvalidMachNumber(M)
    return M

def check_supersonic(M):
    """Raise InvalidMachNumber unless M > 1."""
    if not M > 1.0:
        raise InvalidMachNumber(M, "Supersonic Mach number required, got M=%g" % M)
    return M

# ---------------------------------------------------------------
# Isentropic flow

def A_Astar(M, g=1.4):
    """
    Area ratio A/Astar for an isentropic, quasi-one-dimensional flow.

    M: Mach number at area A
    g: ratio of specific heats
    Returns: A/Astar
    """
    check_gamma(g); check_mach(M)
    if M == 0.0: raise DomainError("A/Astar is unbounded at M=0")
    t1 = (g + 1.0) / (g - 1.0)
    m2 = M**2
    t2 = 1.0 / m2 * (2.0 / (g + 1.0) * (1.0 + (g - 1.0) * 0.5 * m2))**t1
    return sqrt(t2)

def T0_T(M, g=1.4):
    """
    Total to static temperature ratio for an adiabatic flow.

    M: Mach number
    g: ratio of specific heats
    Returns: T0/T
    """
    check_gamma(g); check_mach(M)
    return 1.0 + (g - 1.0) * 0.5 * M**2

def p0_p(M, g=1.4):
    """
    Total to static pressure ratio for an isentropic flow.

    M: Mach number
    g: ratio of specific heats
    Returns: p0/p
    """
    return (T0_T(M, g))**( g / (g - 1.0) )

def r0_r(M, g=1.4):
    """
    Stagnation to free-stream density ratio for an isentropic flow.

    M: Mach number
    g: ratio of specific heats
    Returns: r0/r
    """
    return (T0_T(M, g))**(1.0 / (g - 1.0))

def mach_angle(M):
    """
    Mach angle mu = asin(1/M), in radians.

    M: Mach number, at least 1
    """
    check_mach(M)
    if M < 1.0: raise InvalidMachNumber(M, "Mach angle undefined for subsonic M=%g" % M)
    return asin(1.0/M)

def M_from_mach_angle(mu):
    """Mach number from a Mach angle in (0, pi/2]."""
    if not (0.0 < mu <= 0.5*pi):
        raise DomainError("Mach angle must lie in (0, pi/2], got %g" % mu)
    return 1.0 / sin(mu)

def M_from_T0_T(T0T, g=1.4):
    """Mach number from the total-to-static temperature ratio T0/T >= 1."""
    check_gamma(g)
    if not T0T >= 1.0: raise DomainError("T0/T must be at least 1, got %g" % T0T)
    return sqrt(2.0 * (T0T - 1.0) / (g - 1.0))

def M_from_p0_p(p0p, g=1.4):
    """Mach number from the total-to-static pressure ratio p0/p >= 1."""
    check_gamma(g)
    if not p0p >= 1.0: raise DomainError("p0/p must be at least 1, got %g" % p0p)
    return M_from_T0_T(p0p**((g - 1.0) / g), g)

def M_from_r0_r(r0r, g=1.4):
    """Mach number from the stagnation-to-static density ratio r0/r >= 1."""
    check_gamma(g)
    if not r0r >= 1.0: raise DomainError("r0/r must be at least 1, got %g" % r0r)
    return M_from_T0_T(r0r**(g - 1.0), g)

# -----------------------------------------------------------------
# Speed scaled by the maximum speed, V' = V/V_max.
# These connect Mach number to the velocity components used
# by the Taylor-Maccoll equation.

def V_from_M(M, g=1.4):
    """
    Nondimensional speed V/V_max for a flow at Mach number M.

    Equivalent to (2/((g-1) M^2) + 1)^(-1/2) but well behaved at M=0.
    """
    check_gamma(g); check_mach(M)
    t1 = 0.5 * (g - 1.0) * M**2
    return sqrt(t1 / (1.0 + t1))

def M_from_V(V, g=1.4):
    """
    Mach number for nondimensional speed V/V_max in [0, 1).
    """
    check_gamma(g)
    if not (0.0 <= V < 1.0):
        raise DomainError("Scaled speed V/V_max must lie in [0, 1), got %g" % V)
    return sqrt(2.0 / (g - 1.0) * V**2 / (1.0 - V**2))

# -----------------------------------------------------------------
# 1-D normal shock relations.
# The underscored versions skip the argument checks so that the
# oblique-shock code can hand them the normal Mach number directly.

def _m2_shock(M1, g):
    numer = 1.0 + (g - 1.0) * 0.5 * M1**2
    denom = g * M1**2 - (g - 1.0) * 0.5
    return sqrt(numer / denom)

def _r2_r1(M1, g):
    numer = (g + 1.0) * M1**2
    denom = 2.0 + (g - 1.0) * M1**2
    return numer / denom

def _p2_p1(M1, g):
    return 1.0 + 2.0 * g / (g + 1.0) * (M1**2 - 1.0)

def _p02_p01(M1, g):
    t1 = (g + 1.0) / (2.0 * g * M1**2 - (g - 1.0))
    t2 = (g + 1.0) * M1**2 / (2.0 + (g - 1.0) * M1**2)
    return t1**(1.0/(g-1.0)) * t2**(g/(g-1.0))

def m2_shock(M1, g=1.4):
    """Downstream Mach number of a normal shock with upstream Mach number M1 > 1."""
    check_gamma(g); check_supersonic(M1)
    return _m2_shock(M1, g)

def r2_r1(M1, g=1.4):
    """Normal-shock density jump rho2/rho1."""
    check_gamma(g); check_supersonic(M1)
    return _r2_r1(M1, g)

def p2_p1(M1, g=1.4):
    """Normal-shock static pressure jump."""
    check_gamma(g); check_supersonic(M1)
    return _p2_p1(M1, g)

def T2_T1(M1, g=1.4):
    """Normal-shock static temperature jump, from the ideal-gas law."""
    check_gamma(g); check_supersonic(M1)
    return _p2_p1(M1, g) / _r2_r1(M1, g)

def p02_p01(M1, g=1.4):
    """
    Loss of total pressure through a normal shock.

    M1: upstream Mach number, greater than 1
    g: ratio of specific heats
    Returns: p02/p01, less than 1
    """
    check_gamma(g); check_supersonic(M1)
    return _p02_p01(M1, g)

def M1_from_p02_p01(ratio, g=1.4, tol=1.0e-9):
    """
    Upstream Mach number for a given normal-shock stagnation pressure ratio.

    ratio: p02/p01, in (0, 1]
    g: ratio of specific heats
    Returns: M1, found by bisection on [1, M1_SEARCH_LIMIT]

    The ratio falls monotonically from 1 at M1=1, so the bracket
    holds exactly one root.
    """
    check_gamma(g)
    if not (0.0 < ratio <= 1.0):
        raise DomainError("p02/p01 must lie in (0, 1], got %g" % ratio)
    if ratio == 1.0: return 1.0
    if ratio < _p02_p01(M1_SEARCH_LIMIT, g):
        raise DomainError("p02/p01=%g needs M1 beyond %g" % (ratio, M1_SEARCH_LIMIT))
    def f_to_solve(m): return _p02_p01(m, g) - ratio
    return bisection(f_to_solve, 1.0, M1_SEARCH_LIMIT, tol=tol)

# -----------------------------------------------------------------
# Prandtl-Meyer functions

def PM1(M, g=1.4):
    """
    Prandtl-Meyer angle nu(M), the turning needed to expand from M=1 to M.

    Zero for M <= 1.  Returns radians.
    """
    check_gamma(g); check_mach(M)
    if M <= 1.0: return 0.0
    root_m = sqrt(M**2 - 1.0)
    lam = sqrt((g + 1.0) / (g - 1.0))
    return lam * atan(root_m / lam) - atan(root_m)

def PM_max(g=1.4):
    """Limiting Prandtl-Meyer angle, reached as M goes to infinity."""
    check_gamma(g)
    return 0.5 * pi * (sqrt((g + 1.0) / (g - 1.0)) - 1.0)

def PM2(nu, g=1.4, tol=1.0e-9):
    """
    Inverse Prandtl-Meyer function.

    nu: Prandtl-Meyer function value (in radians)
    g: ratio of specific heats
    Returns: Mach number

    Solves PM1(m, g) - nu = 0 by Newton-Raphson, assuming supersonic flow.
    The starting guess is the rational-function fit of I.M. Hall (1975),
    which is close enough that the Newton steps stay above M=1.
    """
    nu_max = PM_max(g)
    if not (0.0 <= nu < nu_max):
        raise DomainError("Prandtl-Meyer angle must lie in [0, %g), got %g" % (nu_max, nu))
    if nu == 0.0: return 1.0
    y = (nu / nu_max)**(2.0/3.0)
    M0 = (1.0 + 1.3604*y + 0.0962*y**2 - 0.5127*y**3) / (1.0 - 0.6722*y - 0.3278*y**2)
    M0 = max(M0, 1.0 + 1.0e-6)
    def f_to_solve(m): return PM1(m, g) - nu
    def f_dash(m): return sqrt(max(m**2 - 1.0, 0.0)) / (m * (1.0 + 0.5 * (g - 1.0) * m**2))
    return newton(f_to_solve, f_dash, M0, tol=tol)

# -----------------------------------------------------------------
# Oblique shock relations
# beta: shock angle, measured from the free-stream direction
# theta: flow deflection across the shock, same reference
# Both are in radians.

def _normal_mach(M1, beta, g):
    """Checked normal component of the upstream Mach number."""
    check_gamma(g); check_supersonic(M1)
    if isnan(beta) or not (0.0 < beta <= 0.5*pi + 1.0e-12):
        raise DomainError("Shock angle must lie in (0, pi/2], got %g" % beta)
    m1sb = M1 * sin(beta)
    # Allow for round-off when beta is exactly the Mach angle.
    if m1sb < 1.0 - 1.0e-9:
        raise DomainError("Subsonic normal Mach number: %g (beta below Mach angle)" % m1sb)
    return max(m1sb, 1.0)

def theta_obl(M1, beta, g=1.4):
    """
    Flow turning angle produced by an oblique shock (theta-beta-M relation).

    M1: free-stream Mach number
    beta: angle between the shock and the free stream (radians)
    g: ratio of specific heats
    Returns: deflection theta (radians); zero at the Mach angle and at pi/2
    """
    m1sb = _normal_mach(M1, beta, g)
    numer = 2.0 * (m1sb**2 - 1.0) / tan(beta)
    denom = M1**2 * (g + cos(2.0 * beta)) + 2.0
    return atan(numer/denom)

def M2_obl(M1, beta, theta=None, g=1.4):
    """
    Downstream Mach number of an oblique shock.

    The normal component goes through the normal-shock jump and the
    tangential component is unchanged, so M2 = M2n / sin(beta - theta).
    Pass theta if it is already known; otherwise it is computed from beta.
    """
    m1sb = _normal_mach(M1, beta, g)
    if theta is None: theta = theta_obl(M1, beta, g)
    return _m2_shock(m1sb, g) / sin(beta - theta)

# The thermodynamic jumps depend only on the normal Mach number M1 sin(beta).

def r2_r1_obl(M1, beta, g=1.4):
    return _r2_r1(_normal_mach(M1, beta, g), g)

def p2_p1_obl(M1, beta, g=1.4):
    return _p2_p1(_normal_mach(M1, beta, g), g)

def T2_T1_obl(M1, beta, g=1.4):
    m1sb = _normal_mach(M1, beta, g)
    return _p2_p1(m1sb, g) / _r2_r1(m1sb, g)

def p02_p01_obl(M1, beta, g=1.4):
    return _p02_p01(_normal_mach(M1, beta, g), g)

def beta_max(M1, g=1.4):
    """
    Shock angle at which the deflection is largest (detachment limit).

    M1: upstream Mach number
    Returns: beta (radians)
    """
    check_gamma(g); check_supersonic(M1)
    m2 = M1**2
    t1 = (g + 1.0) * m2 - 4.0
    t2 = sqrt((g + 1.0) * ((g + 1.0) * m2**2 + 8.0 * (g - 1.0) * m2 + 16.0))
    return asin(sqrt((t1 + t2) / (4.0 * g * m2)))

def theta_max(M1, g=1.4):
    """Largest deflection an attached oblique shock can produce, in radians."""
    return theta_obl(M1, beta_max(M1, g), g)

def beta_obl(M1, theta, g=1.4, tol=1.0e-9):
    """
    Oblique shock wave angle, weak branch.

    M1: upstream Mach number
    theta: flow deflection angle (radians)
    Returns: shock angle with respect to initial flow direction (radians)

    Bisection between the Mach angle (zero deflection) and the
    detachment angle (maximum deflection); theta_obl increases
    monotonically over that interval.
    """
    check_gamma(g); check_supersonic(M1)
    sign_beta = -1 if theta < 0.0 else 1
    theta = abs(theta)
    b1 = asin(1.0/M1)
    if theta < tol:
        # Small deflection will produce a very weak shock.
        return sign_beta * b1
    b2 = beta_max(M1, g)
    if theta > theta_obl(M1, b2, g):
        raise DomainError("Deflection %g exceeds the detachment limit for M1=%g" % (theta, M1))
    def f_to_solve(beta): return theta_obl(M1, beta, g) - theta
    beta = bisection(f_to_solve, b1, b2, tol=tol)
    log.debug("beta_obl: M1=%g theta=%g -> beta=%g", M1, theta, beta)
    return sign_beta * beta

def beta_obl2(M1, p2p1, g=1.4):
    """
    Oblique shock wave angle.

    M1: upstream Mach number
    p2p1: static pressure ratio p2/p1 across the oblique shock
    Returns: shock angle with respect to initial flow direction (radians)
    """
    check_gamma(g); check_supersonic(M1)
    if p2p1 < 1.0: raise DomainError("Invalid p2/p1: %g" % p2p1)
    dum1 = sqrt(((g+1.0)*p2p1+g-1.0)/2.0/g)
    if dum1 > M1:
        raise DomainError("p2/p1=%g is beyond the normal-shock value for M1=%g" % (p2p1, M1))
    return asin(dum1/M1)
