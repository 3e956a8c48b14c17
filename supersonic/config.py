# config.py
"""
Numerical defaults shared by the solvers and the conical-flow shooter.

Every value here can be overridden per call, either with the keyword
argument of the function concerned or, for the SupersonicCone
constructors, with an options dictionary that is merged over DEFAULTS.
"""

# Stopping tolerance for the root finders (on |f| and on the step/bracket).
TOLERANCE = 1.0e-9

# Iteration cap for bisection and Newton-Raphson.
MAX_ITERATIONS = 200

# Number of fixed RK4 steps from the shock to the axis.
CONE_STEPS = 4000

# Newton-Raphson gives up when |f'(x)| drops below this.
SINGULAR_SLOPE = 1.0e-12

# Shock angles between the Mach angle and this multiple of it are
# treated by linear interpolation of the cone angle.
WEAK_SHOCK_FACTOR = 1.01

# Width (radians) to which the shock angle of the largest attached cone
# is located.  The cone angle is flat there, so a loose value will do.
PEAK_TOLERANCE = 1.0e-4

# The conical march stops this close to the axis (radians), where the
# Taylor-Maccoll equation is singular.
AXIS_ANGLE = 1.0e-6

DEFAULTS = {
    'tol': TOLERANCE,
    'max_iterations': MAX_ITERATIONS,
    'steps': CONE_STEPS,
}


def merge_options(options=None):
    """
    Overlay user options on a fresh copy of DEFAULTS.

    options: dictionary with any of the keys in DEFAULTS;
        a value of None leaves the default in place.
    Returns: a new dictionary with every key of DEFAULTS.
    """
    opts = dict(DEFAULTS)
    if options is None: return opts
    for k in options.keys():
        if k in opts.keys():
            if options[k] is not None: opts[k] = options[k]
        else:
            raise RuntimeError(f'option {k} is not available')
    if opts['steps'] < 1:
        raise RuntimeError('steps must be at least 1, got %d' % opts['steps'])
    if opts['max_iterations'] < 1:
        raise RuntimeError('max_iterations must be at least 1, got %d' % opts['max_iterations'])
    return opts
