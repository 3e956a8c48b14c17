"""
supersonic: compressible-flow relations for supersonic aerodynamics.

  supersonic.ideal_gas_flow    isentropic, normal- and oblique-shock relations
  supersonic.taylor_maccoll    conical shock flow (SupersonicCone)
  supersonic.numeric           root finders and the RK4 stepper
"""

__version__ = "0.1.0"
