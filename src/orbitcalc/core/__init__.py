"""
===============================================================================
ORBITCALC - Core Package
===============================================================================
Foundational types shared by every subsystem.

Modules:
    constants : Physical constants, solver defaults, the CentralBody record
    vector    : Immutable Vector3 algebra
    frames    : Time system (Unix instants, GMST) and ECI -> ECEF rotation
===============================================================================
"""
