"""
===============================================================================
ORBITCALC - Guidance Package
===============================================================================
Mission-planning quantities computed from orbits and launch sites.

Modules:
    maneuver_planner : Hohmann transfer delta-V and transfer time
    launch_windows   : Launch azimuth and launch window search
===============================================================================
"""
