"""
===============================================================================
ORBITCALC - Simulation Package
===============================================================================
Pipelines that chain the dynamics modules into complete analyses.

Modules:
    orbit_analysis : Validate-then-compute report for one orbit
===============================================================================
"""
