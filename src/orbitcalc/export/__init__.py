"""
===============================================================================
ORBITCALC - Export Package
===============================================================================
File output for computed results.

Modules:
    trajectory_csv : Trajectory samples to CSV via pandas
===============================================================================
"""
