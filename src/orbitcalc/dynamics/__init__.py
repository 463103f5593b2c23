"""
===============================================================================
ORBITCALC - Dynamics Package
===============================================================================
Two-body orbital dynamics.

Submodules:
    kepler            -- Kepler's equation and anomaly conversions
    orbital_mechanics -- Element conversions, RK4 and analytic propagation
    orbit_metrics     -- Period, apsides, validation, stability class
    ground_track      -- Sub-satellite track over one period
===============================================================================
"""
