"""
===============================================================================
ORBITCALC - Two-Body Orbital Mechanics Engine
===============================================================================
Keplerian <-> Cartesian conversion, fixed-step RK4 propagation, derived
orbit quantities and mission planning (Hohmann transfers, launch windows,
ground tracks).

Subpackages:
    core       : Constants, vector algebra, time system and frames
    dynamics   : Kepler solver, propagation, orbit metrics, ground track
    guidance   : Maneuver planning and launch windows
    simulation : One-shot orbit analysis
    export     : Trajectory CSV output
===============================================================================
"""

from orbitcalc.core.constants import EARTH, CentralBody
from orbitcalc.core.vector import Vector3
from orbitcalc.core.frames import gmst, to_epoch_seconds, from_epoch_seconds
from orbitcalc.dynamics.kepler import KeplerSolution, solve_kepler, solve_kepler_detailed
from orbitcalc.dynamics.orbital_mechanics import (
    OrbitalElements,
    OrbitalMechanics,
    StateVector,
    TrajectoryPoint,
)
from orbitcalc.dynamics.orbit_metrics import (
    OrbitMetrics,
    OrbitStability,
    ValidationResult,
    orbit_stability,
)
from orbitcalc.dynamics.ground_track import GroundTrackPoint, ground_track
from orbitcalc.guidance.maneuver_planner import ManeuverPlanner, TransferOrbit, TransferPlan
from orbitcalc.guidance.launch_windows import (
    LaunchWindow,
    LaunchWindowResult,
    PassType,
    launch_azimuth,
    launch_windows,
)
from orbitcalc.simulation.orbit_analysis import OrbitReport, analyze_orbit
from orbitcalc.export.trajectory_csv import trajectory_to_dataframe, write_trajectory_csv

__version__ = '0.1.0'

__all__ = [
    'EARTH', 'CentralBody', 'Vector3',
    'gmst', 'to_epoch_seconds', 'from_epoch_seconds',
    'KeplerSolution', 'solve_kepler', 'solve_kepler_detailed',
    'OrbitalElements', 'OrbitalMechanics', 'StateVector', 'TrajectoryPoint',
    'OrbitMetrics', 'OrbitStability', 'ValidationResult', 'orbit_stability',
    'GroundTrackPoint', 'ground_track',
    'ManeuverPlanner', 'TransferOrbit', 'TransferPlan',
    'LaunchWindow', 'LaunchWindowResult', 'PassType', 'launch_azimuth', 'launch_windows',
    'OrbitReport', 'analyze_orbit',
    'trajectory_to_dataframe', 'write_trajectory_csv',
]
