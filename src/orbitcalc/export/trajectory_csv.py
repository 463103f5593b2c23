"""
===============================================================================
ORBITCALC - Trajectory CSV Export
===============================================================================
Tabular export of propagated trajectories.

The column layout is fixed; downstream tools read it by header:

    Time (s),X (km),Y (km),Z (km),Vx (km/s),Vy (km/s),Vz (km/s)

Times are written with 2 decimals and vector components with 6.
===============================================================================
"""

import logging
from pathlib import Path
from typing import Sequence, Union

import pandas as pd

from orbitcalc.dynamics.orbital_mechanics import TrajectoryPoint

logger = logging.getLogger(__name__)

TIME_COLUMN = 'Time (s)'
POSITION_COLUMNS = ['X (km)', 'Y (km)', 'Z (km)']
VELOCITY_COLUMNS = ['Vx (km/s)', 'Vy (km/s)', 'Vz (km/s)']
COLUMNS = [TIME_COLUMN] + POSITION_COLUMNS + VELOCITY_COLUMNS


def trajectory_to_dataframe(trajectory: Sequence[TrajectoryPoint]) -> pd.DataFrame:
    """One row per trajectory point, in trajectory order."""
    rows = [
        [p.time, *p.position, *p.velocity]
        for p in trajectory
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def write_trajectory_csv(
    trajectory: Sequence[TrajectoryPoint],
    path: Union[str, Path],
) -> Path:
    """
    Write *trajectory* to a CSV file.

    Parameters
    ----------
    trajectory : sequence of TrajectoryPoint
        Output of OrbitalMechanics.propagate.
    path : str or Path
        Destination file; parent directories are created.

    Returns
    -------
    Path
        The written file.

    Raises
    ------
    ValueError
        If the trajectory is empty.
    """
    if len(trajectory) == 0:
        raise ValueError("No trajectory data to export")

    df = trajectory_to_dataframe(trajectory)
    df[TIME_COLUMN] = df[TIME_COLUMN].map('{:.2f}'.format)
    for col in POSITION_COLUMNS + VELOCITY_COLUMNS:
        df[col] = df[col].map('{:.6f}'.format)

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    logger.info("Wrote %d trajectory points to %s", len(df), path)
    return path
