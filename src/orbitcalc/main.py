#!/usr/bin/env python3
"""
===============================================================================
ORBITCALC - COMMAND LINE ENTRY POINT
===============================================================================
Runs the orbit computations from a terminal.

USAGE:
    orbitcalc analyze --a 6778 --e 0.0001 --i 51.6
    orbitcalc hohmann 6778 42164
    orbitcalc launch-windows --lat 28.5729 --inclination 51.6 --raan 120
    orbitcalc ground-track --points 50 --epoch 2024-03-20T12:00:00
    orbitcalc export --output output/trajectory.csv
    orbitcalc --config config/orbit_config.yaml analyze

CONFIGURATION:
    Defaults are built in (DEFAULT_CONFIG).  A YAML file passed with
    --config is merged over them; command line options override both.

EXIT STATUS:
    0  success
    1  invalid orbit elements or unreachable launch geometry
    2  usage error (argparse)
===============================================================================
"""

import sys
import copy
import argparse
import logging
import time
from datetime import datetime
from typing import Optional, Sequence

import yaml

from orbitcalc.core.frames import to_epoch_seconds, from_epoch_seconds
from orbitcalc.dynamics.ground_track import ground_track
from orbitcalc.dynamics.orbit_metrics import OrbitMetrics
from orbitcalc.dynamics.orbital_mechanics import OrbitalElements, OrbitalMechanics
from orbitcalc.export.trajectory_csv import write_trajectory_csv
from orbitcalc.guidance.launch_windows import launch_windows
from orbitcalc.guidance.maneuver_planner import ManeuverPlanner
from orbitcalc.simulation.orbit_analysis import analyze_orbit

logger = logging.getLogger('orbitcalc')

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

# ---------------------------------------------------------------------------
# Default configuration (ISS-like orbit, Cape Canaveral launch site)
# ---------------------------------------------------------------------------
DEFAULT_CONFIG = {
    'orbit': {
        'a': 6778.0,
        'e': 0.0001,
        'i': 51.6,
        'raan': 0.0,
        'arg_pe': 0.0,
        'true_anomaly': 0.0,
    },
    'propagation': {
        'step': 60.0,
        'samples_per_orbit': 100,
    },
    'ground_track': {
        'num_points': 100,
    },
    'launch_site': {
        'latitude': 28.5729,
        'longitude': -80.6490,
    },
    'launch_windows': {
        'count': 10,
    },
    'output': {
        'trajectory_csv': 'output/trajectory.csv',
    },
    'logging': {
        'level': 'WARNING',
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None) -> dict:
    """
    Load the run configuration.

    Args:
        config_path: Path to a YAML file.  Keys it sets replace the
            built-in defaults; nested sections are merged key by key.
            None returns the defaults.

    Returns:
        Configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if config_path is None:
        return config

    logger.info("Loading configuration from: %s", config_path)
    with open(config_path, 'r') as f:
        user_config = yaml.safe_load(f) or {}
    return _deep_merge(config, user_config)


def parse_epoch(value: str) -> float:
    """Unix-epoch seconds from either a number or an ISO-8601 timestamp."""
    try:
        return float(value)
    except ValueError:
        pass
    # fromisoformat only accepts a trailing 'Z' from Python 3.11
    text = value[:-1] + '+00:00' if value.endswith(('Z', 'z')) else value
    try:
        return to_epoch_seconds(datetime.fromisoformat(text))
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid epoch {value!r}: expected Unix seconds or ISO-8601"
        )


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid count {value!r}: expected an integer")
    if number < 1:
        raise argparse.ArgumentTypeError(f"count must be at least 1, got {number}")
    return number


def positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid value {value!r}: expected a number")
    if not number > 0.0:
        raise argparse.ArgumentTypeError(f"value must be greater than 0, got {number}")
    return number


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------

def _elements_from_args(args, config: dict) -> OrbitalElements:
    orbit = dict(config['orbit'])
    for key in ('a', 'e', 'i', 'raan', 'arg_pe', 'true_anomaly'):
        value = getattr(args, key, None)
        if value is not None:
            orbit[key] = value
    return OrbitalElements.from_dict(orbit)


def _report_invalid(validation) -> int:
    for msg in validation.errors:
        logger.warning("Invalid orbit: %s", msg)
    print("Invalid orbit:")
    for msg in validation.errors:
        print(f"  - {msg}")
    return 1


def cmd_analyze(args, config: dict) -> int:
    elements = _elements_from_args(args, config)
    samples = (config['propagation']['samples_per_orbit']
               if args.samples is None else args.samples)
    report = analyze_orbit(elements, samples_per_orbit=samples)
    if not report.valid:
        return _report_invalid(report.validation)

    print("=" * 60)
    print("  ORBIT ANALYSIS")
    print(f"  a={elements.a:.1f} km  e={elements.e:.6f}  i={elements.i:.2f} deg")
    print("=" * 60)
    print(report.summary())
    print(f"Trajectory samples : {len(report.trajectory)}")
    return 0


def cmd_hohmann(args, config: dict) -> int:
    plan = ManeuverPlanner().hohmann_transfer(args.r1, args.r2)
    print("=" * 60)
    print(f"  HOHMANN TRANSFER  {args.r1:.1f} km -> {args.r2:.1f} km")
    print("=" * 60)
    print(f"Delta-V 1          : {plan.delta_v1:.4f} km/s")
    print(f"Delta-V 2          : {plan.delta_v2:.4f} km/s")
    print(f"Total Delta-V      : {plan.total_delta_v:.4f} km/s")
    print(f"Transfer time      : {plan.transfer_time / 3600.0:.3f} h")
    print(f"Transfer orbit     : a={plan.transfer_orbit.a:.1f} km, "
          f"e={plan.transfer_orbit.e:.5f}")
    return 0


def cmd_launch_windows(args, config: dict) -> int:
    site = config['launch_site']
    lat = site['latitude'] if args.lat is None else args.lat
    lon = site['longitude'] if args.lon is None else args.lon
    inclination = config['orbit']['i'] if args.inclination is None else args.inclination
    raan = config['orbit']['raan'] if args.raan is None else args.raan
    count = config['launch_windows']['count'] if args.count is None else args.count
    epoch = time.time() if args.epoch is None else args.epoch

    result = launch_windows(lat, lon, inclination, raan, epoch, count=count)
    if not result.ok:
        logger.warning(result.error)
        print(result.error)
        return 1

    print("=" * 60)
    print(f"  LAUNCH WINDOWS  site ({lat:.4f}, {lon:.4f})  "
          f"target i={inclination:.2f} RAAN={raan:.2f}")
    print(f"  Search start: {from_epoch_seconds(epoch).isoformat()}")
    print("=" * 60)
    if not result.windows:
        print("No launch windows found in the search span.")
    for window in result.windows:
        print(f"{window.iso_time}  azimuth {window.azimuth_deg:7.2f} deg  "
              f"{window.pass_type.value}")
    return 0


def cmd_ground_track(args, config: dict) -> int:
    elements = _elements_from_args(args, config)
    validation = OrbitMetrics().validate(elements)
    if not validation.valid:
        return _report_invalid(validation)

    num_points = (config['ground_track']['num_points']
                  if args.points is None else args.points)
    epoch = time.time() if args.epoch is None else args.epoch
    track = ground_track(elements, num_points=num_points, instant=epoch)

    print(f"{'Time (s)':>10} {'Lat (deg)':>10} {'Lon (deg)':>11} {'Alt (km)':>10}")
    for p in track:
        print(f"{p.time:10.1f} {p.lat:10.4f} {p.lon:11.4f} {p.altitude:10.3f}")
    return 0


def cmd_export(args, config: dict) -> int:
    elements = _elements_from_args(args, config)
    metrics = OrbitMetrics()
    validation = metrics.validate(elements)
    if not validation.valid:
        return _report_invalid(validation)

    duration = (metrics.orbital_period(elements.a)
                if args.duration is None else args.duration)
    step = config['propagation']['step'] if args.step is None else args.step
    trajectory = OrbitalMechanics().propagate(elements, duration, step)

    output = args.output or config['output']['trajectory_csv']
    path = write_trajectory_csv(trajectory, output)
    print(f"Exported {len(trajectory)} points to {path}")
    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _add_orbit_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group('orbit elements (override config)')
    group.add_argument('--a', type=float, help='Semi-major axis (km)')
    group.add_argument('--e', type=float, help='Eccentricity')
    group.add_argument('--i', type=float, help='Inclination (deg)')
    group.add_argument('--raan', type=float, help='RAAN (deg)')
    group.add_argument('--arg-pe', dest='arg_pe', type=float,
                       help='Argument of periapsis (deg)')
    group.add_argument('--nu', dest='true_anomaly', type=float,
                       help='True anomaly (deg)')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='orbitcalc',
        description='Two-body orbit analysis and mission planning',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--config', type=str, default=None,
                        help='Path to orbit config YAML')
    parser.add_argument('--log-level', type=str, default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: from config)')

    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('analyze', help='Period, apsides, stability and trajectory')
    _add_orbit_arguments(p)
    p.add_argument('--samples', type=positive_int, default=None,
                   help='Trajectory samples per orbit')
    p.set_defaults(func=cmd_analyze)

    p = sub.add_parser('hohmann', help='Hohmann transfer between circular orbits')
    p.add_argument('r1', type=float, help='Initial orbit radius (km)')
    p.add_argument('r2', type=float, help='Final orbit radius (km)')
    p.set_defaults(func=cmd_hohmann)

    p = sub.add_parser('launch-windows', help='Launch opportunities into a plane')
    p.add_argument('--lat', type=float, default=None, help='Site latitude (deg)')
    p.add_argument('--lon', type=float, default=None, help='Site longitude (deg)')
    p.add_argument('--inclination', type=float, default=None,
                   help='Target inclination (deg)')
    p.add_argument('--raan', type=float, default=None, help='Target RAAN (deg)')
    p.add_argument('--count', type=positive_int, default=None, help='Windows wanted')
    p.add_argument('--epoch', type=parse_epoch, default=None,
                   help='Search start, Unix seconds or ISO-8601 (default: now)')
    p.set_defaults(func=cmd_launch_windows)

    p = sub.add_parser('ground-track', help='Sub-satellite track over one period')
    _add_orbit_arguments(p)
    p.add_argument('--points', type=positive_int, default=None, help='Steps per period')
    p.add_argument('--epoch', type=parse_epoch, default=None,
                   help='GMST instant, Unix seconds or ISO-8601 (default: now)')
    p.set_defaults(func=cmd_ground_track)

    p = sub.add_parser('export', help='Propagate and write the trajectory to CSV')
    _add_orbit_arguments(p)
    p.add_argument('--duration', type=float, default=None,
                   help='Propagation span (s, default: one period)')
    p.add_argument('--step', type=positive_float, default=None,
                   help='RK4 step (s, default: from config)')
    p.add_argument('--output', type=str, default=None, help='CSV path')
    p.set_defaults(func=cmd_export)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point. Parses the command line, configures logging and
    dispatches to the requested subcommand.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    level = args.log_level or config['logging']['level']
    logging.basicConfig(level=getattr(logging, str(level).upper()), format=LOG_FORMAT)

    return args.func(args, config)


if __name__ == '__main__':
    sys.exit(main())
