#!/usr/bin/env python3
"""
===============================================================================
COSMORISK - COMMAND-LINE ENTRY POINT
===============================================================================
Runs the risk kernel on a snapshot file, the way the desktop host does when
a body is selected.

USAGE:
    cosmorisk --snapshot state.json                     # Assess every asteroid
    cosmorisk --snapshot state.yaml --body 2024-YR4     # One body
    cosmorisk --snapshot state.json --body apophis --delta-v 0.5 0 0
    cosmorisk --snapshot state.json --rank hazard       # List view
    cosmorisk --snapshot state.json --config my_risk.yaml --unit ld

SNAPSHOT FORMAT (JSON or YAML):
    bodies:
      - id: earth
        name: Earth
        body_type: Planet
        position: [0.98, 0.17, 0.0]
        velocity: [-0.003, 0.017, 0.0]
        radius: 6371.0
        is_hazardous: false
      - id: apophis
        ...

The body with id 'earth' is used as the Earth snapshot.
===============================================================================
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from cosmorisk.core.config import RiskConfig, load_config
from cosmorisk.core.exceptions import CosmoRiskError
from cosmorisk.core.units import au_per_day_to_km_s, format_distance
from cosmorisk.assessment.composition import wiki_reference
from cosmorisk.assessment.facade import (
    BodyKind, BodySnapshot, RiskAssessment, RiskAssessmentFacade,
)

logger = logging.getLogger('cosmorisk')

EARTH_ID = 'earth'


def load_snapshot(path: Path, config: RiskConfig) -> List[BodySnapshot]:
    """
    Read a host snapshot file.

    Args:
        path: JSON (.json) or YAML file with a top-level 'bodies' list, or
            a bare list of bodies.
        config: Supplies per-field element defaults.

    Returns:
        List of BodySnapshot
    """
    logger.info("Loading snapshot from: %s", path)
    with open(path, 'r', encoding='utf-8') as f:
        if path.suffix.lower() == '.json':
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    entries = data.get('bodies', []) if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise CosmoRiskError(f"{path}: expected a list of bodies")
    bodies = [BodySnapshot.from_dict(entry, config) for entry in entries]
    logger.info("Snapshot holds %d bodies", len(bodies))
    return bodies


def format_assessment(result: RiskAssessment, body: BodySnapshot, unit: str) -> str:
    hazard = result.hazard
    lines = [
        f"{body.name} [{result.body_id}]",
        f"  Speed       : {au_per_day_to_km_s(body.speed):.2f} km/s",
        f"  Orbit       : a={result.elements.a:.4f} AU  e={result.elements.e:.4f}"
        + ("  (defaults)" if result.elements_defaulted else ""),
        f"  Distance    : {format_distance(result.distance_to_earth_au, unit)}",
        f"  MOID        : {format_distance(result.moid.distance_au, unit)}"
        f"  ({result.moid.distance_ld:.2f} LD)",
        f"  Composition : {result.profile.spectral_type}, "
        f"{result.profile.density_kg_m3:.0f} kg/m^3, mass {result.mass_kg:.2e} kg",
        f"  Energy      : {hazard.energy_megatons:.3g} Mt",
        f"  Probability : {result.probability:.3g}",
        f"  Hazard      : {hazard.level} ({hazard.band.value}) - {hazard.description}",
    ]
    link = wiki_reference(body.name)
    if link:
        lines.append(f"  Reference   : {link}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='cosmorisk',
        description='NEO collision-risk kernel: MOID, hazard level and deflection preview',
    )
    parser.add_argument('--snapshot', required=True, type=Path,
                        help='JSON or YAML snapshot of tracked bodies')
    parser.add_argument('--body', help='Assess only the body with this id')
    parser.add_argument('--config', type=Path, help='YAML configuration file')
    parser.add_argument('--delta-v', nargs=3, type=float, metavar=('DX', 'DY', 'DZ'),
                        help='Preview a deflection impulse (m/s)')
    parser.add_argument('--unit', choices=['au', 'km', 'ld'],
                        help='Distance display unit (default from config)')
    parser.add_argument('--rank', choices=['distance', 'size', 'hazard', 'name'],
                        help='Print the asteroid list sorted by this key')
    parser.add_argument('--hazardous-only', action='store_true',
                        help='Restrict the ranking to flagged bodies')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        stream=sys.stderr,
    )

    try:
        config = load_config(args.config)
        bodies = load_snapshot(args.snapshot, config)
    except (OSError, ValueError, CosmoRiskError, yaml.YAMLError) as exc:
        logger.error("%s", exc)
        return 2

    unit = args.unit or config.distance_unit
    facade = RiskAssessmentFacade(config)
    earth = next((b for b in bodies if b.id == EARTH_ID), None)

    if args.rank:
        table = facade.rank_bodies(bodies, earth, sort_by=args.rank,
                                   hazardous_only=args.hazardous_only)
        print(table.to_string(index=False))
        return 0

    if args.body:
        targets = [b for b in bodies if b.id == args.body]
        if not targets:
            logger.error("No body with id %r in snapshot", args.body)
            return 2
    else:
        targets = [b for b in bodies if b.kind is BodyKind.ASTEROID]

    for body in targets:
        try:
            result = facade.assess(body, earth)
        except CosmoRiskError as exc:
            logger.error("Cannot assess %s: %s", body.id, exc)
            return 2
        print(format_assessment(result, body, unit))

        if args.delta_v:
            preview = facade.preview_deflection(body, args.delta_v)
            print(f"  Deflection  : {len(preview.deflected)} steps of "
                  f"{preview.dt_days:g} d, max shift "
                  f"{format_distance(preview.max_separation_au, unit)}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
