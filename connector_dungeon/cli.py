"""
Command-line entry point.

Usage:
    connector-dungeon generate --seed 42 --format dot
    connector-dungeon plan --points 16 --seed 7
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import Optional, Sequence

from .generators.layout.connector_walk import MAX_SEED, generate_connector_dungeon
from .generators.layout.room_graph import plan_room_graph, scatter_room_points
from .generators.primitives.catalog import CatalogError, DEFAULT_CATALOG, load_catalog
from .pipeline.debug.graph_export import (
    export_layout_dot, export_layout_json, export_room_graph_dot, export_room_graph_json,
)
from .pipeline.settings import GeneratorSettings, SettingsError, load_settings
from .validation.checks.placement_checks import validate_layout
from .validation.core import ValidationError

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="connector-dungeon",
        description="Procedural dungeon generation from connector-based structures",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", parents=[common],
                                     help="Grow a dungeon by walking connectors")
    generate.add_argument("--settings", help="JSON settings file")
    generate.add_argument("--catalog", help="JSON structure catalog (default: built-in)")
    generate.add_argument("--seed", type=int, default=None, help="Random seed")
    generate.add_argument("--rooms", type=int, default=None, help="Target room count")
    generate.add_argument("--format", choices=["json", "dot"], default="json")
    generate.add_argument("--strict", action="store_true",
                          help="Fail if the finished layout does not pass the join audit")

    plan = subparsers.add_parser("plan", parents=[common],
                                 help="Plan a room graph (Delaunay + spanning tree)")
    plan.add_argument("--settings", help="JSON settings file")
    plan.add_argument("--points", type=int, default=None, help="Number of room centres")
    plan.add_argument("--seed", type=int, default=None, help="Random seed")
    plan.add_argument("--format", choices=["json", "dot"], default="json")
    return parser


def _load_settings(path: Optional[str]) -> GeneratorSettings:
    if not path:
        return GeneratorSettings()
    settings = load_settings(path)
    if settings is None:
        raise SettingsError(f"Could not load settings from {path}")
    return settings


def _run_generate(args: argparse.Namespace) -> int:
    settings = _load_settings(args.settings)
    if args.seed is not None:
        settings.seed = args.seed
    if args.rooms is not None:
        settings.room_count = args.rooms

    catalog = DEFAULT_CATALOG
    if args.catalog:
        catalog = load_catalog(args.catalog)
        if catalog is None:
            raise CatalogError(f"Could not load catalog from {args.catalog}")

    result = generate_connector_dungeon(catalog=catalog, settings=settings)

    audit = validate_layout(result.layout)
    if args.strict:
        audit.raise_if_failed()
    elif audit.failed:
        logger.warning(audit.report())

    if args.format == "dot":
        print(export_layout_dot(result.layout))
    else:
        print(export_layout_json(result))
    return 0


def _run_plan(args: argparse.Namespace) -> int:
    settings = _load_settings(args.settings)
    if args.points is not None:
        settings.point_count = args.points
    if args.seed is not None:
        settings.seed = args.seed
    settings.validate()
    if settings.seed is None:
        settings.seed = random.SystemRandom().randint(0, MAX_SEED)

    rng = random.Random(settings.seed)
    points = scatter_room_points(settings.point_count, settings.area_width,
                                 settings.area_depth, rng)
    graph = plan_room_graph(points)

    if args.format == "dot":
        print(export_room_graph_dot(graph))
    else:
        print(export_room_graph_json(graph, seed=settings.seed))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.command == "generate":
            return _run_generate(args)
        return _run_plan(args)
    except (SettingsError, CatalogError) as exc:
        logger.error("%s", exc)
        return 2
    except ValidationError as exc:
        logger.error("Layout audit failed:\n%s", exc.result.report())
        return 1


if __name__ == "__main__":
    sys.exit(main())
