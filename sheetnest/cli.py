#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SheetNest - command line

Usage:
    sheetnest nest part.dxf --thickness 2.0          # Ranked layouts
    sheetnest nest part.dxf -t 4 --json              # JSON output
    sheetnest nest part.dxf -t 2 --export-dir out/   # One DXF per layout
    sheetnest materials                              # Material catalogue
"""

import sys
import json
import argparse
import logging
from pathlib import Path

from sheetnest.config import settings
from sheetnest.core.dxf.reader import DrawingReader
from sheetnest.core.events import EventBus, setup_event_logging
from sheetnest.core.exceptions import SheetNestError
from sheetnest.nesting import NestingParams, calculate_nesting
from sheetnest.nesting.dxf_export import export_layouts

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else getattr(logging, settings.LOG_LEVEL, logging.INFO)
    logging.basicConfig(level=level, format=settings.LOG_FORMAT)


def print_results(results, stream=None):
    stream = stream or sys.stdout
    if not results:
        print("No layout found - check that the drawing contains closed contours "
              "that fit the stock sheet.", file=stream)
        return

    print(f"{'#':<3} {'Strategy':<14} {'Sheet [mm]':<14} {'Parts':>6} "
          f"{'Omitted':>8} {'Efficiency':>11} {'Area [m²]':>10} {'Cost':>9}", file=stream)
    print("-" * 82, file=stream)
    for i, r in enumerate(results, 1):
        size = f"{r.sheet_width:.0f}x{r.sheet_height:.0f}"
        print(f"{i:<3} {r.strategy:<14} {size:<14} {r.placed_count:>6} "
              f"{r.unplaced_count:>8} {r.efficiency:>10.1f}% {r.sheet_area_m2:>10.3f} "
              f"{r.metal_cost:>9.2f}", file=stream)


def cmd_nest(args) -> int:
    path = Path(args.drawing)
    if not path.exists():
        logger.error(f"File not found: {path}")
        return 2

    if args.material:
        thicknesses = settings.get_material_thicknesses(args.material)
        if not thicknesses:
            logger.error(f"Unknown material: {args.material}")
            return 2
        if args.thickness not in thicknesses:
            logger.warning(f"{args.thickness}mm is not a stock thickness for {args.material}: "
                           f"{', '.join(str(t) for t in thicknesses)}")

    params = NestingParams(
        spacing=args.spacing if args.spacing is not None else settings.MIN_SPACING_MM,
        cost_per_m2=args.cost_per_m2 if args.cost_per_m2 is not None else settings.METAL_COST_PER_M2,
    )

    observer = EventBus()
    if args.verbose:
        setup_event_logging(observer)

    reader = DrawingReader(
        filter_layers=args.skip_annotation_layers,
        extra_ignored_layers=args.ignore_layer
    )
    text = path.read_text(encoding="utf-8", errors="replace")

    try:
        results = calculate_nesting(text, args.thickness, params=params,
                                    observer=observer, reader=reader)
    except SheetNestError as e:
        logger.error(str(e))
        return 1

    if args.json:
        print(json.dumps([r.to_dict() for r in results], indent=2))
    else:
        print_results(results)

    if args.export_dir and results:
        out_dir = Path(args.export_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        try:
            files = export_layouts(results, str(out_dir / f"{path.stem}_nest.dxf"))
        except SheetNestError as e:
            logger.error(str(e))
            return 1
        for f in files:
            print(f"Saved: {f}")

    return 0


def cmd_materials(args) -> int:
    for key, info in settings.MATERIALS.items():
        thicknesses = ", ".join(f"{t:g}" for t in info["thicknesses"])
        print(f"{key:<10} {info['name']:<18} {thicknesses}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sheetnest",
        description="Sheet-metal nesting of DXF drawings"
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    sub = parser.add_subparsers(dest='command')

    nest = sub.add_parser('nest', help='Nest the parts of a DXF drawing')
    nest.add_argument('drawing', type=str, help='DXF file')
    nest.add_argument('-t', '--thickness', type=float, required=True,
                      help='Material thickness [mm]')
    nest.add_argument('-m', '--material', type=str, default=None,
                      help='Material key (steel, stainless, aluminum, copper)')
    nest.add_argument('--spacing', type=float, default=None,
                      help=f'Part spacing [mm] (default {settings.MIN_SPACING_MM:g})')
    nest.add_argument('--cost-per-m2', type=float, default=None,
                      help=f'Metal cost per m² (default {settings.METAL_COST_PER_M2:g})')
    nest.add_argument('--skip-annotation-layers', action='store_true',
                      help='Skip dimension/text/frame layers (DIM, TEXT, FRAME, ...)')
    nest.add_argument('--ignore-layer', action='append', default=[], metavar='LAYER',
                      help='Skip this layer (repeatable)')
    nest.add_argument('--json', action='store_true', help='Print results as JSON')
    nest.add_argument('--export-dir', type=str, default=None,
                      help='Write one DXF per layout into this folder')
    nest.set_defaults(func=cmd_nest)

    materials = sub.add_parser('materials', help='List the material catalogue')
    materials.set_defaults(func=cmd_materials)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, 'func', None):
        parser.print_help()
        return 2

    setup_logging(args.verbose)

    try:
        settings.validate_config()
    except SheetNestError as e:
        logger.error(str(e))
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
