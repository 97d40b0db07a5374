#!/usr/bin/env python3
"""
Command Line Interface

Converts an XYZ point file into stored point groups and optionally shows
them, e.g.::

    pointgroups scans/site.xyz --colour-by height --min-height 0 --max-height 12 --show
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import ColourStrategy, FileConfig, IngestionConfig, LoggingConfig, load_config
from .error_handling import ErrorHandler, PointCloudIngestError
from .geometry.consumers import PolyDataGeometryConsumer
from .geometry.store import PointGroupStore
from .interfaces.collaborators import ProgressReporter
from .models.point_records import IngestionProgress
from .pipeline.ingestor import PointCloudIngestor
from .pipeline.scene_loader import LoadedPointCloud, PointCloudSceneLoader


logger = logging.getLogger("pointgroups")


class LoggingProgressReporter(ProgressReporter):
    """Writes progress notifications to the log."""

    def report(self, progress: IngestionProgress) -> None:
        logger.info(f"{progress.describe()} ({progress.fraction:.0%})")


def parse_colour(value: str) -> tuple:
    """Parse "r,g,b" with components in [0, 1]."""
    try:
        colour = tuple(float(c) for c in value.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid colour '{value}', expected r,g,b") from None
    if len(colour) != 3:
        raise argparse.ArgumentTypeError(f"Invalid colour '{value}', expected r,g,b")
    return colour


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="pointgroups",
        description="Convert an XYZ point file into coloured point groups of bounded size"
    )
    ap.add_argument("file_path", help="Path to point file (x,y,z[,r,g,b[,intensity]] per line)")
    ap.add_argument("--config", type=str, default=None, help="JSON file with ingestion options")
    ap.add_argument("--scale", type=float, default=None, help="Multiply all coordinates by this factor")
    ap.add_argument("--invert-yz", action="store_true", default=None, help="Swap the Y and Z axes")
    ap.add_argument("--relocate", action="store_true", default=None,
                    help="Move the minimum corner of the cloud to the origin")
    ap.add_argument("--colour-by", choices=[s.value for s in ColourStrategy], default=None,
                    help="Colour points by: default, rgb, height or intensity")
    ap.add_argument("--default-colour", type=parse_colour, default=None,
                    help="Flat colour as r,g,b in [0, 1]")
    ap.add_argument("--min-height", type=float, default=None)
    ap.add_argument("--max-height", type=float, default=None)
    ap.add_argument("--min-intensity", type=float, default=None)
    ap.add_argument("--max-intensity", type=float, default=None)
    ap.add_argument("--gradient", type=str, default=None, help="matplotlib colormap name for gradients")
    ap.add_argument("--batch-capacity", type=int, default=None, help="Maximum points per point group")
    ap.add_argument("--skip-malformed", action="store_true", help="Skip malformed lines instead of aborting")
    ap.add_argument("--store", type=str, default=FileConfig.DEFAULT_STORE_DIR,
                    help="Directory for stored point groups")
    ap.add_argument("--no-store", action="store_true", help="Do not read or write stored point groups")
    ap.add_argument("--force-reload", action="store_true", default=None,
                    help="Ignore stored point groups and ingest again")
    ap.add_argument("--show", action="store_true", help="Show the point groups in a PyVista window")
    ap.add_argument("--point-size", type=float, default=2.0, help="Point size for rendering")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log debug messages")
    return ap


def config_from_args(args: argparse.Namespace) -> IngestionConfig:
    """Merge command line options over the optional JSON configuration."""
    overrides = {
        'scale': args.scale,
        'invert_yz': args.invert_yz,
        'relocate_to_origin': args.relocate,
        'colour_points_by': args.colour_by,
        'default_colour': args.default_colour,
        'min_height': args.min_height,
        'max_height': args.max_height,
        'min_intensity': args.min_intensity,
        'max_intensity': args.max_intensity,
        'gradient': args.gradient,
        'batch_capacity': args.batch_capacity,
        'force_reload': args.force_reload,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if args.skip_malformed:
        overrides['on_malformed'] = "skip"

    if args.config:
        return load_config(args.config, **overrides)
    return IngestionConfig.from_dict(overrides)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else LoggingConfig.DEFAULT_LEVEL,
        format=LoggingConfig.LOG_FORMAT,
        datefmt=LoggingConfig.DATE_FORMAT,
    )


def run(args: argparse.Namespace) -> LoadedPointCloud:
    """Ingest or load the point cloud described by the parsed arguments."""
    config = config_from_args(args)
    progress = LoggingProgressReporter()

    if args.no_store:
        consumer = PolyDataGeometryConsumer()
        result = PointCloudIngestor(config, consumer, progress=progress).ingest(args.file_path)
        return LoadedPointCloud(name=consumer.dataset_name, groups=consumer.groups,
                                from_store=False, result=result)

    loader = PointCloudSceneLoader(config, PointGroupStore(args.store), progress=progress)
    return loader.load(args.file_path)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    error_handler = ErrorHandler("pointgroups")

    try:
        cloud = run(args)
    except KeyboardInterrupt:
        logger.warning("Ingestion interrupted by user")
        return 130
    except PointCloudIngestError as e:
        error_handler.log_error(e, "ingestion")
        return 1

    if cloud.result is not None:
        logger.info(f"Ingestion summary: {cloud.result.get_summary()}")
        if not cloud.result.completed:
            return 130

    logger.info(f"{cloud.name}: {len(cloud.groups)} point groups, {cloud.num_points:,} points"
                f"{' (stored)' if cloud.from_store else ''}")

    if args.show:
        from .vtk_utils import show_point_groups
        show_point_groups(cloud.groups, title=f"Point Cloud: {cloud.name}", point_size=args.point_size)

    return 0


if __name__ == "__main__":
    sys.exit(main())
