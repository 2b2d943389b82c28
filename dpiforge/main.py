"""Command-line entry point for dpiforge.

This tool takes one or more source images authored at a given density and
writes a rescaled variant for every density of the catalog into sibling
``drawable-<density>`` directories. Files named ``*.9.png`` are treated as
9-patch images and keep a valid stretch border.

Usage example:
    python -m dpiforge.main -d mdpi res/icon.png res/button.9.png
    python -m dpiforge.main -d xhdpi --densities densities.json -w 4 res/*.png
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from .densities import DEFAULT_CATALOG, find_density, load_catalog
from .job import ConversionJob, JobStatus
from .scheduler import convert_batch


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    argv : list[str] | None
        Optional list of arguments for testing. If None, uses sys.argv.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="dpiforge",
        description=(
            "Generate per-density variants of bitmap resources. Each image is "
            "written to drawable-<density>/ next to the source."
        ),
    )
    parser.add_argument("inputs", nargs="+", help="Source image files")
    parser.add_argument(
        "-d",
        "--density",
        required=True,
        help="Density the sources were authored at (e.g. mdpi, xhdpi)",
    )
    parser.add_argument(
        "--densities",
        type=str,
        default=None,
        help='Optional JSON catalog of output densities, e.g. {"mdpi": 1.0, "hdpi": 1.5}',
    )
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        default=None,
        help="Number of images converted in parallel (default: CPU count)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log timings and status changes")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    return parser.parse_args(argv)


def validate_args(ns: argparse.Namespace) -> None:
    """Validate argument values and raise ValueError for invalid inputs."""
    if ns.workers is not None and ns.workers < 1:
        raise ValueError("--workers must be an integer >= 1")
    if ns.densities is not None and not Path(ns.densities).exists():
        raise ValueError(f"Density catalog not found: {ns.densities}")
    for path in ns.inputs:
        if not Path(path).is_file():
            raise ValueError(f"Input file not found: {path}")


def _print_status(job: ConversionJob) -> None:
    if job.is_terminal:
        print(job.describe())


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry function for the CLI.

    Returns
    -------
    int
        0 when every job finished, 1 if any job failed, 2 on bad arguments.
    """
    args = parse_args(argv)

    level = logging.WARNING
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        validate_args(args)
        catalog = load_catalog(args.densities) if args.densities else DEFAULT_CATALOG
        input_density = find_density(args.density, catalog)
    except ValueError as e:
        print(f"Argument error: {e}")
        return 2

    jobs = convert_batch(
        args.inputs,
        input_density,
        catalog=catalog,
        observer=_print_status,
        max_workers=args.workers,
    )

    failed = [j for j in jobs if j.status is JobStatus.ERROR]
    print(f"Converted {len(jobs) - len(failed)}/{len(jobs)} images into {len(catalog)} densities")
    return 1 if failed else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
