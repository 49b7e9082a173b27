# -*- coding: utf-8 -*-
"""
landsurf command line - Batch spectral analysis, filtering and basin statistics.

Usage::

    landsurf spectral dem.tif --bin-width 0.1 --out results/dem
    landsurf filter dem.tif --type lowpass --f-low 0.01 --f-high 0.02 --out smooth.tif
    landsurf basins dem.tif --config run.yaml --out basins.csv

Options given on the command line override values from ``--config``.

Author
------
landsurf contributors

License
-------
MIT License
Copyright (c) 2026 landsurf contributors
See LICENSE file for full text.

Created
-------
2026-10-17

Modified
--------
2026-10-17
"""

# Standard library
import argparse
import csv
import logging
import sys
from pathlib import Path
from typing import List, Optional

# landsurf internal
from landsurf import __version__
from landsurf.basin.basin import Basin
from landsurf.config import RunConfig, load_config
from landsurf.exceptions import InvalidJunctionError, LandsurfError
from landsurf.flow.topology import D8FlowTopology
from landsurf.raster.io import read_grid, write_grid
from landsurf.spectral.processors import SpectralAnalysis, SpectralFilter
from landsurf.vocabulary import FilterType

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False,
                      log_file: Optional[Path] = None) -> None:
    """Send log records to the console and, optionally, to *log_file*."""
    for handler in list(logging.root.handlers):
        logging.root.removeHandler(handler)

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the ``landsurf`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="landsurf",
        description="Spectral and drainage-basin analysis of elevation grids.",
    )
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log debug messages.")
    parser.add_argument("--log-file", type=Path, default=None,
                        help="Also write the log to this file.")
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=Path, default=None,
                        help="YAML run configuration.")
    sub = parser.add_subparsers(dest="command", required=True)

    spectral = sub.add_parser("spectral", parents=[common], help="Power-spectrum report.")
    spectral.add_argument("dem", type=Path, help="Elevation raster.")
    spectral.add_argument("--bin-width", type=float, default=None,
                          help="Radial PSD bin width in log10 frequency.")
    spectral.add_argument("--out", type=Path, required=True,
                          help="Output prefix for the PSD grid and tables.")

    filt = sub.add_parser("filter", parents=[common], help="Frequency-domain filter.")
    filt.add_argument("dem", type=Path, help="Elevation raster.")
    filt.add_argument("--type", dest="filter_type", default=None,
                      choices=[f.value for f in FilterType],
                      help="Filter shape.")
    filt.add_argument("--f-low", type=float, default=None,
                      help="Lower frequency bound.")
    filt.add_argument("--f-high", type=float, default=None,
                      help="Upper frequency bound.")
    filt.add_argument("--out", type=Path, required=True,
                      help="Filtered raster (.tif or .npy).")

    basins = sub.add_parser("basins", parents=[common], help="Per-basin terrain statistics.")
    basins.add_argument("dem", type=Path, help="Elevation raster.")
    basins.add_argument("--out", type=Path, required=True,
                        help="CSV table of basin attributes.")
    return parser


def _override(value, default):
    return default if value is None else value


def run_spectral(args: argparse.Namespace, config: RunConfig) -> None:
    dem = read_grid(args.dem)
    width = _override(args.bin_width, config.spectral.log_bin_width)
    args.out.parent.mkdir(parents=True, exist_ok=True)
    SpectralAnalysis(log_bin_width=width).analyze(dem).write(args.out)


def run_filter(args: argparse.Namespace, config: RunConfig) -> None:
    cfg = config.spectral
    dem = read_grid(args.dem)
    processor = SpectralFilter(
        filter_type=_override(args.filter_type, cfg.filter_type),
        f_low=_override(args.f_low, cfg.f_low),
        f_high=_override(args.f_high, cfg.f_high),
        fit_low=cfg.wiener_fit_low,
        fit_high=cfg.wiener_fit_high,
        noise_threshold=cfg.wiener_noise_threshold,
    )
    logger.info("Running %s v%s", type(processor).__name__,
                processor.__processor_version__)
    write_grid(processor.apply(dem), args.out)


def run_basins(args: argparse.Namespace, config: RunConfig) -> int:
    """Process every configured junction; returns the number written."""
    cfg = config.basin
    if not cfg.junctions:
        logger.warning("No junctions configured; nothing to do")
    dem = read_grid(args.dem)
    topology = D8FlowTopology.from_elevation(dem, cfg.junctions)
    fields = {name: read_grid(path) for name, path in cfg.grids.items()}
    fields.setdefault('elevation', dem)

    rows = []
    for junction in sorted(cfg.junctions):
        try:
            basin = Basin.from_junction(junction, topology)
        except InvalidJunctionError as e:
            logger.warning("Skipping junction %s: %s", junction, e)
            continue
        basin.set_all_parameters(
            log_bin_width=cfg.log_bin_width,
            spline_resolution=cfg.spline_resolution,
            bin_threshold=cfg.bin_threshold,
            critical_slope=cfg.critical_slope,
            **fields,
        )
        rows.append(basin.to_dict())

    args.out.parent.mkdir(parents=True, exist_ok=True)
    with open(args.out, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(rows[0]) if rows else ['junction'])
        writer.writeheader()
        for row in rows:
            writer.writerow({k: '' if v is None else v for k, v in row.items()})
    logger.info("Wrote %d basins to %s", len(rows), args.out)
    return len(rows)


_COMMANDS = {
    "spectral": run_spectral,
    "filter": run_filter,
    "basins": run_basins,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.log_file)
    try:
        config = load_config(args.config)
        _COMMANDS[args.command](args, config)
    except (LandsurfError, FileNotFoundError) as e:
        logger.error("%s failed on %s: %s", args.command, args.dem, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
