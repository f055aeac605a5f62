#!/usr/bin/env python3
"""
Command-line interface for the synthetic rating-graph generator.

Handles:
 1. Argument parsing (graph shape, distribution knobs, output dir, seed)
 2. Loading an optional YAML config and applying CLI overrides on top
 3. Invoking core.generate_graph
 4. Clear exit codes and messages for any failures

Exit codes:
 0  success
 1  configuration error, precondition violation, or unexpected failure
 2  output directory / shard file could not be created
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from synthetic_als.generator.config import load_config, GeneratorConfig
from synthetic_als.generator.core import generate_graph
from synthetic_als.generator.io.writer import OutputError
from synthetic_als.generator.logging_utils import configure_logging


# Module-level logger
logger = logging.getLogger(__name__)

# CLI flag -> GeneratorConfig field
_OVERRIDES = {
    "dir": "out_dir",
    "nfiles": "nfiles",
    "D": "D",
    "nusers": "nusers",
    "nmovies": "nmovies",
    "nvalidation": "nvalidation",
    "noise": "noise",
    "stdev": "stdev",
    "alpha": "alpha",
    "seed": "seed",
    "rating_precision": "rating_precision",
    "on_open_error": "on_open_error",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Creates a folder with synthetic training data"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to YAML config file (flags below override its values)",
    )
    parser.add_argument("--dir", type=Path, help="Location to create the data files")
    parser.add_argument("--nfiles", type=int, help="The number of files to generate")
    parser.add_argument("--D", type=int, help="Number of latent dimensions")
    parser.add_argument("--nusers", type=int, help="The number of users")
    parser.add_argument("--nmovies", type=int, help="The number of movies")
    parser.add_argument("--alpha", type=float, help="The power-law constant")
    parser.add_argument(
        "--nvalidation", type=int, help="The validation ratings per movie"
    )
    parser.add_argument(
        "--noise",
        type=float,
        help="The standard deviation noise parameter (accepted, not applied)",
    )
    parser.add_argument(
        "--stdev", type=float, help="The standard deviation in latent factor values"
    )
    parser.add_argument("--seed", type=int, help="RNG seed for reproducibility")
    parser.add_argument(
        "--rating-precision",
        dest="rating_precision",
        type=int,
        help="Significant digits written per rating",
    )
    parser.add_argument(
        "--on-open-error",
        dest="on_open_error",
        choices=["raise", "log"],
        help="Abort (raise) or log and discard (log) when a shard cannot be created",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set logging level",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        type=Path,
        default=None,
        help="Also write log records to this file",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> GeneratorConfig:
    """
    Merge defaults, the optional YAML file and CLI flags (in that order).

    Raises
    ------
    FileNotFoundError
        If --config points to a missing file.
    ValueError
        If the merged settings fail validation.
    """
    base: dict = {}
    if args.config is not None:
        base = load_config(args.config).model_dump()

    for flag, fld in _OVERRIDES.items():
        value = getattr(args, flag)
        if value is not None:
            base[fld] = value

    try:
        return GeneratorConfig.model_validate(base)
    except ValidationError as e:
        raise ValueError(f"Invalid generator settings:\n{e}") from e


def main(argv: Optional[Sequence[str]] = None) -> None:
    """
    Entry point for the generator CLI.

    Workflow:
      1. Parse flags and configure logging
      2. Resolve config (defaults < YAML < flags) and validate it
      3. Invoke core.generate_graph(cfg) to write the shards
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(getattr(logging, args.log_level), args.log_file)
    logger.debug("Arguments: %s", args)

    # Load & validate config
    try:
        cfg = resolve_config(args)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Config error: %s", e)
        sys.exit(1)

    logger.info(
        "Resolved settings: dir=%s nfiles=%d D=%d nusers=%d nmovies=%d "
        "nvalidation=%d alpha=%s stdev=%s seed=%d",
        cfg.out_dir,
        cfg.nfiles,
        cfg.D,
        cfg.nusers,
        cfg.nmovies,
        cfg.nvalidation,
        cfg.alpha,
        cfg.stdev,
        cfg.seed,
    )

    try:
        generate_graph(cfg)
    except OutputError as e:
        logger.error("Output error: %s", e)
        sys.exit(2)
    except ValueError as e:
        logger.error("Precondition failed: %s", e)
        sys.exit(1)
    except Exception:
        logger.exception("Generator failed unexpectedly")
        sys.exit(1)


if __name__ == "__main__":
    main()
