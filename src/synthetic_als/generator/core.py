"""
Core generation loop for the synthetic rating graph.

Builds latent factors and the power-law degree table from one seeded stream,
then walks every movie and writes its training and validation ratings into
user-keyed shards.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging
import time

from .assigner import EdgeAssigner
from .config import GeneratorConfig
from .degree import PowerLawDegreeSampler
from .factors import LatentFactorModel
from .io.writer import ShardedWriter
from .random_source import RandomSource

logger = logging.getLogger(__name__)

# Emit a DEBUG progress line every this many movies
_PROGRESS_EVERY = 1000


@dataclass
class GenerationSummary:
    """What one call to `generate_graph` wrote."""

    out_dir: Path
    out_degrees: list[int] = field(default_factory=list)
    training_counts: list[int] = field(default_factory=list)
    validation_counts: list[int] = field(default_factory=list)
    failed_paths: list[Path] = field(default_factory=list)
    discarded_edges: int = 0
    elapsed_s: float = 0.0

    @property
    def training_edges(self) -> int:
        return sum(self.training_counts)

    @property
    def validation_edges(self) -> int:
        return sum(self.validation_counts)


def generate_graph(
    cfg: GeneratorConfig, rng: Optional[RandomSource] = None
) -> GenerationSummary:
    """
    Generate and write the sharded rating graph described by `cfg`.

    Parameters
    ----------
    cfg : GeneratorConfig
        Graph shape, distribution knobs and output settings.
    rng : RandomSource, optional
        Stream to draw from; defaults to a fresh `RandomSource(cfg.seed)`.

    Returns
    -------
    GenerationSummary
        Per-movie out-degrees and per-shard record counts.

    Raises
    ------
    ValueError
        If nusers <= nvalidation. Raised before any file is touched.
    OutputError
        If a directory or shard cannot be created and
        `cfg.on_open_error == "raise"`.
    """
    # ── Init ──────────────────────────────────────────────────────────────────
    if cfg.nusers <= cfg.nvalidation:
        raise ValueError(
            f"nusers ({cfg.nusers}) must be greater than nvalidation ({cfg.nvalidation})"
        )
    if cfg.noise:
        logger.info("noise=%s is accepted but not applied to ratings", cfg.noise)

    rng = rng if rng is not None else RandomSource(cfg.seed)
    start = time.perf_counter()

    model = LatentFactorModel(rng, cfg.nusers, cfg.nmovies, cfg.D, cfg.stdev)
    sampler = PowerLawDegreeSampler(cfg.nusers, cfg.nvalidation, cfg.alpha, rng)
    assigner = EdgeAssigner(cfg.nusers)
    summary = GenerationSummary(out_dir=cfg.out_dir)

    writer = ShardedWriter(
        cfg.out_dir,
        cfg.nfiles,
        precision=cfg.rating_precision,
        on_open_error=cfg.on_open_error,
    )
    # ── Per-movie loop ────────────────────────────────────────────────────────
    with writer:
        for movie_id in range(cfg.nmovies):
            item_id = cfg.nusers + movie_id
            out_degree = sampler.sample_out_degree()
            summary.out_degrees.append(out_degree)

            for _ in range(out_degree):
                user_id = assigner.next_user_id()
                writer.write_training(
                    writer.shard_index(user_id),
                    user_id,
                    item_id,
                    model.rating(user_id, movie_id),
                )
            # a few extra validation ratings
            for _ in range(cfg.nvalidation):
                user_id = assigner.next_user_id()
                writer.write_validation(
                    writer.shard_index(user_id),
                    user_id,
                    item_id,
                    model.rating(user_id, movie_id),
                )

            if (movie_id + 1) % _PROGRESS_EVERY == 0:
                logger.debug("Processed %d/%d movies", movie_id + 1, cfg.nmovies)

    # ── Done ──────────────────────────────────────────────────────────────────
    summary.training_counts = list(writer.training_counts)
    summary.validation_counts = list(writer.validation_counts)
    summary.failed_paths = list(writer.failed_paths)
    summary.discarded_edges = writer.discarded_count
    summary.elapsed_s = time.perf_counter() - start

    total = summary.training_edges + summary.validation_edges
    speed = total / summary.elapsed_s if summary.elapsed_s > 0 else float("inf")
    logger.info(
        "Generation complete: %d training + %d validation ratings in %.2f s (%.0f rows/s)",
        summary.training_edges,
        summary.validation_edges,
        summary.elapsed_s,
        speed,
    )
    if summary.failed_paths:
        logger.warning(
            "%d shard file(s) could not be opened; %d records were discarded: %s",
            len(summary.failed_paths),
            summary.discarded_edges,
            ", ".join(str(p) for p in summary.failed_paths),
        )
    return summary
