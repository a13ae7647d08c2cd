"""
Synthesis driver.

The wave itself never retries: a contradiction is just a cell state. This
module is the caller that cares. It runs a wave to completion, reports
progress, and if the result has contradictions it starts over with a new
seed derived from the original one, so a whole run stays reproducible.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Generic

from ..core.grid import Grid
from ..core.tile_map import TileMap
from ..core.types import TileValue
from ..logging_config import log_synthesis
from .wfc import PatternCatalog, Wave, build_catalog

logger = logging.getLogger(__name__)

# Keep derived seeds inside the unsigned 64-bit range
SEED_MASK = (1 << 64) - 1
SEED_STRIDE = 0x9E3779B97F4A7C15


def derive_seed(seed: int, attempt: int) -> int:
    """
    Seed for a retry.

    Attempt 0 is the seed itself; later attempts step through the 64-bit
    range so nearby seeds don't produce nearby retry sequences.
    """
    return (seed + attempt * SEED_STRIDE) & SEED_MASK


@dataclass
class SynthesisResult(Generic[TileValue]):
    """Outcome of a synthesis run."""
    wave: Wave[TileValue]
    attempts: int
    seed: int  # Seed of the wave that was kept

    @property
    def success(self) -> bool:
        """True if the kept wave finished without contradictions."""
        return self.wave.is_complete() and not self.wave.has_contradiction()

    @property
    def output(self) -> Grid[TileValue | None]:
        return self.wave.output_grid()


def run_wave(
    wave: Wave[TileValue],
    progress_callback: Callable[[int, int], None] | None = None,
) -> int:
    """
    Step a wave to completion, reporting progress.

    Args:
        wave: The wave to run
        progress_callback: Optional callback(decided_cells, total_cells)

    Returns:
        Number of steps taken
    """
    if progress_callback is None:
        return wave.collapse_full()

    total = wave.width * wave.height
    decided = wave.decided_count()
    steps = 0
    while wave.step() is not None:
        steps += 1
        decided += 1
        progress_callback(decided, total)
    return steps


def synthesize(
    sample: Grid[TileValue] | PatternCatalog[TileValue],
    radius: int,
    width: int,
    height: int,
    seed: int,
    max_retries: int = 0,
    progress_callback: Callable[[int, int], None] | None = None,
) -> SynthesisResult[TileValue]:
    """
    Generate an output grid from a sample, retrying on contradictions.

    Args:
        sample: Sample grid to learn from, or a catalog already built from one
        radius: Pattern radius (ignored when a catalog is passed)
        width: Output width in cells
        height: Output height in cells
        seed: Seed for the first attempt
        max_retries: Extra attempts allowed after a contradiction
        progress_callback: Optional callback(decided_cells, total_cells)

    Returns:
        The first clean result, or the last attempt if every attempt had
        contradictions. Contradictions never raise.
    """
    if max_retries < 0:
        raise ValueError(f"max_retries must be non-negative, got {max_retries}")

    if isinstance(sample, PatternCatalog):
        catalog = sample
    else:
        catalog = build_catalog(sample, radius)

    result: SynthesisResult[TileValue] | None = None
    for attempt in range(max_retries + 1):
        attempt_seed = derive_seed(seed, attempt)
        started = time.monotonic()

        wave = Wave.from_catalog(catalog, width, height, attempt_seed)
        run_wave(wave, progress_callback)

        result = SynthesisResult(wave=wave, attempts=attempt + 1, seed=attempt_seed)
        duration_ms = int((time.monotonic() - started) * 1000)

        if result.success:
            log_synthesis(logger, attempt + 1, attempt_seed, "OK", duration_ms)
            return result

        log_synthesis(
            logger,
            attempt + 1,
            attempt_seed,
            "CONTRADICTION",
            duration_ms,
            details=f"cells={len(wave.contradictions())}",
        )

    logger.warning(
        f"Synthesis kept contradictions after {max_retries + 1} attempt(s) "
        f"(base seed {seed})"
    )
    return result


def synthesize_tile_map(
    tile_map: TileMap,
    radius: int,
    width: int,
    height: int,
    seed: int,
    max_retries: int = 0,
    progress_callback: Callable[[int, int], None] | None = None,
) -> tuple[TileMap, SynthesisResult[int | None]]:
    """
    Run synthesis on a sample map and wrap the output as a map.

    The output map shares the sample's vocabulary and tileset. Contradicted
    cells come out empty (None).
    """
    result = synthesize(
        tile_map.to_grid(),
        radius,
        width,
        height,
        seed,
        max_retries=max_retries,
        progress_callback=progress_callback,
    )
    output = TileMap.from_grid(result.output, tile_map.tiles, tile_map.tile_set)
    return output, result
