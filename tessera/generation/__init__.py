"""Output generation for Tessera."""

from .synthesis import (
    SynthesisResult,
    derive_seed,
    run_wave,
    synthesize,
    synthesize_tile_map,
)

__all__ = [
    "SynthesisResult",
    "derive_seed",
    "run_wave",
    "synthesize",
    "synthesize_tile_map",
]
