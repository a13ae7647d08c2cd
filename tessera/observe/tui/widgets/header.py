"""Header widget for Tessera TUI.

Shows run state: step, seed, catalog size, output size and status.
"""

from __future__ import annotations

from textual.widgets import Static
from textual.reactive import reactive


class WaveHeader(Static):
    """Header widget showing wave state."""

    step: reactive[int] = reactive(0)
    seed: reactive[int] = reactive(0)
    patterns: reactive[int] = reactive(0)
    dimensions: reactive[str] = reactive("0x0")
    decided: reactive[str] = reactive("0/0")
    status: reactive[str] = reactive("IDLE")

    def render(self) -> str:
        """Render the header."""
        parts = [
            "Tessera",
            f"Step: {self.step}",
            f"Seed: {self.seed}",
            f"Patterns: {self.patterns}",
            f"Output: {self.dimensions}",
            f"Decided: {self.decided}",
            f"[{self.status}]",
        ]
        return " | ".join(parts)

    def update_state(
        self,
        step: int | None = None,
        seed: int | None = None,
        patterns: int | None = None,
        dimensions: tuple[int, int] | None = None,
        decided: tuple[int, int] | None = None,
        status: str | None = None,
    ) -> None:
        """Update header state.

        Args:
            step: Steps taken so far
            seed: Seed of the wave on screen
            patterns: Catalog size
            dimensions: (width, height) of the output
            decided: (decided_cells, total_cells)
            status: Status string
        """
        if step is not None:
            self.step = step
        if seed is not None:
            self.seed = seed
        if patterns is not None:
            self.patterns = patterns
        if dimensions is not None:
            self.dimensions = f"{dimensions[0]}x{dimensions[1]}"
        if decided is not None:
            self.decided = f"{decided[0]}/{decided[1]}"
        if status is not None:
            self.status = status
