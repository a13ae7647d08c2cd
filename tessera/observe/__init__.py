"""Observer module for Tessera.

Rendering of waves and samples, and the terminal viewer and editor built
on it.
"""

from .render import render_cell, render_tile, render_wave, render_values, render_pattern

__all__ = ["render_cell", "render_tile", "render_wave", "render_values", "render_pattern"]
