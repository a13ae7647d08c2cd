"""TUI widgets for Tessera."""

from .wave_view import WaveView
from .header import WaveHeader
from .pattern_viewer import PatternViewer
from .sample_editor import SampleEditor

__all__ = ["WaveView", "WaveHeader", "PatternViewer", "SampleEditor"]
