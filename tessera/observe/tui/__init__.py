"""Textual TUI for Tessera."""

from .app import WaveViewerTUI, SampleEditorTUI, run_viewer, run_editor

__all__ = ["WaveViewerTUI", "SampleEditorTUI", "run_viewer", "run_editor"]
