"""Tessera - overlapping Wave Function Collapse for tile maps."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from .logging_config import setup_logging
from .settings import ConfigError, GenerationConfig, load_config
from .storage import StorageError, load_tile_map, save_output, save_tile_map


def generate(sample_path: Path, config: GenerationConfig, out: Path | None) -> int:
    """Synthesize an output map from a sample map.

    Args:
        sample_path: Sample map file (.yaml, .yml or .json)
        config: Generation settings
        out: Output file. If None, saves under the data directory.

    Returns:
        Exit code (2 if the output kept contradictions)
    """
    from tqdm import tqdm
    from .generation import synthesize_tile_map

    sample = load_tile_map(sample_path)
    print(f"Sample: {sample.width}x{sample.height}, {len(sample.tiles)} tiles")

    total = config.width * config.height
    pbar = tqdm(total=total, desc="  Collapsing", unit="cells")
    last_progress = [0]

    def update_progress(current: int, total: int) -> None:
        # A retry starts counting from zero again
        if current < last_progress[0]:
            pbar.reset()
            last_progress[0] = 0
        delta = current - last_progress[0]
        if delta > 0:
            pbar.update(delta)
            last_progress[0] = current

    output, result = synthesize_tile_map(
        sample,
        radius=config.radius,
        width=config.width,
        height=config.height,
        seed=config.seed,
        max_retries=config.max_retries,
        progress_callback=update_progress,
    )
    pbar.close()

    out_path = out or config.data_dir / f"output_{result.seed}.yaml"
    save_output(result.wave, sample.tiles, out_path)
    # Outputs are also usable as samples for another round
    map_path = out_path.with_name(f"{out_path.stem}.map{out_path.suffix}")
    save_tile_map(output, map_path)

    print(f"  Attempts: {result.attempts}, seed: {result.seed}")
    print(f"  Output: {out_path}")
    print(f"  Tile map: {map_path}")

    if not result.success:
        contradictions = len(result.wave.contradictions())
        print(f"Warning: {contradictions} contradicted cell(s) left in output")
        return 2
    return 0


def show_patterns(sample_path: Path, radius: int) -> int:
    """Print every pattern of a sample map.

    Returns:
        Exit code
    """
    from rich.console import Console
    from .generation.wfc import build_catalog
    from .observe import render_pattern

    sample = load_tile_map(sample_path)
    catalog = build_catalog(sample.to_grid(), radius)
    console = Console()

    console.print(f"{len(catalog)} pattern(s) of radius {radius}")
    for i, pattern in enumerate(catalog):
        console.print()
        console.print(f"pattern: {i + 1}/{len(catalog)}")
        console.print(render_pattern(pattern, sample.tiles))
    return 0


def run_view(sample_path: Path, config: GenerationConfig) -> int:
    """Run the interactive wave viewer.

    Returns:
        Exit code
    """
    from .observe.tui import run_viewer

    sample = load_tile_map(sample_path)
    asyncio.run(run_viewer(sample, config))
    return 0


def run_edit(sample_path: Path, width: int, height: int) -> int:
    """Run the sample editor, starting a blank map if the file doesn't exist.

    Returns:
        Exit code
    """
    from .core.tiles import TileData
    from .core.tile_map import TileMap
    from .observe.tui import run_editor

    if sample_path.exists():
        sample = load_tile_map(sample_path)
    else:
        print(f"Creating new sample at {sample_path}")
        tiles = [
            TileData(name="grass", symbol=".", color="green"),
            TileData(name="water", symbol="~", color="blue"),
            TileData(name="sand", symbol=":", color="yellow"),
            TileData(name="stone", symbol="#", color="white"),
        ]
        sample = TileMap.new(width, height, tiles, fill=0)

    asyncio.run(run_editor(sample, sample_path))
    return 0


def _add_generation_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("sample", type=Path, help="Sample map (.yaml, .yml or .json)")
    parser.add_argument("--width", type=int, help="Output width in cells")
    parser.add_argument("--height", type=int, help="Output height in cells")
    parser.add_argument("--radius", type=int, help="Pattern radius (window is 2r-1 wide)")
    parser.add_argument("--seed", type=int, help="Seed for collapse choices")
    parser.add_argument("--retries", type=int, metavar="N", help="Retries after a contradiction")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tessera",
        description="Tessera - overlapping Wave Function Collapse for tile maps",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tessera edit sample.yaml                    # Paint a sample map
  tessera patterns sample.yaml --radius 2     # List its patterns
  tessera generate sample.yaml --seed 42      # Synthesize an output
  tessera view sample.yaml --width 24         # Step through it interactively
        """,
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Settings file (default: packaged config/generation.yaml)",
    )
    parser.add_argument(
        "--data",
        type=Path,
        help="Data directory for logs and outputs (default: from settings)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to console",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    gen = commands.add_parser("generate", help="Synthesize an output from a sample")
    _add_generation_args(gen)
    gen.add_argument("--out", type=Path, help="Output file (.yaml, .yml or .json)")

    pat = commands.add_parser("patterns", help="Show the patterns of a sample")
    pat.add_argument("sample", type=Path, help="Sample map (.yaml, .yml or .json)")
    pat.add_argument("--radius", type=int, help="Pattern radius")

    view = commands.add_parser("view", help="Step a wave interactively")
    _add_generation_args(view)

    edit = commands.add_parser("edit", help="Edit a sample map")
    edit.add_argument("sample", type=Path, help="Sample map to edit or create")
    edit.add_argument("--width", type=int, default=8, help="Width of a new map (default: 8)")
    edit.add_argument("--height", type=int, default=8, help="Height of a new map (default: 8)")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for Tessera."""
    # Load environment variables first
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config).with_overrides(
            data_dir=args.data,
            radius=getattr(args, "radius", None),
            width=getattr(args, "width", None) if args.command != "edit" else None,
            height=getattr(args, "height", None) if args.command != "edit" else None,
            seed=getattr(args, "seed", None),
            max_retries=getattr(args, "retries", None),
        )
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    # Setup logging
    console_level = logging.DEBUG if args.debug else logging.WARNING
    log_path = setup_logging(config.data_dir, console_level=console_level)

    from . import __version__
    print(f"Tessera v{__version__}")
    print(f"Log file: {log_path}")
    print()

    try:
        if args.command == "generate":
            return generate(args.sample, config, args.out)
        if args.command == "patterns":
            return show_patterns(args.sample, config.radius)
        if args.command == "view":
            return run_view(args.sample, config)
        return run_edit(args.sample, args.width, args.height)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        return 1
    except (StorageError, ValueError) as e:
        logging.getLogger(__name__).error(f"{args.command} failed: {e}")
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
