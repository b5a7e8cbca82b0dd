"""Command-line entry point: render scene description files.

Usage:
    csgtrace SCENE [SCENE ...] [options]

Options:
    --output OUTPUT     Output file path (default: the scene's filename)
    --window            Show the image in a window while it renders
    --preview           Show the finished image in a Matplotlib figure
    --pause SECONDS     How long to keep the window open afterwards (default: 5)
    --arch {cpu,gpu}    Taichi backend (default: cpu)
    --verbose           Log scene reading and render timing
    --quiet             Suppress progress output

All scene files are read, in order, into one scene; later files can use
materials defined in earlier ones.

Example:
    csgtrace examples/scenes/spheres.txt --output spheres.png
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence
from pathlib import Path

import taichi as ti

from csgtrace.core.render import render_scene
from csgtrace.core.render_target import RenderTarget
from csgtrace.preview.export import save_image
from csgtrace.scene.reader import SceneReadError, read_scene

# Seconds the window stays open after the render finishes
DEFAULT_PAUSE = 5.0


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="csgtrace",
        description="Render scene description files with a Whitted-style ray tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "scenes",
        nargs="+",
        metavar="SCENE",
        help="Scene description file(s), read in order into one scene",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output file path (default: the scene's filename)",
    )
    parser.add_argument(
        "--window",
        action="store_true",
        help="Show the image in a window while it renders",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the finished image in a Matplotlib figure",
    )
    parser.add_argument(
        "--pause",
        type=float,
        default=DEFAULT_PAUSE,
        help=f"Seconds to keep the window open after rendering (default: {DEFAULT_PAUSE:g})",
    )
    parser.add_argument(
        "--arch",
        choices=("cpu", "gpu"),
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log scene reading and render timing",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def init_taichi(arch: str) -> None:
    """Initialize Taichi on the requested backend.

    Taichi falls back to the CPU by itself when no GPU backend is usable.
    """
    ti.init(arch=ti.gpu if arch == "gpu" else ti.cpu)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        scene = read_scene(*args.scenes)
    except (OSError, SceneReadError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not scene.has_camera():
        print("Cannot render a scene with no camera!", file=sys.stderr)
        return 1

    init_taichi(args.arch)

    settings = scene.settings
    width, height = settings.render_width, settings.render_height
    output_file = Path(args.output if args.output is not None else settings.filename)

    if not args.quiet:
        print(f"Rendering a scene with {len(scene.object_indices)} objects ({width}x{height})...")

    target = RenderTarget(width, height)

    window = None
    if args.window:
        # Imported here so headless runs never touch the GUI module
        from csgtrace.preview.interactive import RenderWindow

        if RenderWindow.is_display_available():
            window = RenderWindow(target, title=" ".join(args.scenes))
        elif not args.quiet:
            print("No display available, rendering without a window")

    start_time = time.time()

    def progress_callback(rows_done: int, total_rows: int) -> None:
        if window is not None:
            window.refresh()
        if not args.quiet:
            elapsed = time.time() - start_time
            progress_pct = (rows_done / total_rows) * 100 if total_rows > 0 else 0
            print(
                f"\r  Progress: {rows_done}/{total_rows} rows "
                f"({progress_pct:.1f}%) - {elapsed:.1f}s",
                end="",
                flush=True,
            )

    try:
        render_scene(scene, target, callback=progress_callback)
        if not args.quiet:
            print()  # Newline after progress

        save_image(target, output_file)
    except (OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    if window is not None:
        window.pause(args.pause)

    if args.preview:
        from csgtrace.preview.display import show_preview

        show_preview(target.get_image_numpy(), title=output_file.name)

    return 0


if __name__ == "__main__":
    sys.exit(main())
