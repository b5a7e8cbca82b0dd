#!/usr/bin/env python3
"""Build and render a scene from Python instead of a scene file.

The scene is a barrel-shaped solid, made from the intersection of a
sphere and a stretched sphere, with a small dimple subtracted from its
front, next to a mirrored ball.

Usage:
    python examples/build_scene.py [--width W] [--height H] [--output PATH]
"""

from __future__ import annotations

import argparse
import sys
import time

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Render a scene built in Python.")
    parser.add_argument("--width", type=int, default=320, help="Image width (default: 320)")
    parser.add_argument("--height", type=int, default=240, help="Image height (default: 240)")
    parser.add_argument(
        "--output", type=str, default="build_scene.png", help="Output file (default: build_scene.png)"
    )
    return parser.parse_args()


def build_scene(width: int, height: int):
    """Assemble the scene with the Python API."""
    from csgtrace.camera.pinhole import PinholeCamera
    from csgtrace.core.colour import Colour
    from csgtrace.core.transform import AffineTransform
    from csgtrace.geometry.csg import CsgOperation
    from csgtrace.geometry.sphere import Sphere
    from csgtrace.materials.material import Material
    from csgtrace.scene.lights import PointLight
    from csgtrace.scene.scene import Scene, SceneSettings

    scene = Scene(
        SceneSettings(
            ambient_light=Colour(0.2, 0.2, 0.2),
            background_colour=Colour(0.05, 0.05, 0.08),
            max_ray_depth=3,
            render_width=width,
            render_height=height,
        )
    )
    scene.set_camera(PinholeCamera(1.4, AffineTransform().rotated_y(15.0).translated(-1.5, -1.0, -7.0)))
    scene.add_light(PointLight(location=(-3.0, -6.0, -6.0), colour=Colour(70.0, 70.0, 70.0)))

    ivory = Material().with_colour(Colour(0.9, 0.85, 0.75)).with_specular(Colour(1.0, 1.0, 1.0), 50.0)
    pit = Material().with_colour(Colour(0.1, 0.1, 0.1))
    mirror = Material().with_colour(Colour(0.1, 0.1, 0.1)).with_mirror(Colour(0.8, 0.8, 0.8))

    body = scene.add_primitive(Sphere(material=ivory))
    slab = scene.add_primitive(Sphere(AffineTransform().scaled(0.8, 2.0, 0.8), material=ivory))
    rounded = scene.arena.combine(CsgOperation.INTERSECTION, body, slab)
    dimple = scene.add_primitive(
        Sphere(AffineTransform().scaled(0.25).translated(0.0, 0.0, -0.8), material=pit)
    )
    scene.new_csg(CsgOperation.DIFFERENCE, rounded, dimple)

    scene.new_object(Sphere(AffineTransform().scaled(0.8).translated(1.8, 0.2, 1.0), material=mirror))
    return scene


def main() -> int:
    """Main entry point."""
    args = parse_args()
    ti.init(arch=ti.cpu)

    from csgtrace.core.render import render_scene
    from csgtrace.preview.export import save_image

    scene = build_scene(args.width, args.height)

    start_time = time.time()

    def progress_callback(rows_done: int, total_rows: int) -> None:
        print(f"\r  Progress: {rows_done}/{total_rows} rows", end="", flush=True)

    try:
        target = render_scene(scene, callback=progress_callback)
        print()
        save_image(target, args.output)
    except (OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Saved to: {args.output} ({time.time() - start_time:.2f}s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
