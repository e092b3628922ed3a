#!/usr/bin/env python3
"""Render one of the demo scenes.

This script demonstrates end-to-end rendering with the CPU ray tracer.
It builds a preset scene, applies any command-line overrides to the
preset's camera configuration, renders across worker threads and saves the
frame as PPM or PNG (chosen from the output suffix).

Usage:
    python -m examples.render_three_spheres [options]

Options:
    --scene NAME        Preset scene from the SCENES registry:
                        random_spheres or three_spheres
                        (default: three_spheres)
    --width WIDTH       Image width in pixels (default: 400)
    --samples SAMPLES   Number of samples per pixel (default: preset value)
    --max-depth DEPTH   Maximum ray bounces (default: preset value)
    --threads THREADS   Worker threads, 1 for single-threaded (default: all cores)
    --seed SEED         Seed for reproducible renders (default: random)
    --output OUTPUT     Output file path (default: three_spheres.ppm)
    --quiet             Suppress progress output

Example:
    python -m examples.render_three_spheres --width 200 --samples 20 --output out.png
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading
import time
from pathlib import Path

from cpu_raytracer.scene.presets import SCENES


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a demo scene with the CPU ray tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        type=str,
        choices=sorted(SCENES),
        default="three_spheres",
        help="Preset scene to render (default: three_spheres)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=400,
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=None,
        help="Number of samples per pixel (default: preset value)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum ray bounces (default: preset value)",
    )
    parser.add_argument(
        "--threads",
        type=int,
        default=None,
        help="Worker threads, 1 for single-threaded (default: all cores)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for reproducible renders (default: random)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="three_spheres.ppm",
        help="Output file path, .ppm or .png (default: three_spheres.ppm)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_scene(
    scene_name: str = "three_spheres",
    width: int = 400,
    num_samples: int | None = None,
    max_depth: int | None = None,
    threads: int | None = None,
    seed: int | None = None,
    output_path: str = "three_spheres.ppm",
    quiet: bool = False,
) -> Path:
    """Render a preset scene and save it to file.

    Args:
        scene_name: Key of the preset scene.
        width: Image width in pixels.
        num_samples: Samples per pixel, or None to keep the preset value.
        max_depth: Maximum bounces, or None to keep the preset value.
        threads: Worker thread count, or None for all cores.
        seed: Seed for the render (and the scene layout when it is random).
        output_path: Output file path (.ppm or .png).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    from cpu_raytracer.camera.thin_lens import ThinLensCamera
    from cpu_raytracer.core.scheduler import RenderScheduler
    from cpu_raytracer.preview.export import save_image

    scene, config = SCENES[scene_name](seed)

    config.width = width
    if num_samples is not None:
        config.samples_per_pixel = num_samples
    if max_depth is not None:
        config.max_depth = max_depth
    config.threads = threads
    config.seed = seed

    camera = ThinLensCamera(config)
    scheduler = RenderScheduler(camera)

    if not quiet:
        print(
            f"Rendering {scene_name} ({config.image_width}x{config.image_height}, "
            f"{config.samples_per_pixel} spp, {scheduler.threads} thread(s))...",
            file=sys.stderr,
        )

    start_time = time.time()

    progress_lock = threading.Lock()
    last_pct = -1

    def progress_callback(current: int, target: int) -> None:
        nonlocal last_pct
        if quiet:
            return
        progress_pct = current * 100 // target if target > 0 else 100
        # Workers report concurrently; print each whole percent once, in order
        with progress_lock:
            if progress_pct <= last_pct:
                return
            last_pct = progress_pct
            print(
                f"\r  Scanlines remaining: {target - current} ({progress_pct}%) ",
                end="",
                flush=True,
                file=sys.stderr,
            )

    buffer = scheduler.render(scene, callback=progress_callback)

    if not quiet:
        print(file=sys.stderr)  # Newline after progress

    output_file = save_image(buffer, output_path)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}", file=sys.stderr)
        print(f"Total time: {total_time:.2f}s", file=sys.stderr)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="[%(asctime)s] [%(threadName)s] %(message)s",
    )

    try:
        render_scene(
            scene_name=args.scene,
            width=args.width,
            num_samples=args.samples,
            max_depth=args.max_depth,
            threads=args.threads,
            seed=args.seed,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
