#!/usr/bin/env python3
"""
PathLight - A Python Monte Carlo Path Tracer

Main entry point for rendering scenes.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from pathlight.camera import Camera
from pathlight.config import ConfigError, RenderSettings
from pathlight.renderer import Renderer
from pathlight.scene_parser import SceneParseError, load_scene
from pathlight.scenes import SCENES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='PathLight - A Python Monte Carlo Path Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene showcase --output render.png
  python main.py --width 800 --samples 1000 --executor process --output hq.png
  python main.py --scene-file scenes/room.yaml --seed 7
        '''
    )

    parser.add_argument('--scene', type=str, default='showcase', choices=sorted(SCENES),
                        help='Built-in scene to render (default: showcase)')
    parser.add_argument('--scene-file', type=str, default=None,
                        help='YAML or JSON scene description (overrides --scene)')
    parser.add_argument('--width', type=int, default=400, help='Image width (default: 400)')
    parser.add_argument('--samples', type=int, default=100, help='Samples per pixel (default: 100)')
    parser.add_argument('--depth', type=int, default=50, help='Max bounce depth (default: 50)')
    parser.add_argument('--aperture', type=float, default=None,
                        help='Lens aperture override for built-in scenes')
    parser.add_argument('--threads', type=int, default=0, help='Number of workers (0=auto)')
    parser.add_argument('--tile-size', type=int, default=16, help='Tile edge in pixels (default: 16)')
    parser.add_argument('--executor', type=str, default='thread', choices=['thread', 'process'],
                        help='Worker pool kind (default: thread)')
    parser.add_argument('--seed', type=int, default=None, help='Seed for reproducible renders')
    parser.add_argument('--output', type=str, default='output/render.png', help='Output filename')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    return parser


def setup_scene(args):
    """Resolve world, camera and settings from the command line."""
    if args.scene_file:
        return load_scene(args.scene_file)

    settings = RenderSettings(
        image_width=args.width,
        samples_per_pixel=args.samples,
        max_depth=args.depth,
        tile_size=args.tile_size,
        num_threads=args.threads,
        executor=args.executor,
        seed=args.seed
    )
    settings.validate()

    world, camera_settings = SCENES[args.scene]()
    camera_settings.aspect_ratio = settings.aspect_ratio
    if args.aperture is not None:
        camera_settings.aperture = args.aperture

    return world, Camera.from_settings(camera_settings), settings


def main():
    """Main entry point."""
    args = build_parser().parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s'
    )

    try:
        world, camera, settings = setup_scene(args)
    except (ConfigError, SceneParseError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    # Print header
    print("=" * 60)
    print("PathLight Path Tracer")
    print("=" * 60)

    width, height = settings.resolution
    print(f"\nRender Settings:")
    print(f"  Resolution: {width}x{height}")
    print(f"  Samples: {settings.samples_per_pixel}")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Workers: {settings.num_threads} ({settings.executor})")
    print(f"  Objects in scene: {len(world)}")

    renderer = Renderer(settings)

    # Progress tracking
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    print("\nRendering...")
    start_time = time.time()

    image = renderer.render(world, camera)

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    print(f"  Samples per second: {(width * height * settings.samples_per_pixel) / max(elapsed, 1e-9):.0f}")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"\nSaving to: {args.output}")
    renderer.save_image(image, str(output_path))

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
