"""
Renderer module - the heart of the path tracer.

Implements:
- The Monte Carlo radiance estimator (`ray_color`)
- Tile-parallel per-pixel sampling with one random stream per tile
- Gamma-2 tone mapping and 8-bit quantization
- PNG (or any Pillow format) output
"""

from __future__ import annotations
import logging
import time
from concurrent.futures import Executor, ThreadPoolExecutor, ProcessPoolExecutor, as_completed
from typing import Callable, Optional, Tuple

import numpy as np

from .vec3 import Color
from .ray import Ray
from .camera import Camera
from .config import RenderSettings
from .shapes import Hittable

logger = logging.getLogger(__name__)

# Secondary rays start slightly off the surface to avoid shadow acne
T_MIN = 0.001

Tile = Tuple[int, int, int, int]


def ray_color(ray: Ray, world: Hittable, depth: int, rng: Optional[np.random.Generator] = None) -> Color:
    """Estimate the radiance arriving along a ray.

    Light sources are only found by chance hits; a miss contributes nothing
    because the model has no environment light. Bounces are followed in a
    loop carrying the running attenuation, so the bounce budget is not
    limited by the interpreter stack.

    Args:
        ray: The ray to trace
        world: The scene to trace against
        depth: Remaining bounce budget
        rng: Random stream of the calling worker

    Returns:
        Linear RGB radiance estimate
    """
    radiance = Color(0, 0, 0)
    throughput = Color(1, 1, 1)

    while depth > 0:
        hit_record = world.hit(ray, T_MIN, float('inf'))
        if hit_record is None:
            break

        material = hit_record.material
        radiance = radiance + throughput * material.emitted()

        scatter_result = material.scatter(ray, hit_record, rng)
        if scatter_result is None:
            break

        throughput = throughput * scatter_result.attenuation
        ray = scatter_result.scattered_ray
        depth -= 1

    return radiance


def render_tile(
    world: Hittable,
    camera: Camera,
    tile: Tile,
    width: int,
    height: int,
    samples: int,
    max_depth: int,
    seed: np.random.SeedSequence
) -> Tuple[Tile, np.ndarray]:
    """Run the full sample loop for every pixel of one tile.

    Module level so that process pools can pickle it. The tile owns its
    generator, built from its own child seed sequence.

    Returns:
        The tile and its averaged linear radiance, shape (y1-y0, x1-x0, 3)
    """
    rng = np.random.default_rng(seed)
    x0, y0, x1, y1 = tile
    tile_image = np.zeros((y1 - y0, x1 - x0, 3), dtype=np.float64)

    # A one-pixel axis would divide by zero below
    s_scale = 1.0 / max(width - 1, 1)
    t_scale = 1.0 / max(height - 1, 1)

    for j in range(y1 - y0):
        row = height - 1 - (y0 + j)  # image rows run top-down, t runs bottom-up
        for i in range(x1 - x0):
            pixel_color = np.zeros(3, dtype=np.float64)

            for _ in range(samples):
                du, dv = rng.random(2)
                s = (x0 + i + du) * s_scale
                t = (row + dv) * t_scale
                ray = camera.get_ray(s, t, rng)
                pixel_color += ray_color(ray, world, max_depth, rng).to_array()

            tile_image[j, i] = pixel_color / samples

    return tile, tile_image


def to_ldr(hdr_image: np.ndarray) -> np.ndarray:
    """Convert linear radiance to 8-bit display values.

    Gamma 2 (per-channel square root), scaled by 256 and nudged down so that
    exactly 1.0 maps to 255, then clamped and truncated.

    Args:
        hdr_image: Linear radiance array (float)

    Returns:
        uint8 array of the same shape
    """
    corrected = np.sqrt(np.clip(hdr_image, 0, None))
    ldr = np.clip(corrected * 256.0 - 0.001, 0, 255)
    return ldr.astype(np.uint8)


class Renderer:
    """Monte Carlo path tracer driving the per-pixel sample loop."""

    def __init__(self, settings: Optional[RenderSettings] = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, world: Hittable, camera: Camera) -> np.ndarray:
        """Render the scene to an 8-bit RGB buffer.

        Args:
            world: The scene to render (any Hittable)
            camera: The camera to render from

        Returns:
            uint8 array of shape (height, width, 3), top row first
        """
        return to_ldr(self.render_hdr(world, camera))

    def render_hdr(self, world: Hittable, camera: Camera) -> np.ndarray:
        """Render the scene and return averaged linear radiance.

        Args:
            world: The scene to render (any Hittable)
            camera: The camera to render from

        Returns:
            float64 array of shape (height, width, 3), top row first
        """
        settings = self.settings
        settings.validate()

        width, height = settings.resolution
        image = np.zeros((height, width, 3), dtype=np.float64)

        tiles = self._generate_tiles(width, height)
        seeds = np.random.SeedSequence(settings.seed).spawn(len(tiles))
        jobs = [
            (world, camera, tile, width, height,
             settings.samples_per_pixel, settings.max_depth, seed)
            for tile, seed in zip(tiles, seeds)
        ]

        workers = min(settings.num_threads, len(tiles))
        logger.info(
            "Rendering %dx%d, %d spp, max depth %d, %d tiles on %d %s worker(s)",
            width, height, settings.samples_per_pixel, settings.max_depth,
            len(tiles), workers, settings.executor
        )
        start = time.perf_counter()

        if workers > 1:
            with self._make_executor(workers) as executor:
                futures = [executor.submit(render_tile, *job) for job in jobs]
                for done, future in enumerate(as_completed(futures), start=1):
                    self._store_tile(image, *future.result())
                    self._report_progress(done, len(tiles))
        else:
            for done, job in enumerate(jobs, start=1):
                self._store_tile(image, *render_tile(*job))
                self._report_progress(done, len(tiles))

        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        return image

    def _make_executor(self, workers: int) -> Executor:
        if self.settings.executor == 'process':
            return ProcessPoolExecutor(max_workers=workers)
        return ThreadPoolExecutor(max_workers=workers)

    @staticmethod
    def _store_tile(image: np.ndarray, tile: Tile, tile_image: np.ndarray) -> None:
        x0, y0, x1, y1 = tile
        image[y0:y1, x0:x1] = tile_image

    def _report_progress(self, done: int, total: int) -> None:
        logger.debug("Tile %d/%d done", done, total)
        if self._progress_callback:
            self._progress_callback(done / total)

    def _generate_tiles(self, width: int, height: int) -> list[Tile]:
        """Split the image into disjoint tiles.

        Args:
            width: Image width
            height: Image height

        Returns:
            List of tiles as (x0, y0, x1, y1) tuples, row-major
        """
        tile_size = self.settings.tile_size
        tiles = []

        for y in range(0, height, tile_size):
            for x in range(0, width, tile_size):
                x1 = min(x + tile_size, width)
                y1 = min(y + tile_size, height)
                tiles.append((x, y, x1, y1))

        return tiles

    def save_image(self, image: np.ndarray, filename: str) -> None:
        """Save image to file.

        Args:
            image: uint8 buffer, or float radiance which is tone mapped first
            filename: Output filename (extension determines format)
        """
        from PIL import Image as PILImage

        if image.dtype != np.uint8:
            image = to_ldr(image)

        PILImage.fromarray(image).save(filename)
        logger.info("Saved %dx%d image to %s", image.shape[1], image.shape[0], filename)
