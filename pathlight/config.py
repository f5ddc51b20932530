"""
Render and camera configuration records.

Validation lives here rather than in the core: the renderer calls
`validate()` once before a render starts, and nothing inside the sampling
loop raises.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .vec3 import Vec3, Point3

EXECUTORS = ('thread', 'process')


class ConfigError(ValueError):
    """Invalid render or camera configuration."""
    pass


@dataclass
class RenderSettings:
    """Configuration for the sampling driver."""
    image_width: int = 400
    aspect_ratio: float = 16.0 / 9.0
    samples_per_pixel: int = 100
    max_depth: int = 50
    tile_size: int = 16
    num_threads: int = 0  # 0 = auto-detect
    executor: str = 'thread'
    seed: Optional[int] = None

    def __post_init__(self):
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4

    @property
    def image_height(self) -> int:
        return max(1, round(self.image_width / self.aspect_ratio))

    @property
    def resolution(self) -> Tuple[int, int]:
        """(width, height) in pixels."""
        return self.image_width, self.image_height

    def validate(self) -> None:
        """Raise ConfigError if any setting is out of range."""
        if self.image_width <= 0:
            raise ConfigError(f"image_width must be positive, got {self.image_width}")
        if self.aspect_ratio <= 0:
            raise ConfigError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.samples_per_pixel <= 0:
            raise ConfigError(f"samples_per_pixel must be positive, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ConfigError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.tile_size <= 0:
            raise ConfigError(f"tile_size must be positive, got {self.tile_size}")
        if self.num_threads < 0:
            raise ConfigError(f"num_threads must be >= 0, got {self.num_threads}")
        if self.executor not in EXECUTORS:
            raise ConfigError(f"Unknown executor: {self.executor!r} (expected one of {EXECUTORS})")


@dataclass
class CameraSettings:
    """Look-at camera description.

    focus_dist defaults to the distance between look_from and look_at, which
    puts the look-at point in sharp focus.
    """
    look_from: Point3 = field(default_factory=lambda: Point3(0, 0, 0))
    look_at: Point3 = field(default_factory=lambda: Point3(0, 0, -1))
    vup: Vec3 = field(default_factory=lambda: Vec3(0, 1, 0))
    vfov: float = 20.0
    aspect_ratio: float = 16.0 / 9.0
    aperture: float = 0.0
    focus_dist: Optional[float] = None

    def __post_init__(self):
        if self.focus_dist is None:
            self.focus_dist = (self.look_from - self.look_at).length()

    def validate(self) -> None:
        """Raise ConfigError if the camera cannot be built."""
        if not 0 < self.vfov < 180:
            raise ConfigError(f"vfov must be in (0, 180) degrees, got {self.vfov}")
        if self.aspect_ratio <= 0:
            raise ConfigError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.aperture < 0:
            raise ConfigError(f"aperture must be >= 0, got {self.aperture}")
        if self.focus_dist <= 0:
            raise ConfigError(f"focus_dist must be positive, got {self.focus_dist}")
        if (self.look_from - self.look_at).length_squared() == 0:
            raise ConfigError("look_from and look_at must differ")
        view = self.look_from - self.look_at
        if self.vup.cross(view).length_squared() == 0:
            raise ConfigError("vup must not be parallel to the view direction")
