"""
Camera module for generating primary rays.

Supports:
- Perspective projection with configurable vertical field of view
- Arbitrary positioning via look-at
- Depth of field (thin-lens defocus blur)
"""

from __future__ import annotations
import math
from typing import Optional

import numpy as np

from .vec3 import Vec3, Point3
from .ray import Ray
from .config import CameraSettings


class Camera:
    """A thin-lens perspective camera.

    The viewport is placed at the focus distance, so every ray through a
    given (s, t) converges on the same point of the focal plane no matter
    where on the lens it starts.
    """

    def __init__(
        self,
        look_from: Point3,
        look_at: Point3,
        vup: Vec3 = Vec3(0, 1, 0),
        vfov: float = 90.0,
        aspect_ratio: float = 16.0 / 9.0,
        aperture: float = 0.0,
        focus_dist: float = 1.0
    ):
        """Create a camera.

        Args:
            look_from: Camera position in world space
            look_at: Point the camera is looking at
            vup: World up vector (usually (0, 1, 0))
            vfov: Vertical field of view in degrees
            aspect_ratio: Width / Height ratio
            aperture: Lens diameter (0 = pinhole)
            focus_dist: Distance to the plane of perfect focus
        """
        theta = math.radians(vfov)
        h = math.tan(theta / 2)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        # Right-handed orthonormal basis; w points backward from the camera
        self.w = (look_from - look_at).normalize()
        self.u = vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        self.origin = look_from
        self.horizontal = self.u * (viewport_width * focus_dist)
        self.vertical = self.v * (viewport_height * focus_dist)
        self.lower_left_corner = (
            self.origin
            - self.horizontal / 2
            - self.vertical / 2
            - self.w * focus_dist
        )

        self.lens_radius = aperture / 2

    @classmethod
    def from_settings(cls, settings: CameraSettings) -> Camera:
        """Build a camera from a validated CameraSettings record."""
        settings.validate()
        return cls(
            look_from=settings.look_from,
            look_at=settings.look_at,
            vup=settings.vup,
            vfov=settings.vfov,
            aspect_ratio=settings.aspect_ratio,
            aperture=settings.aperture,
            focus_dist=settings.focus_dist
        )

    def get_ray(self, s: float, t: float, rng: Optional[np.random.Generator] = None) -> Ray:
        """Generate a ray through viewport coordinates (s, t).

        Args:
            s: Horizontal coordinate, nominally [0, 1] (0 = left)
            t: Vertical coordinate, nominally [0, 1] (0 = bottom)
            rng: Random stream used for lens sampling

        Returns:
            A ray from a point on the lens through the focal plane target
        """
        if self.lens_radius > 0:
            rd = Vec3.random_in_unit_disk(rng) * self.lens_radius
            offset = self.u * rd.x + self.v * rd.y
        else:
            offset = Vec3(0, 0, 0)

        direction = (
            self.lower_left_corner
            + self.horizontal * s
            + self.vertical * t
            - self.origin
            - offset
        )
        return Ray(self.origin + offset, direction)

    def __repr__(self) -> str:
        return f"Camera(origin={self.origin}, lens_radius={self.lens_radius})"
