"""
Materials: how surfaces scatter and emit light.

Implements:
- Lambertian diffuse
- Metal (specular reflection perturbed by fuzz)
- DiffuseLight (pure emitter)

Materials are immutable once built, so one instance can be shared by any
number of shapes and read concurrently by every render worker.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

import numpy as np

from .vec3 import Color
from .ray import Ray

if TYPE_CHECKING:
    from .shapes import HitRecord


# Below this squared length a diffuse direction counts as degenerate
NEAR_ZERO_SQUARED = 1e-8

BLACK = Color(0.0, 0.0, 0.0)


@dataclass
class ScatterResult:
    """Result of a material scatter operation."""
    attenuation: Color
    scattered_ray: Ray


class Material(ABC):
    """Abstract base class for materials."""

    @abstractmethod
    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: Optional[np.random.Generator] = None
    ) -> Optional[ScatterResult]:
        """Compute the scattered ray and attenuation.

        Args:
            ray_in: The incoming ray
            rec: Hit record at the surface; its normal opposes ray_in
            rng: Random stream of the calling worker

        Returns:
            ScatterResult if the ray continues, None if transport stops here
        """

    def emitted(self) -> Color:
        """Return emitted radiance. Default is no emission."""
        return BLACK


class Lambertian(Material):
    """Diffuse material with Lambertian (ideal matte) scattering."""

    def __init__(self, albedo: Color):
        """Create a Lambertian material.

        Args:
            albedo: Fractional reflectance per channel, each in [0, 1]
        """
        self.albedo = albedo

    def scatter(self, ray_in, rec, rng=None):
        scatter_direction = rec.normal + Color.random_unit_vector(rng)

        # Catch degenerate scatter direction
        if scatter_direction.length_squared() < NEAR_ZERO_SQUARED:
            scatter_direction = rec.normal

        return ScatterResult(
            attenuation=self.albedo,
            scattered_ray=Ray(rec.point, scatter_direction)
        )

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo})"


class Metal(Material):
    """Metallic material with fuzzy specular reflection."""

    def __init__(self, albedo: Color, fuzz: float = 0.0):
        """Create a metal material.

        Args:
            albedo: The reflection color
            fuzz: Perturbation radius, clamped to [0, 1] (0 = mirror)
        """
        self.albedo = albedo
        self.fuzz = max(0.0, min(float(fuzz), 1.0))

    def scatter(self, ray_in, rec, rng=None):
        reflected = ray_in.direction.normalize().reflect(rec.normal)
        if self.fuzz > 0:
            reflected = reflected + Color.random_in_unit_sphere(rng) * self.fuzz

        # Fuzzed below the surface: absorbed
        if reflected.dot(rec.normal) <= 0:
            return None

        return ScatterResult(
            attenuation=self.albedo,
            scattered_ray=Ray(rec.point, reflected)
        )

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo}, fuzz={self.fuzz})"


class DiffuseLight(Material):
    """Light-emitting material. Never scatters."""

    def __init__(self, emit: Color):
        """Create an emitter.

        Args:
            emit: Emitted radiance; channels may exceed 1
        """
        self.emit = emit

    def scatter(self, ray_in, rec, rng=None):
        return None

    def emitted(self) -> Color:
        return self.emit

    def __repr__(self) -> str:
        return f"DiffuseLight(emit={self.emit})"
