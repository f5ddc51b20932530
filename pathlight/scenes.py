"""
Built-in demo scenes.

Each builder returns the world and a CameraSettings record; the caller picks
the aspect ratio and aperture it wants before building the Camera.
"""

from __future__ import annotations
from typing import Callable, Dict, Tuple

from .vec3 import Vec3, Point3, Color
from .shapes import Sphere, HittableList
from .materials import Lambertian, Metal, DiffuseLight
from .config import CameraSettings

SceneBuilder = Callable[[], Tuple[HittableList, CameraSettings]]


def showcase_scene() -> Tuple[HittableList, CameraSettings]:
    """Matte, polished and brushed spheres lit by one glowing sphere."""
    material_ground = Lambertian(Color(0.8, 0.8, 0.8))
    material_center = Lambertian(Color(0.1, 0.2, 0.5))
    material_left = Metal(Color(0.8, 0.8, 0.8), 0.3)
    material_right = Metal(Color(0.8, 0.6, 0.2), 1.0)
    material_light = DiffuseLight(Color(10.0, 10.0, 10.0))

    world = HittableList()
    world.add(Sphere(Point3(0, -1000, 0), 1000, material_ground))
    world.add(Sphere(Point3(0, 2, 0), 2, material_center))
    world.add(Sphere(Point3(-2, 2, 0), 2, material_left))
    world.add(Sphere(Point3(2, 2, 0), 2, material_right))
    world.add(Sphere(Point3(0, 7, 0), 2, material_light))

    camera = CameraSettings(
        look_from=Point3(26, 20, 10),
        look_at=Point3(0, 2, 0),
        vup=Vec3(0, 1, 0),
        vfov=20.0,
        aperture=0.1
    )
    return world, camera


def lit_ground_scene() -> Tuple[HittableList, CameraSettings]:
    """A diffuse ground plane with a single emitter hovering above it."""
    world = HittableList()
    world.add(Sphere(Point3(0, -1000, 0), 1000, Lambertian(Color(0.5, 0.5, 0.5))))
    world.add(Sphere(Point3(0, 2, 0), 1, DiffuseLight(Color(4.0, 4.0, 4.0))))

    camera = CameraSettings(
        look_from=Point3(0, 2, 8),
        look_at=Point3(0, 1.5, 0),
        vup=Vec3(0, 1, 0),
        vfov=40.0
    )
    return world, camera


SCENES: Dict[str, SceneBuilder] = {
    'showcase': showcase_scene,
    'lit-ground': lit_ground_scene,
}
