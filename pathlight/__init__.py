"""
PathLight - A Python Monte Carlo Path Tracer

Renders scenes of analytic spheres with:
- Lambertian, fuzzy metal and emissive materials
- Thin-lens depth of field
- Tile-parallel sampling with independent random streams per tile
- Gamma-2 tone mapping to 8-bit RGB
"""

__version__ = "0.1.0"
__author__ = "PathLight Team"

from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .shapes import HitRecord, Hittable, Sphere, HittableList
from .materials import Material, ScatterResult, Lambertian, Metal, DiffuseLight
from .config import RenderSettings, CameraSettings, ConfigError
from .camera import Camera
from .renderer import Renderer, ray_color, render_tile, to_ldr
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
from .scenes import SCENES, showcase_scene, lit_ground_scene
