"""
Scene description parser.

Reads YAML or JSON scene files with:
- Render settings
- Camera configuration
- Named materials library
- Spheres referencing materials by name or inline

Example scene file:
```yaml
render:
  width: 400
  aspect_ratio: 1.7778
  samples: 100
  max_depth: 50

camera:
  look_from: [26, 20, 10]
  look_at: [0, 2, 0]
  vfov: 20
  aperture: 0.1

materials:
  ground:
    type: lambertian
    albedo: [0.8, 0.8, 0.8]
  lamp:
    type: diffuse_light
    emit: [10, 10, 10]

objects:
  - type: sphere
    center: [0, -1000, 0]
    radius: 1000
    material: ground
  - type: sphere
    center: [0, 7, 0]
    radius: 2
    material: lamp
```
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .vec3 import Vec3, Color
from .camera import Camera
from .shapes import Sphere, HittableList
from .materials import Material, Lambertian, Metal, DiffuseLight
from .config import CameraSettings, ConfigError, RenderSettings

logger = logging.getLogger(__name__)


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.objects: HittableList = HittableList()
        self.camera: Optional[Camera] = None
        self.settings: Optional[RenderSettings] = None

    def parse_file(self, filepath: str) -> Tuple[HittableList, Camera, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (world, camera, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()

        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                data = yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SceneParseError(f"Cannot read {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file must contain a mapping, got {type(data).__name__}")

        logger.debug("Loaded scene description from %s", path)
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[HittableList, Camera, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (world, camera, settings)
        """
        if not isinstance(data, dict):
            raise SceneParseError("Scene description must be a mapping")

        # Settings first: the camera inherits the image aspect ratio
        self._parse_settings(self._section(data, 'render'))

        # Materials before objects (objects reference them)
        if 'materials' in data:
            self._parse_materials(data['materials'])

        if 'objects' in data:
            self._parse_objects(data['objects'])

        self._parse_camera(self._section(data, 'camera'))

        logger.debug(
            "Parsed scene: %d materials, %d objects",
            len(self.materials), len(self.objects)
        )
        return self.objects, self.camera, self.settings

    @staticmethod
    def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = data.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise SceneParseError(f"'{name}' must be a mapping, got: {section!r}")
        return section

    @staticmethod
    def _to_float(value: Any, what: str) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            raise SceneParseError(f"Invalid {what}: expected a number, got {value!r}")

    @staticmethod
    def _to_int(value: Any, what: str) -> int:
        if isinstance(value, bool):
            raise SceneParseError(f"Invalid {what}: expected an integer, got {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise SceneParseError(f"Invalid {what}: expected an integer, got {value!r}")

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from a 3-list or an {x, y, z} mapping."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
            return Vec3(*(self._to_float(c, 'vector component') for c in data))
        elif isinstance(data, dict):
            return Vec3(*(self._to_float(data.get(k, 0), 'vector component') for k in 'xyz'))
        else:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from a 3-list, an {r, g, b} mapping or a hex string."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Color must have 3 components, got {len(data)}")
            return Color(*(self._to_float(c, 'color component') for c in data))
        elif isinstance(data, dict):
            return Color(*(self._to_float(data.get(k, 0), 'color component') for k in 'rgb'))
        elif isinstance(data, str):
            if data.startswith('#') and len(data) == 7:
                try:
                    r, g, b = (int(data[i:i + 2], 16) / 255.0 for i in (1, 3, 5))
                except ValueError:
                    raise SceneParseError(f"Cannot parse color from string: {data}")
                return Color(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        else:
            raise SceneParseError(f"Cannot parse Color from: {data}")

    def _build_material(self, mat_data: Dict[str, Any]) -> Material:
        if not isinstance(mat_data, dict):
            raise SceneParseError(f"Material definition must be a mapping, got: {mat_data!r}")
        mat_type = str(mat_data.get('type', 'lambertian')).lower()

        if mat_type == 'lambertian':
            return Lambertian(self._parse_color(mat_data.get('albedo', [0.5, 0.5, 0.5])))

        elif mat_type == 'metal':
            albedo = self._parse_color(mat_data.get('albedo', [0.8, 0.8, 0.8]))
            return Metal(albedo, self._to_float(mat_data.get('fuzz', 0.0), 'fuzz'))

        elif mat_type in ('diffuse_light', 'light'):
            return DiffuseLight(self._parse_color(mat_data.get('emit', [1, 1, 1])))

        raise SceneParseError(f"Unknown material type: {mat_type}")

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse the named materials section."""
        if not isinstance(materials_data, dict):
            raise SceneParseError("'materials' must be a mapping of name to definition")
        for name, mat_data in materials_data.items():
            self.materials[name] = self._build_material(mat_data)

    def _get_material(self, mat_ref: Any) -> Material:
        """Get a material by name or from an inline definition."""
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self._build_material(mat_ref)
        else:
            raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_objects(self, objects_data: list) -> None:
        """Parse the objects section."""
        if not isinstance(objects_data, list):
            raise SceneParseError("'objects' must be a list")
        for obj_data in objects_data:
            if not isinstance(obj_data, dict):
                raise SceneParseError(f"Object definition must be a mapping, got: {obj_data!r}")
            obj_type = str(obj_data.get('type', 'sphere')).lower()
            if obj_type != 'sphere':
                raise SceneParseError(f"Unknown object type: {obj_type}")

            if 'material' not in obj_data:
                raise SceneParseError("Sphere is missing a material")
            material = self._get_material(obj_data['material'])
            center = self._parse_vec3(obj_data.get('center', [0, 0, 0]))
            radius = self._to_float(obj_data.get('radius', 1.0), 'radius')
            try:
                self.objects.add(Sphere(center, radius, material))
            except ValueError as e:
                raise SceneParseError(f"Invalid sphere: {e}") from e

    def _parse_camera(self, camera_data: Dict[str, Any]) -> None:
        """Parse the camera section into a Camera."""
        focus_dist = camera_data.get('focus_dist')
        camera_settings = CameraSettings(
            look_from=self._parse_vec3(camera_data.get('look_from', [0, 0, 5])),
            look_at=self._parse_vec3(camera_data.get('look_at', [0, 0, 0])),
            vup=self._parse_vec3(camera_data.get('vup', [0, 1, 0])),
            vfov=self._to_float(camera_data.get('vfov', 20.0), 'vfov'),
            aspect_ratio=self._to_float(camera_data.get('aspect_ratio', self.settings.aspect_ratio), 'aspect_ratio'),
            aperture=self._to_float(camera_data.get('aperture', 0.0), 'aperture'),
            focus_dist=self._to_float(focus_dist, 'focus_dist') if focus_dist is not None else None
        )
        try:
            self.camera = Camera.from_settings(camera_settings)
        except ConfigError as e:
            raise SceneParseError(f"Invalid camera: {e}") from e

    def _parse_settings(self, settings_data: Dict[str, Any]) -> None:
        """Parse the render settings section."""
        seed = settings_data.get('seed')
        self.settings = RenderSettings(
            image_width=self._to_int(settings_data.get('width', 400), 'width'),
            aspect_ratio=self._to_float(settings_data.get('aspect_ratio', 16.0 / 9.0), 'aspect_ratio'),
            samples_per_pixel=self._to_int(settings_data.get('samples', 100), 'samples'),
            max_depth=self._to_int(settings_data.get('max_depth', 50), 'max_depth'),
            tile_size=self._to_int(settings_data.get('tile_size', 16), 'tile_size'),
            num_threads=self._to_int(settings_data.get('threads', 0), 'threads'),
            executor=str(settings_data.get('executor', 'thread')),
            seed=self._to_int(seed, 'seed') if seed is not None else None
        )
        try:
            self.settings.validate()
        except ConfigError as e:
            raise SceneParseError(f"Invalid render settings: {e}") from e


def load_scene(filepath: str) -> Tuple[HittableList, Camera, RenderSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (world, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[HittableList, Camera, RenderSettings]:
    """Convenience function to parse a scene from a dictionary."""
    parser = SceneParser()
    return parser.parse_dict(data)
