"""Tests for spheres and the scene aggregate."""

import pytest
import numpy as np

from pathlight.vec3 import Vec3, Point3, Color
from pathlight.ray import Ray
from pathlight.shapes import Sphere, HittableList, HitRecord
from pathlight.materials import Lambertian, Metal

INF = float('inf')
MAT = Lambertian(Color(0.5, 0.5, 0.5))


class TestSphere:
    """Test Sphere intersection."""

    def test_creation(self):
        sphere = Sphere(Point3(1, 2, 3), 2.0, MAT)
        assert sphere.center == Point3(1, 2, 3)
        assert sphere.radius == 2.0

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_rejects_non_positive_radius(self, radius):
        with pytest.raises(ValueError):
            Sphere(Point3(0, 0, 0), radius, MAT)

    def test_hit_through_center(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, MAT)
        hit = sphere.hit(Ray(Point3(0, 0, -5), Vec3(0, 0, 1)), 0.001, INF)

        assert hit is not None
        assert hit.t == pytest.approx(4.0)
        assert hit.point == Point3(0, 0, -1)

    def test_front_face_normal(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, MAT)
        hit = sphere.hit(Ray(Point3(0, 0, -5), Vec3(0, 0, 1)), 0.001, INF)

        assert hit.front_face is True
        assert hit.normal == Vec3(0, 0, -1)

    def test_hit_from_inside_flips_normal(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, MAT)
        hit = sphere.hit(Ray(Point3(0, 0, 0), Vec3(0, 0, 1)), 0.001, INF)

        assert hit is not None
        assert hit.front_face is False
        # Outward normal is +z, stored normal must oppose the ray
        assert hit.normal == Vec3(0, 0, -1)

    def test_miss(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, MAT)
        assert sphere.hit(Ray(Point3(0, 5, -5), Vec3(0, 0, 1)), 0.001, INF) is None

    def test_behind_ray(self):
        sphere = Sphere(Point3(0, 0, -5), 1.0, MAT)
        assert sphere.hit(Ray(Point3(0, 0, 0), Vec3(0, 0, 1)), 0.001, INF) is None

    def test_far_root_used_when_near_root_excluded(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, MAT)
        hit = sphere.hit(Ray(Point3(0, 0, -5), Vec3(0, 0, 1)), 4.5, INF)

        assert hit is not None
        assert hit.t == pytest.approx(6.0)

    def test_both_roots_out_of_range(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, MAT)
        assert sphere.hit(Ray(Point3(0, 0, -5), Vec3(0, 0, 1)), 0.001, 3.0) is None

    def test_range_is_open(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, MAT)
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 1))
        # t_max equal to the near root excludes it
        assert sphere.hit(ray, 0.001, 4.0) is None

    def test_unnormalized_direction(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, MAT)
        hit = sphere.hit(Ray(Point3(0, 0, -5), Vec3(0, 0, 2)), 0.001, INF)

        assert hit.t == pytest.approx(2.0)
        assert hit.normal.length() == pytest.approx(1.0)

    def test_shared_material(self):
        material = Lambertian(Color(1, 0, 0))
        a = Sphere(Point3(0, 0, 0), 1.0, material)
        b = Sphere(Point3(5, 0, 0), 1.0, material)

        hit_a = a.hit(Ray(Point3(0, 0, -5), Vec3(0, 0, 1)), 0.001, INF)
        hit_b = b.hit(Ray(Point3(5, 0, -5), Vec3(0, 0, 1)), 0.001, INF)
        assert hit_a.material is material
        assert hit_b.material is material

    def test_random_rays_satisfy_hit_invariants(self):
        rng = np.random.default_rng(11)
        sphere = Sphere(Point3(0.5, -0.25, 1.0), 1.5, MAT)
        t_min, t_max = 0.001, 1e6
        hits = 0

        for _ in range(500):
            origin = Vec3.random(rng, -4, 4)
            # Aim at a point inside the sphere so the line always crosses it
            target = sphere.center + 0.9 * sphere.radius * Vec3.random_in_unit_sphere(rng)
            direction = target - origin
            ray = Ray(origin, direction)
            hit = sphere.hit(ray, t_min, t_max)
            if hit is None:
                continue
            hits += 1
            assert t_min < hit.t < t_max
            assert (hit.point - sphere.center).length() == pytest.approx(sphere.radius, rel=1e-6)
            assert ray.direction.dot(hit.normal) <= 0
            assert hit.normal.length() == pytest.approx(1.0)

        assert hits > 450


class TestHitRecord:
    """Test normal orientation."""

    def test_set_face_normal_outside(self):
        rec = HitRecord(point=Point3(0, 0, 0), normal=Vec3(0, 0, 0), t=1.0, front_face=False)
        rec.set_face_normal(Ray(Point3(0, 0, 5), Vec3(0, 0, -1)), Vec3(0, 0, 1))
        assert rec.front_face is True
        assert rec.normal == Vec3(0, 0, 1)

    def test_set_face_normal_inside(self):
        rec = HitRecord(point=Point3(0, 0, 0), normal=Vec3(0, 0, 0), t=1.0, front_face=True)
        rec.set_face_normal(Ray(Point3(0, 0, -5), Vec3(0, 0, 1)), Vec3(0, 0, 1))
        assert rec.front_face is False
        assert rec.normal == Vec3(0, 0, -1)

    def test_set_face_normal_grazing_keeps_outward(self):
        rec = HitRecord(point=Point3(0, 0, 0), normal=Vec3(0, 0, 0), t=1.0, front_face=False)
        rec.set_face_normal(Ray(Point3(-5, 0, 1), Vec3(1, 0, 0)), Vec3(0, 0, 1))
        assert rec.front_face is True
        assert rec.normal == Vec3(0, 0, 1)


class TestHittableList:
    """Test the scene aggregate."""

    def test_empty_misses(self):
        world = HittableList()
        assert len(world) == 0
        assert world.hit(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), 0.001, INF) is None

    def test_returns_closest_regardless_of_order(self):
        near = Sphere(Point3(0, 0, -3), 1.0, Lambertian(Color(1, 0, 0)))
        far = Sphere(Point3(0, 0, -10), 1.0, Metal(Color(0, 1, 0)))
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -1))

        for objects in ([near, far], [far, near]):
            hit = HittableList(objects).hit(ray, 0.001, INF)
            assert hit.t == pytest.approx(2.0)
            assert hit.material is near.material

    def test_respects_t_max(self):
        world = HittableList([Sphere(Point3(0, 0, -10), 1.0, MAT)])
        assert world.hit(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), 0.001, 5.0) is None

    def test_add_clear_iter(self):
        world = HittableList()
        s1 = Sphere(Point3(0, 0, 0), 1.0, MAT)
        s2 = Sphere(Point3(3, 0, 0), 1.0, MAT)
        world.add(s1)
        world.add(s2)
        assert list(world) == [s1, s2]

        world.clear()
        assert len(world) == 0

    def test_constructor_copies_list(self):
        objects = [Sphere(Point3(0, 0, 0), 1.0, MAT)]
        world = HittableList(objects)
        objects.append(Sphere(Point3(3, 0, 0), 1.0, MAT))
        assert len(world) == 1
