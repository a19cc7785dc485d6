import math
import random

import numpy as np
import pytest

from camera.camera import Camera
from core.interval import Interval
from core.ray import Ray
from core.vector import Vector3
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.lambertian import Lambertian
from materials.material import Material
from renderer.raytracer import (T_MIN, Renderer, background, ray_color, render,
                                render_pixel, row_seeds)
from scenes.demo import build_demo_world
from conftest import assert_vec_close

BLACK = Vector3(0, 0, 0)


class AbsorbAll(Material):
    def scatter(self, ray_in, rec, rng):
        return None


class BounceUp(Material):
    """Sends every ray straight up with a fixed attenuation."""

    def scatter(self, ray_in, rec, rng):
        return Ray(rec.p, Vector3(0, 1, 0)), self.albedo


def test_background_gradient():
    # Horizontal ray: a = 0.5 exactly.
    assert_vec_close(background(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))), Vector3(0.75, 0.85, 1.0))
    # Zenith and nadir within the fast normalization tolerance.
    assert_vec_close(background(Ray(Vector3(0, 0, 0), Vector3(0, 3, 0))), Vector3(0.5, 0.7, 1.0), abs_tol=1e-2)
    assert_vec_close(background(Ray(Vector3(0, 0, 0), Vector3(0, -3, 0))), Vector3(1.0, 1.0, 1.0), abs_tol=1e-2)


def test_miss_returns_background_exactly(red_diffuse, rng):
    world = HittableList([Sphere(Vector3(0, 0, -5), 1.0, red_diffuse)])
    ray = Ray(Vector3(0, 0, 0), Vector3(0.3, 0.8, -0.1))
    expected = background(ray)

    color = ray_color(ray, 10, world, rng)

    assert color == expected
    y = ray.direction.normalize(exact=True).y
    a = 0.5 * (y + 1.0)
    assert_vec_close(color, Vector3(1 - a + 0.5 * a, 1 - a + 0.7 * a, 1.0), abs_tol=1e-2)


def test_empty_scene_is_background(rng):
    ray = Ray(Vector3(0, 0, 0), Vector3(-0.2, 0.1, -1))
    assert ray_color(ray, 5, HittableList(), rng) == background(ray)


def test_depth_zero_is_black(red_diffuse, rng):
    world = HittableList([Sphere(Vector3(0, 0, -5), 1.0, red_diffuse)])
    for direction in (Vector3(0, 0, -1), Vector3(0, 1, 0), Vector3(1, -1, 0)):
        assert ray_color(Ray(Vector3(0, 0, 0), direction), 0, world, rng) == BLACK


def test_absorbed_ray_is_black(rng):
    world = HittableList([Sphere(Vector3(0, 0, -3), 1.0, AbsorbAll(Vector3(1, 1, 1)))])
    assert ray_color(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 10, world, rng) == BLACK


def test_attenuation_multiplies_background(rng):
    world = HittableList([Sphere(Vector3(0, 0, -3), 1.0, BounceUp(Vector3(0.5, 0.25, 1.0)))])
    ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))

    color = ray_color(ray, 2, world, rng)

    sky = background(Ray(Vector3(0, 0, -2), Vector3(0, 1, 0)))
    assert_vec_close(color, Vector3(0.5, 0.25, 1.0) * sky, abs_tol=1e-12)
    # One bounce left is not enough to reach the sky after the hit.
    assert ray_color(ray, 1, world, rng) == BLACK


def test_trapped_rays_run_out_of_depth():
    # Inside a closed diffuse sphere every bounce hits the wall again.
    world = HittableList([Sphere(Vector3(0, 0, 0), 10.0, Lambertian(Vector3(0.9, 0.9, 0.9)))])
    rng = random.Random(3)
    for _ in range(20):
        assert ray_color(Ray(Vector3(0, 0, 0), Vector3(0.1, 0.2, -1)), 5, world, rng) == BLACK


def test_high_depth_does_not_grow_the_stack(rng):
    world = HittableList([Sphere(Vector3(0, 0, 0), 10.0, Lambertian(Vector3(0.5, 0.5, 0.5)))])
    assert ray_color(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 5000, world, rng) == BLACK


def test_hits_closer_than_t_min_are_ignored(rng):
    # Origin sits just inside the surface; the exit root is below T_MIN.
    sphere = Sphere(Vector3(0, 0, -1), 1.0, AbsorbAll(Vector3(1, 1, 1)))
    ray = Ray(Vector3(0, 0, -T_MIN / 2), Vector3(0, 0, 1))
    assert ray_color(ray, 5, HittableList([sphere]), rng) == background(ray)


def test_single_centered_sample_matches_center_ray(zero_jitter_rng):
    cam = Camera(aspect_ratio=2.0, image_width=8, samples_per_pixel=1, max_depth=4)
    world = HittableList()
    for j in range(cam.image_height):
        for i in range(cam.image_width):
            center_ray = Ray(cam.center, cam.pixel_center(i, j) - cam.center)
            assert render_pixel(cam, world, i, j, zero_jitter_rng) == background(center_ray)


@pytest.mark.parametrize("material", [AbsorbAll(Vector3(1, 1, 1)), BounceUp(Vector3(0.5, 0.25, 1.0))])
def test_single_centered_sample_through_geometry(zero_jitter_rng, material):
    cam = Camera(aspect_ratio=2.0, image_width=8, samples_per_pixel=1, max_depth=4)
    world = HittableList([Sphere(Vector3(0, 0, -3), 1.0, material)])
    hits = 0
    for j in range(cam.image_height):
        for i in range(cam.image_width):
            center_ray = Ray(cam.center, cam.pixel_center(i, j) - cam.center)
            expected = ray_color(center_ray, cam.max_depth, world, zero_jitter_rng)
            assert render_pixel(cam, world, i, j, zero_jitter_rng) == expected
            if world.hit(center_ray, Interval(T_MIN, math.inf)) is not None:
                hits += 1
                assert expected != background(center_ray)
    assert hits > 0


def test_pixel_is_mean_of_samples(zero_jitter_rng):
    world = HittableList()
    one = Camera(aspect_ratio=1.0, image_width=4, samples_per_pixel=1)
    many = Camera(aspect_ratio=1.0, image_width=4, samples_per_pixel=8)
    assert_vec_close(render_pixel(many, world, 1, 2, zero_jitter_rng),
                     render_pixel(one, world, 1, 2, zero_jitter_rng), abs_tol=1e-12)


def test_render_shape_and_range():
    cam = Camera(aspect_ratio=2.0, image_width=12, samples_per_pixel=2, max_depth=5)
    pixels = render(build_demo_world(), cam, seed=11)
    assert pixels.shape == (6, 12, 3)
    assert np.all(pixels >= 0.0)
    assert np.all(pixels <= 1.0 + 1e-2)


def test_empty_scene_renders_gradient():
    cam = Camera(aspect_ratio=1.0, image_width=4, samples_per_pixel=4)
    pixels = render(HittableList(), cam, seed=0)
    # Blue channel of the sky gradient is always 1; top rows are bluer than bottom rows.
    assert np.allclose(pixels[..., 2], 1.0)
    assert pixels[0, :, 0].mean() < pixels[-1, :, 0].mean()


def test_render_is_reproducible_with_seed():
    cam = Camera(aspect_ratio=2.0, image_width=10, samples_per_pixel=2, max_depth=4)
    world = build_demo_world()
    first = render(world, cam, seed=42)
    second = render(world, cam, seed=42)
    assert np.array_equal(first, second)
    assert not np.array_equal(first, render(world, cam, seed=43))


def test_worker_count_does_not_change_image():
    cam = Camera(aspect_ratio=2.0, image_width=8, samples_per_pixel=2, max_depth=3)
    world = build_demo_world()
    serial = Renderer(workers=1, seed=5).render(world, cam)
    parallel = Renderer(workers=2, seed=5).render(world, cam)
    assert np.array_equal(serial, parallel)


def test_row_seeds_are_distinct():
    seeds = row_seeds(1, 50)
    assert len(set(seeds)) == 50
    assert seeds == row_seeds(1, 50)


def test_invalid_worker_count():
    with pytest.raises(ValueError):
        Renderer(workers=0)
    with pytest.raises(ValueError):
        render(HittableList(), Camera(image_width=2), workers=0)
