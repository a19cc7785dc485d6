# renderer/raytracer.py
import logging
import math
import random
import time
from multiprocessing import Pool
from typing import List, Optional

import numpy as np

from camera.camera import Camera
from core.interval import Interval
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import Hittable

logger = logging.getLogger(__name__)

# Lower bound on hit distance; keeps spawned rays from re-hitting their own
# surface through floating-point error (shadow acne).
T_MIN = 0.025
INFINITY = math.inf

WHITE = Vector3(1.0, 1.0, 1.0)
SKY_BLUE = Vector3(0.5, 0.7, 1.0)


def background(ray: Ray) -> Vector3:
    """Vertical white-to-sky-blue gradient seen by rays that hit nothing."""
    unit_direction = ray.direction.normalize()
    a = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - a) + SKY_BLUE * a


def ray_color(ray: Ray, depth: int, world: Hittable, rng: random.Random) -> Vector3:
    """
    Radiance carried back along ray.

    Equivalent to the recursion
        color(r, 0) = black
        color(r, d) = attenuation * color(scattered, d - 1)   on scatter
                    = black                                   on absorption
                    = background(r)                           on miss
    unrolled into a loop that carries the running attenuation.
    """
    throughput = Vector3(1.0, 1.0, 1.0)
    ray_t = Interval(T_MIN, INFINITY)
    while depth > 0:
        rec = world.hit(ray, ray_t)
        if rec is None:
            return throughput * background(ray)
        scatter = rec.material.scatter(ray, rec, rng)
        if scatter is None:
            break
        ray, attenuation = scatter
        throughput = throughput * attenuation
        depth -= 1
    # Absorbed or out of bounces.
    return Vector3(0.0, 0.0, 0.0)


def render_pixel(camera: Camera, world: Hittable, i: int, j: int,
                 rng: random.Random) -> Vector3:
    """Box-filtered mean of samples_per_pixel jittered samples."""
    pixel_color = Vector3(0.0, 0.0, 0.0)
    for _ in range(camera.samples_per_pixel):
        ray = camera.get_ray(i, j, rng)
        pixel_color = pixel_color + ray_color(ray, camera.max_depth, world, rng)
    return pixel_color * camera.pixel_samples_scale


def render_row(camera: Camera, world: Hittable, j: int, rng: random.Random) -> np.ndarray:
    row = np.zeros((camera.image_width, 3), dtype=np.float64)
    for i in range(camera.image_width):
        color = render_pixel(camera, world, i, j, rng)
        row[i] = (color.x, color.y, color.z)
    return row


def _render_row_task(args):
    camera, world, j, row_seed = args
    return j, render_row(camera, world, j, random.Random(row_seed))


def row_seeds(seed: Optional[int], height: int) -> List[int]:
    """One independent seed per scanline, derived from a single root seed."""
    children = np.random.SeedSequence(seed).spawn(height)
    return [int(child.generate_state(1, dtype=np.uint64)[0]) for child in children]


def render(world: Hittable, camera: Camera, workers: int = 1,
           seed: Optional[int] = None) -> np.ndarray:
    """
    Render world through camera.

    Returns a (image_height, image_width, 3) float array of linear colors,
    row-major from the top-left pixel. Each scanline draws from its own
    random stream, so the result for a given seed does not depend on the
    number of workers.
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    width, height = camera.image_width, camera.image_height
    logger.info("Rendering %dx%d, %d samples per pixel, max depth %d, %d worker(s)",
                width, height, camera.samples_per_pixel, camera.max_depth, workers)
    start_time = time.time()

    pixels = np.zeros((height, width, 3), dtype=np.float64)
    tasks = [(camera, world, j, s) for j, s in enumerate(row_seeds(seed, height))]

    if workers == 1:
        for task in tasks:
            j, row = _render_row_task(task)
            pixels[j] = row
            logger.debug("Scanlines remaining: %d", height - j - 1)
    else:
        with Pool(processes=workers) as pool:
            for done, (j, row) in enumerate(pool.imap_unordered(_render_row_task, tasks), 1):
                pixels[j] = row
                logger.debug("Scanlines remaining: %d", height - done)

    elapsed = time.time() - start_time
    logger.info("Render finished in %.2f seconds", elapsed)
    return pixels


class Renderer:
    """Holds render options so one configuration can render several worlds."""

    def __init__(self, workers: int = 1, seed: Optional[int] = None):
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.workers = workers
        self.seed = seed

    def render(self, world: Hittable, camera: Camera) -> np.ndarray:
        return render(world, camera, workers=self.workers, seed=self.seed)
