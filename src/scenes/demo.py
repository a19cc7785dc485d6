# scenes/demo.py
import logging

from camera.camera import Camera
from core.settings import RenderSettings
from core.vector import Vector3
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.presets import DiffusePresets, MetalPresets

logger = logging.getLogger(__name__)


def build_demo_world() -> HittableList:
    """Ground plane sphere with a matte sphere between two metal ones."""
    world = HittableList()

    material_ground = DiffusePresets.ground()
    material_center = DiffusePresets.matte_blue()
    material_left = MetalPresets.silver()
    material_right = MetalPresets.gold()

    world.add(Sphere(Vector3(0.0, -100.5, -1.0), 100.0, material_ground))
    world.add(Sphere(Vector3(0.0, 0.0, -1.2), 0.5, material_center))
    world.add(Sphere(Vector3(-1.0, 0.0, -1.0), 0.5, material_left))
    world.add(Sphere(Vector3(1.0, 0.0, -1.0), 0.5, material_right))

    logger.info("World contains %d objects", len(world))
    return world


def build_camera(settings: RenderSettings) -> Camera:
    """Camera at the origin looking down -z, sized from settings."""
    camera = Camera.from_settings(settings)
    logger.info("Camera %r", camera)
    return camera
