# camera/camera.py
import random
from core.vector import Vector3
from core.ray import Ray
from core.settings import (DEFAULT_ASPECT_RATIO, DEFAULT_IMAGE_WIDTH,
                           DEFAULT_SAMPLES_PER_PIXEL, DEFAULT_MAX_DEPTH, RenderSettings)

VIEWPORT_HEIGHT = 2.0
FOCAL_LENGTH = 1.0

class Camera:
    def __init__(self, aspect_ratio: float = DEFAULT_ASPECT_RATIO,
                 image_width: int = DEFAULT_IMAGE_WIDTH,
                 samples_per_pixel: int = DEFAULT_SAMPLES_PER_PIXEL,
                 max_depth: int = DEFAULT_MAX_DEPTH,
                 center: Vector3 = None):
        self.aspect_ratio = aspect_ratio
        self.image_width = image_width
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.center = center if center is not None else Vector3(0, 0, 0)
        self.update_camera()

    @classmethod
    def from_settings(cls, settings: RenderSettings) -> "Camera":
        return cls(aspect_ratio=settings.aspect_ratio,
                   image_width=settings.image_width,
                   samples_per_pixel=settings.samples_per_pixel,
                   max_depth=settings.max_depth)

    def update_camera(self):
        """Derives the image height, viewport and pixel grid."""
        self.image_height = max(1, int(round(self.image_width / self.aspect_ratio)))
        self.pixel_samples_scale = 1.0 / self.samples_per_pixel

        # Use the real image ratio, which may differ from aspect_ratio after rounding.
        viewport_width = VIEWPORT_HEIGHT * self.image_width / self.image_height

        # Vectors across the horizontal and down the vertical viewport edges.
        viewport_u = Vector3(viewport_width, 0, 0)
        viewport_v = Vector3(0, -VIEWPORT_HEIGHT, 0)

        self.pixel_delta_u = viewport_u / self.image_width
        self.pixel_delta_v = viewport_v / self.image_height

        viewport_upper_left = (self.center -
                               Vector3(0, 0, FOCAL_LENGTH) -
                               viewport_u / 2 -
                               viewport_v / 2)
        self.pixel00_loc = viewport_upper_left + (self.pixel_delta_u + self.pixel_delta_v) * 0.5

    def pixel_center(self, i: int, j: int) -> Vector3:
        return self.pixel00_loc + self.pixel_delta_u * i + self.pixel_delta_v * j

    def get_ray(self, i: int, j: int, rng: random.Random) -> Ray:
        """
        Ray from the camera center through a random point in the unit
        square around pixel (i, j).
        """
        offset_x, offset_y = sample_square(rng)
        pixel_sample = (self.pixel00_loc +
                        self.pixel_delta_u * (i + offset_x) +
                        self.pixel_delta_v * (j + offset_y))
        return Ray(self.center, pixel_sample - self.center)

    def __repr__(self) -> str:
        return (f"Camera({self.image_width}x{self.image_height}, "
                f"spp={self.samples_per_pixel}, depth={self.max_depth})")

def sample_square(rng: random.Random):
    """Offsets drawn independently from [-0.5, 0.5] on both image axes."""
    return rng.uniform(-0.5, 0.5), rng.uniform(-0.5, 0.5)
