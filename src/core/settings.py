# core/settings.py
from dataclasses import dataclass
from typing import Optional

DEFAULT_ASPECT_RATIO = 16.0 / 9.0
DEFAULT_IMAGE_WIDTH = 400
DEFAULT_SAMPLES_PER_PIXEL = 100
DEFAULT_MAX_DEPTH = 50

QUALITY_PRESETS = {
    "preview": {"samples": 4, "bounces": 8},
    "balanced": {"samples": 32, "bounces": 20},
    "final": {"samples": DEFAULT_SAMPLES_PER_PIXEL, "bounces": DEFAULT_MAX_DEPTH},
}


@dataclass
class RenderSettings:
    aspect_ratio: float = DEFAULT_ASPECT_RATIO
    image_width: int = DEFAULT_IMAGE_WIDTH
    samples_per_pixel: int = DEFAULT_SAMPLES_PER_PIXEL
    max_depth: int = DEFAULT_MAX_DEPTH
    workers: int = 1
    seed: Optional[int] = None

    def __post_init__(self):
        if self.aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.image_width < 1:
            raise ValueError(f"image_width must be at least 1, got {self.image_width}")
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")

    @classmethod
    def from_preset(cls, name: str, **overrides) -> "RenderSettings":
        """Build settings from a named quality preset; explicit overrides win."""
        if name not in QUALITY_PRESETS:
            raise ValueError(f"Unknown quality preset: {name}")
        quality = QUALITY_PRESETS[name]
        values = {"samples_per_pixel": quality["samples"], "max_depth": quality["bounces"]}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
