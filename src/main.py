# main.py
import argparse
import logging
import sys

from core.log import setup_logging
from core.settings import QUALITY_PRESETS, RenderSettings
from renderer.ppm import write_ppm
from renderer.raytracer import Renderer
from scenes.demo import build_camera, build_demo_world

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Stochastic sphere ray tracer")
    parser.add_argument("--quality", "-q", choices=sorted(QUALITY_PRESETS), default="final",
                        help="Preset for samples per pixel and bounce depth")
    parser.add_argument("--width", "-w", type=int, default=None,
                        help="Image width in pixels")
    parser.add_argument("--aspect", type=float, default=None,
                        help="Aspect ratio (width / height)")
    parser.add_argument("--samples", "-s", type=int, default=None,
                        help="Samples per pixel (overrides the preset)")
    parser.add_argument("--depth", "-d", type=int, default=None,
                        help="Maximum bounce depth (overrides the preset)")
    parser.add_argument("--workers", "-j", type=int, default=None,
                        help="Worker processes; scanlines are split between them")
    parser.add_argument("--seed", type=int, default=None,
                        help="Root random seed for a reproducible image")
    parser.add_argument("--output", "-o", default="out.ppm",
                        help="Output PPM file")
    parser.add_argument("--force", "-f", action="store_true",
                        help="Overwrite the output file if it exists")
    parser.add_argument("--preview", action="store_true",
                        help="Show the finished image in a window")
    parser.add_argument("--log-level", default="INFO",
                        help="Logging level")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        settings = RenderSettings.from_preset(
            args.quality,
            aspect_ratio=args.aspect,
            image_width=args.width,
            samples_per_pixel=args.samples,
            max_depth=args.depth,
            workers=args.workers,
            seed=args.seed,
        )
    except ValueError as e:
        logger.error("Invalid settings: %s", e)
        return 1

    world = build_demo_world()
    camera = build_camera(settings)
    renderer = Renderer(workers=settings.workers, seed=settings.seed)
    pixels = renderer.render(world, camera)

    try:
        write_ppm(args.output, pixels, overwrite=args.force)
    except FileExistsError:
        logger.error("%s already exists; pass --force to overwrite", args.output)
        return 1
    except OSError as e:
        logger.error("Could not write %s: %s", args.output, e)
        return 1

    if args.preview:
        from renderer.preview import show
        show(pixels, title=args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
