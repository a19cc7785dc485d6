# renderer/preview.py
import logging

import numpy as np
import pygame

from renderer.tone_mapping import quantize

logger = logging.getLogger(__name__)


def to_surface_array(pixels: np.ndarray) -> np.ndarray:
    """
    Convert a (height, width, 3) linear buffer into the (width, height, 3)
    uint8 layout pygame.surfarray expects, using the encoder's gamma.
    """
    return np.ascontiguousarray(quantize(pixels).transpose(1, 0, 2))


def make_surface(pixels: np.ndarray) -> pygame.Surface:
    return pygame.surfarray.make_surface(to_surface_array(pixels))


def show(pixels: np.ndarray, title: str = "Ray Tracer") -> None:
    """Display a finished render until the window is closed or Esc is pressed."""
    height, width = pixels.shape[0], pixels.shape[1]
    pygame.init()
    try:
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(title)
        screen.blit(make_surface(pixels), (0, 0))
        pygame.display.flip()
        logger.info("Preview open; close the window or press Esc to continue")

        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
            clock.tick(30)
    finally:
        pygame.quit()
