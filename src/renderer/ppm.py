# renderer/ppm.py
"""Plain-text (P3) PPM encoding of a linear pixel buffer."""

import logging
import os
from typing import Union

import numpy as np

from renderer.tone_mapping import quantize

logger = logging.getLogger(__name__)

MAX_COLOR_VALUE = 255


def encode_ppm(pixels: np.ndarray) -> str:
    """
    Encode a (height, width, 3) array of linear colors as P3 text.

    Header lines are "P3", "<width> <height>" and "255", followed by one
    line per image row with width*3 space separated integers.
    """
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Expected a (height, width, 3) buffer, got shape {pixels.shape}")
    height, width = pixels.shape[0], pixels.shape[1]
    data = quantize(pixels)

    lines = ["P3", f"{width} {height}", str(MAX_COLOR_VALUE)]
    for row, values in enumerate(data.reshape(height, width * 3), 1):
        lines.append(" ".join(str(v) for v in values.tolist()))
        logger.debug("Output %d/%d", row, height)
    return "\n".join(lines) + "\n"


def write_ppm(path: Union[str, os.PathLike], pixels: np.ndarray, overwrite: bool = False) -> None:
    """
    Write pixels to path as P3 PPM.

    Refuses to replace an existing file unless overwrite is set; raises
    FileExistsError in that case. Other I/O errors propagate unchanged.
    """
    text = encode_ppm(pixels)
    mode = "w" if overwrite else "x"
    with open(path, mode, encoding="ascii", newline="\n") as fh:
        fh.write(text)
    logger.info("Wrote %s (%dx%d)", os.fspath(path), pixels.shape[1], pixels.shape[0])
