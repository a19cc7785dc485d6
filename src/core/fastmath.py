# core/fastmath.py
import math
import numpy as np

# Magic constant for a square-root guess on IEEE-754 binary32 bit patterns.
# Only valid for 32-bit floats.
SQRT_MAGIC = 0x1fbd3f7d

# Relative error bound of fast_sqrt after one Newton step.
FAST_SQRT_TOLERANCE = 1e-2

# Inputs outside the normal float32 range have no usable bit pattern.
FLOAT32_TINY = float(np.finfo(np.float32).tiny)
FLOAT32_MAX = float(np.finfo(np.float32).max)


def fast_sqrt(value: float) -> float:
    """
    Approximate square root.

    The input is reinterpreted as a float32 bit pattern, halved and offset by
    SQRT_MAGIC to give a first guess, which is then refined with a single
    Newton-Raphson (Heron) step. The relative error stays below
    FAST_SQRT_TOLERANCE for every input in the normal float32 range; values
    outside [FLOAT32_TINY, FLOAT32_MAX] go through exact_sqrt instead.
    """
    if not FLOAT32_TINY <= value <= FLOAT32_MAX:
        return exact_sqrt(value)
    bits = int(np.float32(value).view(np.int32))
    y = float(np.int32(SQRT_MAGIC + (bits >> 1)).view(np.float32))
    return ((y * y + value) / y) * 0.5


def exact_sqrt(value: float) -> float:
    return math.sqrt(value)
