# core/interval.py
import math

class Interval:
    """
    Closed range [min, max] of ray parameters or color values.
    """
    __slots__ = ("min", "max")

    def __init__(self, minimum: float = -math.inf, maximum: float = math.inf):
        if minimum > maximum:
            raise ValueError(f"Interval minimum {minimum} exceeds maximum {maximum}")
        self.min = minimum
        self.max = maximum

    def surrounds(self, x: float) -> bool:
        # Strict on both ends.
        return self.min < x < self.max

    def clamp(self, x: float) -> float:
        if x < self.min:
            return self.min
        if x > self.max:
            return self.max
        return x

    def __repr__(self) -> str:
        return f"Interval({self.min}, {self.max})"
