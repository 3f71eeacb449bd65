# pipeline/value_range.py
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .errors import InvalidRange

BYTE_MIN = 0.0
BYTE_MAX = 255.0


@dataclass(frozen=True)
class RangeTransform:
    """output = input * scale + offset"""
    scale: float
    offset: float

    def apply(self, values):
        return values * self.scale + self.offset

    def inverse(self, values):
        return (values - self.offset) / self.scale


def get_value_range_transformation(
    from_min: float, from_max: float, to_min: float, to_max: float
) -> RangeTransform:
    """Linear map sending [from_min, from_max] onto [to_min, to_max]."""
    if from_min >= from_max:
        raise InvalidRange(f"from range [{from_min}, {from_max}] is empty")
    if to_min >= to_max:
        raise InvalidRange(f"to range [{to_min}, {to_max}] is empty")

    scale = (to_max - to_min) / (from_max - from_min)
    offset = to_min - from_min * scale
    return RangeTransform(scale=scale, offset=offset)


def byte_range_transform(range_min: float, range_max: float) -> RangeTransform:
    """[0, 255] -> [range_min, range_max]; scale = (max - min) / 255, offset = min."""
    return get_value_range_transformation(BYTE_MIN, BYTE_MAX, range_min, range_max)


def apply_to_bytes(pixels: np.ndarray, transform: RangeTransform) -> np.ndarray:
    """Map a uint8 buffer to a fresh float32 buffer."""
    out = pixels.astype(np.float64)
    return transform.apply(out).astype(np.float32)


def tensor_to_image(tensor: np.ndarray, range_min: float, range_max: float) -> np.ndarray:
    """
    Inverse of the forward mapping, rounded and saturated to uint8.
    Used to diff a tensor against an 8-bit reference image.
    """
    transform = byte_range_transform(range_min, range_max)
    restored = transform.inverse(tensor.astype(np.float64))
    return np.clip(np.rint(restored), BYTE_MIN, BYTE_MAX).astype(np.uint8)
