# pipeline/sampler.py
from __future__ import annotations

import cv2
import numpy as np

from .channels import to_rgb
from .models import BorderMode, Corners

_BORDERS = {
    BorderMode.ZERO: cv2.BORDER_CONSTANT,
    BorderMode.REPLICATE: cv2.BORDER_REPLICATE,
}


def destination_corners(width: int, height: int) -> np.ndarray:
    """Tensor corners in TL, TR, BR, BL order."""
    return np.array(
        [[0.0, 0.0], [width, 0.0], [width, height], [0.0, height]],
        dtype=np.float32,
    )


def affine_from_corners(corners: Corners, width: int, height: int) -> np.ndarray:
    """
    2x3 matrix taking destination pixel (x, y) to source pixel coordinates.

    Fitted exactly on TL, TR and BL. A rotated rectangle is a parallelogram,
    so BR lands on the fourth corner as well.
    """
    src = corners.as_array()[[0, 1, 3]]
    dst = destination_corners(width, height)[[0, 1, 3]]
    return cv2.getAffineTransform(dst, src)


def sample(
    pixels: np.ndarray,
    corners: Corners,
    width: int,
    height: int,
    border_mode: BorderMode = BorderMode.ZERO,
) -> np.ndarray:
    """
    Bilinear resample of the quadrilateral `corners` into a (height, width, 3) uint8 grid.
    Outside the source, pixels are zero (ZERO) or edge-clamped (REPLICATE).
    """
    rgb = to_rgb(pixels)
    if rgb.strides[1] != rgb.shape[2]:
        # cv2 cannot address a channel-subset view directly
        rgb = np.ascontiguousarray(rgb)

    m = affine_from_corners(corners, width, height)
    return cv2.warpAffine(
        rgb,
        m,
        (width, height),
        flags=cv2.INTER_LINEAR | cv2.WARP_INVERSE_MAP,
        borderMode=_BORDERS[BorderMode(border_mode)],
        borderValue=(0, 0, 0),
    )
