import math

import cv2
import numpy as np
import pytest

IMG_W = 192
IMG_H = 144


def make_rgb(width: int = IMG_W, height: int = IMG_H) -> np.ndarray:
    """
    Smooth synthetic RGB image that fades to black at its borders, so stepping
    off the edge into zero fill stays a small jump.
    """
    y, x = np.mgrid[0:height, 0:width].astype(np.float64)
    wx = np.sin(math.pi * (x + 0.5) / width)
    wy = np.sin(math.pi * (y + 0.5) / height)
    window = wx * wy

    r = 0.5 + 0.5 * np.sin(x / 9.0)
    g = 0.5 + 0.5 * np.cos(y / 7.0)
    b = 0.5 + 0.5 * np.sin((x + 2.0 * y) / 13.0)
    rgb = np.stack([r, g, b], axis=-1) * window[..., np.newaxis] * 255.0
    return np.rint(rgb).astype(np.uint8)


def make_ramp(width: int = IMG_W, height: int = IMG_H) -> np.ndarray:
    """Slope-one gradients: red follows x, green follows y."""
    y, x = np.mgrid[0:height, 0:width]
    rgb = np.stack([x, y, (x + y) // 2], axis=-1)
    return rgb.astype(np.uint8)


def reference_warp(rgb, region, tensor_w, tensor_h, keep_aspect, border=cv2.BORDER_CONSTANT):
    """Independent reference: cv2.boxPoints + perspective warp of the padded roi."""
    h, w = rgb.shape[:2]
    cx, cy = region.x_center * w, region.y_center * h
    rw, rh = region.width * w, region.height * h

    if keep_aspect:
        target = tensor_h / tensor_w
        if target > rh / rw:
            rh = rw * target
        else:
            rw = rh / target

    box = cv2.boxPoints(((cx, cy), (rw, rh), math.degrees(region.rotation)))
    # boxPoints order: bottom-left, top-left, top-right, bottom-right
    dst = np.array(
        [[0, tensor_h], [0, 0], [tensor_w, 0], [tensor_w, tensor_h]], dtype=np.float32
    )
    projection = cv2.getPerspectiveTransform(box.astype(np.float32), dst)
    return cv2.warpPerspective(
        np.ascontiguousarray(rgb[:, :, :3]),
        projection,
        (tensor_w, tensor_h),
        flags=cv2.INTER_LINEAR,
        borderMode=border,
        borderValue=(0, 0, 0),
    )


def max_abs_diff(a: np.ndarray, b: np.ndarray) -> int:
    return int(np.abs(a.astype(np.int32) - b.astype(np.int32)).max())


@pytest.fixture
def rgb_image() -> np.ndarray:
    return make_rgb()


@pytest.fixture
def rgba_image(rgb_image) -> np.ndarray:
    alpha = np.full(rgb_image.shape[:2] + (1,), 77, dtype=np.uint8)
    return np.concatenate([rgb_image, alpha], axis=-1)


@pytest.fixture
def ramp_image() -> np.ndarray:
    return make_ramp()
