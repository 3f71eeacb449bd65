# pipeline/image_io.py
from __future__ import annotations

import cv2
import numpy as np
from pathlib import Path

from .models import SourceImage


def read_image(path: Path) -> SourceImage:
    """Decode an image file into an RGB or RGBA SourceImage."""
    bgr = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if bgr is None:
        raise RuntimeError(f"Could not read image: {path}")

    if bgr.ndim == 2:
        rgb = cv2.cvtColor(bgr, cv2.COLOR_GRAY2RGB)
    elif bgr.shape[2] == 4:
        rgb = cv2.cvtColor(bgr, cv2.COLOR_BGRA2RGBA)
    else:
        rgb = cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)
    return SourceImage.from_array(rgb)


def write_preview(path: Path, rgb: np.ndarray) -> None:
    if not cv2.imwrite(str(path), cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)):
        raise RuntimeError(f"Could not write image: {path}")
