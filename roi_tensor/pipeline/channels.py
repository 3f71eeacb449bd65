# pipeline/channels.py
from __future__ import annotations

import numpy as np

from .errors import UnsupportedChannelCount

SUPPORTED_CHANNELS = (3, 4)
OUTPUT_CHANNELS = 3


def check_channels(channels: int) -> None:
    if channels not in SUPPORTED_CHANNELS:
        raise UnsupportedChannelCount(
            f"expected 3 or 4 channels, got {channels}"
        )


def to_rgb(pixels: np.ndarray) -> np.ndarray:
    """
    Drop the 4th channel of an HxWx4 image; HxWx3 passes through untouched.
    Returns a view, never a copy.
    """
    channels = pixels.shape[2] if pixels.ndim == 3 else 1
    check_channels(channels)
    if channels == OUTPUT_CHANNELS:
        return pixels
    return pixels[:, :, :OUTPUT_CHANNELS]
