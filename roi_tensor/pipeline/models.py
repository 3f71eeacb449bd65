# pipeline/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Union
import math

import numpy as np

from .errors import InvalidSourceImage

Point = tuple[float, float]
Buffer = Union[bytes, bytearray, memoryview, np.ndarray]


@dataclass(frozen=True)
class SourceImage:
    """Caller-owned 8-bit image, row-major, `stride` bytes per row."""
    width: int
    height: int
    channels: int
    data: Buffer = field(repr=False)
    stride: int = 0  # 0 means tightly packed

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidSourceImage(f"image size must be positive, got {self.width}x{self.height}")
        if self.channels <= 0:
            raise InvalidSourceImage(f"channel count must be positive, got {self.channels}")
        if self.stride == 0:
            object.__setattr__(self, "stride", self.width * self.channels)
        if self.stride < self.width * self.channels:
            raise InvalidSourceImage(
                f"stride {self.stride} is smaller than width*channels ({self.width * self.channels})"
            )
        if isinstance(self.data, np.ndarray):
            # arrays carry their own layout (see from_array)
            if self.data.dtype != np.uint8:
                raise InvalidSourceImage(f"expected uint8 pixels, got {self.data.dtype}")
            if self.data.ndim not in (2, 3):
                raise InvalidSourceImage(f"expected HxW or HxWxC array, got shape {self.data.shape}")
            if self.data.shape[:2] != (self.height, self.width):
                raise InvalidSourceImage(
                    f"array shape {self.data.shape} does not match {self.width}x{self.height}"
                )
            array_channels = self.data.shape[2] if self.data.ndim == 3 else 1
            if array_channels != self.channels:
                raise InvalidSourceImage(
                    f"array has {array_channels} channels, declared {self.channels}"
                )
            return
        nbytes = memoryview(self.data).nbytes
        if nbytes < self.stride * self.height:
            raise InvalidSourceImage(
                f"buffer holds {nbytes} bytes, need at least {self.stride * self.height}"
            )

    @classmethod
    def from_array(cls, image: np.ndarray) -> "SourceImage":
        """Wrap an HxW or HxWxC uint8 array without copying (unless rows are not packed)."""
        if image.dtype != np.uint8:
            raise InvalidSourceImage(f"expected uint8 pixels, got {image.dtype}")
        if image.ndim == 2:
            image = image[:, :, np.newaxis]
        if image.ndim != 3:
            raise InvalidSourceImage(f"expected HxW or HxWxC array, got shape {image.shape}")

        h, w, c = image.shape
        if image.strides[2] != 1 or image.strides[1] != c or image.strides[0] < w * c:
            image = np.ascontiguousarray(image)
        return cls(width=w, height=h, channels=c, data=image, stride=image.strides[0])

    def array(self) -> np.ndarray:
        """HxWxC view of the pixel buffer; the engine only reads it."""
        if isinstance(self.data, np.ndarray):
            view = self.data.view()
            if view.ndim == 2:
                view = view[:, :, np.newaxis]
        else:
            view = np.ndarray(
                shape=(self.height, self.width, self.channels),
                dtype=np.uint8,
                buffer=self.data,
                strides=(self.stride, self.channels, 1),
            )
        return view


@dataclass(frozen=True)
class NormalizedRegion:
    """Region in fractions of image width/height; rotation in radians around the center."""
    x_center: float
    y_center: float
    width: float
    height: float
    rotation: float = 0.0

    @classmethod
    def full_image(cls) -> "NormalizedRegion":
        return cls(x_center=0.5, y_center=0.5, width=1.0, height=1.0, rotation=0.0)

    @classmethod
    def from_degrees(cls, x_center: float, y_center: float, width: float, height: float,
                     rotation_deg: float = 0.0) -> "NormalizedRegion":
        return cls(x_center, y_center, width, height, math.radians(rotation_deg))


class BorderMode(str, Enum):
    ZERO = "zero"
    REPLICATE = "replicate"


@dataclass(frozen=True)
class OutputSpec:
    tensor_width: int
    tensor_height: int
    keep_aspect_ratio: bool = False
    range_min: float = 0.0
    range_max: float = 1.0
    border_mode: BorderMode = BorderMode.ZERO


@dataclass(frozen=True)
class RotatedRect:
    """Region resolved to source pixel units."""
    center_x: float
    center_y: float
    width: float
    height: float
    rotation: float


@dataclass(frozen=True)
class Corners:
    top_left: Point
    top_right: Point
    bottom_right: Point
    bottom_left: Point

    def as_array(self) -> np.ndarray:
        return np.array(
            [self.top_left, self.top_right, self.bottom_right, self.bottom_left],
            dtype=np.float32,
        )

    @property
    def center(self) -> Point:
        pts = np.array([self.top_left, self.top_right, self.bottom_right, self.bottom_left])
        cx, cy = pts.mean(axis=0)
        return float(cx), float(cy)


@dataclass(frozen=True)
class LetterboxPadding:
    """Fractions of the output tensor filled by aspect padding on each side."""
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.left, self.top, self.right, self.bottom)


@dataclass(frozen=True)
class TensorResult:
    tensor: np.ndarray  # float32, (tensor_height, tensor_width, 3)
    letterbox_padding: LetterboxPadding
    matrix: np.ndarray  # float32 4x4, normalized tensor coords -> normalized image coords
