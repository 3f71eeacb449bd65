# pipeline/tensorize.py
from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .channels import check_channels
from .models import NormalizedRegion, OutputSpec, SourceImage, TensorResult
from .region import check_output_dims, check_region, rect_corners, resolve_rect
from .sampler import affine_from_corners, sample
from .value_range import apply_to_bytes, byte_range_transform

log = logging.getLogger(__name__)


def validate(image: SourceImage, region: NormalizedRegion, spec: OutputSpec) -> None:
    """Every check that can fail, run before any pixel is touched."""
    byte_range_transform(spec.range_min, spec.range_max)
    check_region(region)
    check_output_dims(spec)
    check_channels(image.channels)


def normalized_matrix(
    affine: np.ndarray, tensor_w: int, tensor_h: int, img_w: int, img_h: int
) -> np.ndarray:
    """
    Lift the pixel-space destination->source affine into a 4x4 row-major matrix
    over normalized coordinates: tensor [0,1]^2 -> image [0,1]^2.
    """
    a = np.vstack([affine, [0.0, 0.0, 1.0]])
    a = np.diag([1.0 / img_w, 1.0 / img_h, 1.0]) @ a @ np.diag([float(tensor_w), float(tensor_h), 1.0])

    m = np.eye(4, dtype=np.float64)
    m[0, 0], m[0, 1], m[0, 3] = a[0]
    m[1, 0], m[1, 1], m[1, 3] = a[1]
    return m.astype(np.float32)


def image_to_tensor(
    image: SourceImage,
    region: Optional[NormalizedRegion],
    spec: OutputSpec,
) -> TensorResult:
    """
    Crop the (rotated, scaled) region out of `image` and resample it into a
    float32 (tensor_height, tensor_width, 3) tensor in [range_min, range_max].

    With region=None the whole image is used. Raises an ImageToTensorError
    subclass on bad input; no tensor is produced in that case.
    """
    if region is None:
        region = NormalizedRegion.full_image()

    validate(image, region, spec)
    transform = byte_range_transform(spec.range_min, spec.range_max)

    rect, padding = resolve_rect(region, image.width, image.height, spec)
    corners = rect_corners(rect)

    sampled = sample(
        image.array(), corners, spec.tensor_width, spec.tensor_height, spec.border_mode
    )
    tensor = apply_to_bytes(sampled, transform)

    affine = affine_from_corners(corners, spec.tensor_width, spec.tensor_height)
    matrix = normalized_matrix(
        affine, spec.tensor_width, spec.tensor_height, image.width, image.height
    )

    log.debug(
        "tensorized %dx%dx%d -> %dx%dx3 range=[%g, %g]",
        image.width, image.height, image.channels,
        spec.tensor_width, spec.tensor_height, spec.range_min, spec.range_max,
    )
    return TensorResult(tensor=tensor, letterbox_padding=padding, matrix=matrix)


def to_tensor(image: SourceImage, region: NormalizedRegion, spec: OutputSpec) -> np.ndarray:
    """Tensor only; see image_to_tensor for padding and matrix."""
    return image_to_tensor(image, region, spec).tensor
