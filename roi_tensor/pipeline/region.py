# pipeline/region.py
from __future__ import annotations

import logging
import math

from .errors import DegenerateRegion, InvalidOutputDimensions
from .models import Corners, LetterboxPadding, NormalizedRegion, OutputSpec, RotatedRect

log = logging.getLogger(__name__)

# extents at or below this many pixels are treated as empty
MIN_EXTENT_PX = 1e-6


def check_region(region: NormalizedRegion) -> None:
    if not (region.width > 0.0 and region.height > 0.0):
        raise DegenerateRegion(
            f"region size must be positive, got {region.width}x{region.height}"
        )


def check_output_dims(spec: OutputSpec) -> None:
    if spec.tensor_width <= 0 or spec.tensor_height <= 0:
        raise InvalidOutputDimensions(
            f"tensor size must be positive, got {spec.tensor_width}x{spec.tensor_height}"
        )


def to_pixel_rect(region: NormalizedRegion, img_w: int, img_h: int) -> RotatedRect:
    """Scale center and size by image width/height independently."""
    return RotatedRect(
        center_x=region.x_center * img_w,
        center_y=region.y_center * img_h,
        width=region.width * img_w,
        height=region.height * img_h,
        rotation=region.rotation,
    )


def pad_to_aspect(
    rect: RotatedRect, tensor_w: int, tensor_h: int
) -> tuple[RotatedRect, LetterboxPadding]:
    """
    Grow `rect` about its center until width/height matches tensor_w/tensor_h.
    Only one side grows; nothing is ever cropped.
    """
    tensor_aspect = tensor_h / tensor_w
    roi_aspect = rect.height / rect.width

    if tensor_aspect > roi_aspect:
        new_w = rect.width
        new_h = rect.width * tensor_aspect
        pad = (1.0 - roi_aspect / tensor_aspect) / 2.0
        padding = LetterboxPadding(left=0.0, top=pad, right=0.0, bottom=pad)
    else:
        new_w = rect.height / tensor_aspect
        new_h = rect.height
        pad = (1.0 - tensor_aspect / roi_aspect) / 2.0
        padding = LetterboxPadding(left=pad, top=0.0, right=pad, bottom=0.0)

    padded = RotatedRect(
        center_x=rect.center_x,
        center_y=rect.center_y,
        width=max(new_w, rect.width),
        height=max(new_h, rect.height),
        rotation=rect.rotation,
    )
    return padded, padding


def rect_corners(rect: RotatedRect) -> Corners:
    """
    Corners ordered TL, TR, BR, BL. Offsets from the center are rotated with
    x' = dx*cos - dy*sin, y' = dx*sin + dy*cos (image axes, y down), the same
    convention as cv2.boxPoints with the angle in degrees.
    """
    c = math.cos(rect.rotation)
    s = math.sin(rect.rotation)
    hw = rect.width / 2.0
    hh = rect.height / 2.0

    def rotate(dx: float, dy: float) -> tuple[float, float]:
        return (rect.center_x + dx * c - dy * s, rect.center_y + dx * s + dy * c)

    return Corners(
        top_left=rotate(-hw, -hh),
        top_right=rotate(hw, -hh),
        bottom_right=rotate(hw, hh),
        bottom_left=rotate(-hw, hh),
    )


def resolve_rect(
    region: NormalizedRegion, img_w: int, img_h: int, spec: OutputSpec
) -> tuple[RotatedRect, LetterboxPadding]:
    check_region(region)
    check_output_dims(spec)

    rect = to_pixel_rect(region, img_w, img_h)
    padding = LetterboxPadding()
    if spec.keep_aspect_ratio:
        rect, padding = pad_to_aspect(rect, spec.tensor_width, spec.tensor_height)

    if rect.width <= MIN_EXTENT_PX or rect.height <= MIN_EXTENT_PX:
        raise DegenerateRegion(
            f"resolved region is {rect.width:.3g}x{rect.height:.3g} px"
        )

    log.debug(
        "roi center=(%.2f, %.2f) size=%.2fx%.2f rot=%.4f pad=%s",
        rect.center_x, rect.center_y, rect.width, rect.height, rect.rotation, padding.as_tuple(),
    )
    return rect, padding


def resolve_corners(
    region: NormalizedRegion, img_w: int, img_h: int, spec: OutputSpec
) -> Corners:
    """Normalized region + output spec -> sampling quadrilateral in source pixels."""
    rect, _ = resolve_rect(region, img_w, img_h, spec)
    return rect_corners(rect)
