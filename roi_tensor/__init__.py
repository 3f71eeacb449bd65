"""Rotated region-of-interest to float tensor conversion."""

from roi_tensor.pipeline.errors import (
    DegenerateRegion,
    ImageToTensorError,
    InvalidOutputDimensions,
    InvalidRange,
    InvalidSourceImage,
    UnsupportedChannelCount,
)
from roi_tensor.pipeline.models import (
    BorderMode,
    Corners,
    LetterboxPadding,
    NormalizedRegion,
    OutputSpec,
    SourceImage,
    TensorResult,
)
from roi_tensor.pipeline.tensorize import image_to_tensor, to_tensor
from roi_tensor.pipeline.value_range import RangeTransform, byte_range_transform, tensor_to_image

__all__ = [
    "BorderMode",
    "Corners",
    "DegenerateRegion",
    "ImageToTensorError",
    "InvalidOutputDimensions",
    "InvalidRange",
    "InvalidSourceImage",
    "LetterboxPadding",
    "NormalizedRegion",
    "OutputSpec",
    "RangeTransform",
    "SourceImage",
    "TensorResult",
    "UnsupportedChannelCount",
    "byte_range_transform",
    "image_to_tensor",
    "tensor_to_image",
    "to_tensor",
]
