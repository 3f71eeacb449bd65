# pipeline/errors.py
from __future__ import annotations


class ImageToTensorError(ValueError):
    """Base class for every validation failure raised before sampling starts."""


class InvalidRange(ImageToTensorError):
    pass


class DegenerateRegion(ImageToTensorError):
    pass


class UnsupportedChannelCount(ImageToTensorError):
    pass


class InvalidOutputDimensions(ImageToTensorError):
    pass


class InvalidSourceImage(ImageToTensorError):
    """Buffer too small for the declared width/height/stride."""
