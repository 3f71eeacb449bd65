# config.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path

from roi_tensor.pipeline.models import BorderMode


@dataclass(frozen=True)
class AppConfig:
    # IO
    image_path: Path
    output_dir: Path

    # Region of interest, fractions of image size
    x_center: float = 0.5
    y_center: float = 0.5
    roi_width: float = 1.0
    roi_height: float = 1.0
    rotation_deg: float = 0.0  # applied around the roi center

    # Output tensor
    tensor_size: tuple[int, int] = (256, 256)  # width, height
    keep_aspect_ratio: bool = False
    range_min: float = 0.0
    range_max: float = 1.0
    border_mode: BorderMode = BorderMode.ZERO

    # Logging
    logging_level: str = "INFO"
