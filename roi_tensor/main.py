# main.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from roi_tensor.config import AppConfig
from roi_tensor.pipeline.errors import ImageToTensorError
from roi_tensor.pipeline.image_io import read_image, write_preview
from roi_tensor.pipeline.models import BorderMode, NormalizedRegion, OutputSpec
from roi_tensor.pipeline.tensorize import image_to_tensor
from roi_tensor.pipeline.value_range import tensor_to_image

log = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def run(cfg: AppConfig) -> int:
    setup_logging(cfg.logging_level)

    # Ensure output dir exists
    cfg.output_dir.mkdir(parents=True, exist_ok=True)

    region = NormalizedRegion.from_degrees(
        cfg.x_center, cfg.y_center, cfg.roi_width, cfg.roi_height, cfg.rotation_deg
    )
    spec = OutputSpec(
        tensor_width=cfg.tensor_size[0],
        tensor_height=cfg.tensor_size[1],
        keep_aspect_ratio=cfg.keep_aspect_ratio,
        range_min=cfg.range_min,
        range_max=cfg.range_max,
        border_mode=cfg.border_mode,
    )

    try:
        image = read_image(cfg.image_path)
        result = image_to_tensor(image, region, spec)
    except (ImageToTensorError, RuntimeError) as e:
        log.error("%s: %s", type(e).__name__, e)
        return 2

    tensor_path = cfg.output_dir / "tensor.npy"
    np.save(tensor_path, result.tensor)

    preview = tensor_to_image(result.tensor, spec.range_min, spec.range_max)
    write_preview(cfg.output_dir / "preview.png", preview)

    print(f"Source: {image.width}x{image.height}x{image.channels} ({cfg.image_path})")
    print(f"Tensor: {result.tensor.shape} {result.tensor.dtype} "
          f"min={result.tensor.min():.4f} max={result.tensor.max():.4f}")
    print(f"Letterbox padding (l, t, r, b): {result.letterbox_padding.as_tuple()}")
    print(f"Saved: {tensor_path}")
    return 0


def parse_args(argv: list[str] | None = None) -> AppConfig:
    p = argparse.ArgumentParser(description="Crop a rotated ROI from an image into a float tensor")
    p.add_argument("--image", required=True, help="Path to input image file")
    p.add_argument("--out", default="out", help="Output directory")
    p.add_argument("--center", type=float, nargs=2, default=(0.5, 0.5), metavar=("X", "Y"),
                   help="ROI center as fractions of image width/height")
    p.add_argument("--size", type=float, nargs=2, default=(1.0, 1.0), metavar=("W", "H"),
                   help="ROI size as fractions of image width/height")
    p.add_argument("--rotation", type=float, default=0.0, help="ROI rotation in degrees")
    p.add_argument("--tensor-size", type=int, nargs=2, default=(256, 256), metavar=("W", "H"))
    p.add_argument("--keep-aspect", action="store_true", help="Pad the ROI to the tensor aspect ratio")
    p.add_argument("--range", type=float, nargs=2, default=(0.0, 1.0), metavar=("MIN", "MAX"),
                   dest="value_range")
    p.add_argument("--border", choices=[m.value for m in BorderMode], default=BorderMode.ZERO.value)
    p.add_argument("--log-level", default="INFO")
    args = p.parse_args(argv)

    cfg = AppConfig(
        image_path=Path(args.image),
        output_dir=Path(args.out),
        x_center=args.center[0],
        y_center=args.center[1],
        roi_width=args.size[0],
        roi_height=args.size[1],
        rotation_deg=args.rotation,
        tensor_size=(args.tensor_size[0], args.tensor_size[1]),
        keep_aspect_ratio=args.keep_aspect,
        range_min=args.value_range[0],
        range_max=args.value_range[1],
        border_mode=BorderMode(args.border),
        logging_level=args.log_level,
    )
    return cfg


def main() -> None:
    sys.exit(run(parse_args()))


if __name__ == "__main__":
    main()
