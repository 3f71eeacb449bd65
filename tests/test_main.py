import cv2
import numpy as np

from conftest import make_rgb
from roi_tensor.main import parse_args, run


def _write_png(tmp_path, rgb):
    path = tmp_path / "input.png"
    assert cv2.imwrite(str(path), cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR))
    return path


def test_cli_writes_tensor_and_preview(tmp_path, capsys):
    rgb = make_rgb()
    image = _write_png(tmp_path, rgb)
    out = tmp_path / "out"

    cfg = parse_args([
        "--image", str(image), "--out", str(out),
        "--center", "0.65", "0.4", "--size", "0.5", "0.5",
        "--rotation", "90", "--tensor-size", "64", "32",
        "--keep-aspect", "--range", "-1", "1",
    ])
    assert cfg.tensor_size == (64, 32)
    assert cfg.keep_aspect_ratio

    assert run(cfg) == 0

    tensor = np.load(out / "tensor.npy")
    assert tensor.shape == (32, 64, 3)
    assert tensor.dtype == np.float32
    assert tensor.min() >= -1.0 and tensor.max() <= 1.0

    preview = cv2.imread(str(out / "preview.png"))
    assert preview.shape == (32, 64, 3)
    assert "Tensor: (32, 64, 3)" in capsys.readouterr().out


def test_cli_full_image_round_trips_pixels(tmp_path):
    rgb = make_rgb(40, 30)
    image = _write_png(tmp_path, rgb)
    out = tmp_path / "out"

    assert run(parse_args(["--image", str(image), "--out", str(out), "--tensor-size", "40", "30"])) == 0

    preview = cv2.cvtColor(cv2.imread(str(out / "preview.png")), cv2.COLOR_BGR2RGB)
    assert np.array_equal(preview, rgb)


def test_cli_reports_validation_errors(tmp_path):
    image = _write_png(tmp_path, make_rgb(16, 16))
    cfg = parse_args(["--image", str(image), "--out", str(tmp_path / "out"), "--range", "1", "0"])
    assert run(cfg) == 2
    assert not (tmp_path / "out" / "tensor.npy").exists()


def test_cli_reports_undecodable_image(tmp_path):
    image = tmp_path / "broken.png"
    image.write_bytes(b"not an image")
    cfg = parse_args(["--image", str(image), "--out", str(tmp_path / "out")])
    assert run(cfg) == 2
    assert not (tmp_path / "out" / "tensor.npy").exists()


def test_cli_reports_sixteen_bit_image(tmp_path):
    path = tmp_path / "deep.png"
    assert cv2.imwrite(str(path), np.full((8, 8, 3), 40000, dtype=np.uint16))
    cfg = parse_args(["--image", str(path), "--out", str(tmp_path / "out")])
    assert run(cfg) == 2
    assert not (tmp_path / "out" / "tensor.npy").exists()
