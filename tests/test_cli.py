"""Tests for the poisson-blend command line."""

import numpy as np
import pytest
from imageio.v2 import imread, imwrite

from main import build_parser, main


@pytest.fixture
def inputs(tmp_path):
    rng = np.random.default_rng(4)
    target = rng.integers(0, 256, size=(20, 24, 3), dtype=np.uint8)
    source = rng.integers(0, 256, size=(6, 8, 3), dtype=np.uint8)
    mask = np.zeros((6, 8), dtype=np.uint8)
    mask[1:5, 2:7] = 255

    paths = {name: tmp_path / f"{name}.png" for name in ("target", "source", "mask")}
    imwrite(paths["target"], target)
    imwrite(paths["source"], source)
    imwrite(paths["mask"], mask)
    paths["output"] = tmp_path / "out.png"
    return paths


def _argv(paths, mx, my, *extra):
    return [
        "-target", str(paths["target"]),
        "-source", str(paths["source"]),
        "-mask", str(paths["mask"]),
        "-output", str(paths["output"]),
        "-mx", str(mx),
        "-my", str(my),
        *extra,
    ]


def test_blend_writes_output(inputs):
    assert main(_argv(inputs, 5, 4)) == 0

    out = imread(inputs["output"])
    target = imread(inputs["target"])
    assert out.shape == (20, 24, 4)
    assert np.all(out[:, :, 3] == 255)
    # far corner is outside the mask and keeps the target value, up to truncation
    assert np.abs(out[19, 23, :3].astype(int) - target[19, 23].astype(int)).max() <= 1


def test_gamma_flag_is_accepted(inputs):
    assert main(_argv(inputs, 5, 4, "-gamma", "1.0")) == 0
    out = imread(inputs["output"])
    target = imread(inputs["target"])
    assert np.abs(out[0, 0, :3].astype(int) - target[0, 0].astype(int)).max() <= 1


def test_invalid_placement_exits_with_error(inputs, caplog):
    assert main(_argv(inputs, 0, 4)) == 1
    assert "InvalidPlacement" in caplog.text
    assert not inputs["output"].exists()


def test_missing_input_file_exits_with_error(inputs):
    inputs["source"] = inputs["source"].with_name("missing.png")
    assert main(_argv(inputs, 5, 4)) == 1


def test_missing_argument_prints_usage(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["-target", "t.png"])
    assert excinfo.value.code == 2
    assert "usage: poisson-blend" in capsys.readouterr().err


def test_rejects_non_positive_gamma(inputs):
    assert main(_argv(inputs, 5, 4, "-gamma", "0")) == 2


def test_parser_defaults():
    args = build_parser().parse_args(
        ["-target", "t", "-source", "s", "-mask", "m", "-output", "o", "-mx", "1", "-my", "2"]
    )
    assert args.gamma == 2.2
    assert (args.mx, args.my) == (1, 2)
