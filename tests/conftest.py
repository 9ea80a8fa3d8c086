from pathlib import Path

import numpy as np
import pytest
from PIL import Image


def write_image(path, size=(20, 20), value=0):
    W, H = size
    Image.fromarray(np.full((H, W, 3), value, np.uint8)).save(path)
    return Path(path)


@pytest.fixture
def image_dir(tmp_path):
    """Four 20x20 images named like the dataset: 000122.png .. 000125.png."""
    d = tmp_path / "images"
    d.mkdir()
    for i, name in enumerate(["000122", "000123", "000124", "000125"]):
        write_image(d / f"{name}.png", value=40 * i)
    return d


@pytest.fixture
def output_dir(tmp_path):
    d = tmp_path / "GT"
    d.mkdir()
    return d
