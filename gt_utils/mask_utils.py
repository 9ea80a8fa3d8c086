import logging
from pathlib import Path

import numpy as np
import cv2
from PIL import Image, UnidentifiedImageError

from gt_utils.config import EXTS, MASK_SUFFIX, UNMARKED

logger = logging.getLogger(__name__)

# =========================
# Image listing
# =========================

def list_images(image_dir, exts=EXTS):
    image_dir = Path(image_dir)
    files = [
        p for p in image_dir.iterdir()
        if p.is_file() and not p.name.startswith(".") and p.suffix.lower() in exts
    ]
    return sorted(files, key=lambda p: p.name)


def image_identity(path):
    """``.../000123.png`` -> ``000123``, the key used by the ledger and labels."""
    return Path(path).stem


def mask_path(output_dir, image_path):
    return Path(output_dir) / f"{Path(image_path).stem}{MASK_SUFFIX}"

# =========================
# Loading
# =========================

def load_image(path):
    """RGB uint8 array, or None when the file cannot be decoded."""
    try:
        with Image.open(path) as img:
            return np.array(img.convert("RGB"))
    except (UnidentifiedImageError, OSError) as e:
        logger.warning("Could not load image %s: %s", path, e)
        return None


def load_mask(path, shape_hw):
    """
    Load the stored mask for an image, or an all-unmarked one if there is none.

    Raises ValueError when a stored mask exists but cannot be read or does not
    match the image size, so that it is never silently overwritten.
    """
    path = Path(path)
    H, W = shape_hw[:2]
    if not path.exists():
        return np.full((H, W), UNMARKED, np.uint8)

    mask = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
    if mask is None:
        raise ValueError(f"Could not read mask {path}")
    if mask.shape != (H, W):
        raise ValueError(f"Mask {path} has size {mask.shape[1]}x{mask.shape[0]}, expected {W}x{H}")
    logger.info("Loaded GT: %s", path)
    return mask

# =========================
# Saving
# =========================

def to_gray(mask):
    if mask.ndim == 3:
        return cv2.cvtColor(mask, cv2.COLOR_RGB2GRAY)
    return mask


def save_mask(mask, path):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(path), to_gray(mask)):
        raise OSError(f"Could not write mask {path}")
    logger.info("Saved mask -> %s", path)
    return path
