import math

import numpy as np
import cv2

from gt_utils.config import MARKED, UNMARKED


def new_mask(shape_hw):
    H, W = shape_hw[:2]
    return np.full((H, W), UNMARKED, np.uint8)


def mark(mask, point, radius, set_mark=True):
    """Stamp a filled square of half-width ``radius`` centered on a source point.

    The square spans ``point - radius`` to ``point + radius`` inclusive and is
    clipped to the mask. Pixels are overwritten, never blended, so repeated
    marks at the same place leave the mask unchanged.
    """
    x, y = math.floor(point[0]), math.floor(point[1])
    r = int(radius)
    color = MARKED if set_mark else UNMARKED
    cv2.rectangle(mask, (x - r, y - r), (x + r, y + r), color, cv2.FILLED)
    return mask


def mark_at_cursor(mask, viewport, cursor, display_size, radius, set_mark=True):
    return mark(mask, viewport.to_source(cursor, display_size), radius, set_mark)
