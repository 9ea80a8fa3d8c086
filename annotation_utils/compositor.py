import numpy as np
import cv2

from gt_utils.config import (
    CURSOR_COLOR, REFERENCE_COLOR, REFERENCE_THICKNESS, TEXT_COLOR,
)


def blend_mask(image, mask, blend):
    """image * 1.0 + mask * blend / 100, saturated to uint8."""
    mask_rgb = cv2.cvtColor(mask, cv2.COLOR_GRAY2RGB) if mask.ndim == 2 else mask
    return cv2.addWeighted(image, 1.0, mask_rgb, blend / 100.0, 0.0)


def draw_reference(img, rects, color=REFERENCE_COLOR, thickness=REFERENCE_THICKNESS):
    for x, y, w, h in rects:
        cv2.rectangle(img, (int(x), int(y)), (int(x + w), int(y + h)), color, thickness)
    return img


def draw_cursor(frame, cursor, half_size, color=CURSOR_COLOR):
    cx, cy = int(cursor[0]), int(cursor[1])
    s = int(round(half_size))
    cv2.rectangle(frame, (cx - s - 1, cy - s - 1), (cx + s + 1, cy + s + 1), color, 1)
    return frame


def render(
    image, mask, viewport, blend, reference_rects=(), cursor=(0, 0),
    marker_size=1, display_size=None, show_reference=True, filename=None,
):
    """
    Build the frame shown to the operator.

    The blend of image and mask (with reference rectangles drawn on it) is
    cropped to the viewport and magnified to ``display_size`` (defaults to the
    image size). A square around the cursor shows how large a mark would be at
    the current zoom: its half-size is ``marker_size * display_width /
    viewport.width``, which is ``image.width / viewport.width`` for the default
    display size and stays correct when the display is scaled. Inputs are not
    modified.
    """
    H, W = image.shape[:2]
    if display_size is None:
        display_size = (W, H)
    dw, dh = int(display_size[0]), int(display_size[1])

    blended = blend_mask(image, mask, blend)
    if show_reference and reference_rects:
        draw_reference(blended, reference_rects)

    x, y, w, h = viewport.rect
    frame = cv2.resize(
        np.ascontiguousarray(blended[y:y + h, x:x + w]), (dw, dh),
        interpolation=cv2.INTER_LINEAR,
    )

    draw_cursor(frame, cursor, marker_size * viewport.zoom_factor(dw))

    if filename:
        cv2.putText(frame, str(filename), (10, 30), cv2.FONT_HERSHEY_SIMPLEX,
                    0.8, TEXT_COLOR, 2, cv2.LINE_AA)
    return frame
