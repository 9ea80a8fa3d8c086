# annotation_utils/state.py
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple
import numpy as np

from gt_utils.config import (
    BLEND_DEFAULT, BLEND_RANGE, MARKER_SIZE_DEFAULT, MARKER_SIZE_RANGE,
)


def clamp(v, lo, hi):
    return max(lo, min(hi, v))


class CursorState:
    def __init__(self, marker_size: int = MARKER_SIZE_DEFAULT):
        self.position: Tuple[int, int] = (0, 0)
        self.marker_size: int = clamp(int(marker_size), *MARKER_SIZE_RANGE)

    def set_marker_size(self, value):
        self.marker_size = clamp(int(value), *MARKER_SIZE_RANGE)
        return self.marker_size


class DisplayState:
    def __init__(self, blend: int = BLEND_DEFAULT):
        self.blend: int = clamp(int(blend), *BLEND_RANGE)
        self.show_reference: bool = True
        self.show_filename: bool = False

    def set_blend(self, value):
        self.blend = clamp(int(value), *BLEND_RANGE)
        return self.blend


class ImageState:
    def __init__(self):
        self.index: int = -1
        self.path: Optional[Path] = None
        self.identity: Optional[str] = None
        self.image_np: Optional[np.ndarray] = None
        self.mask_np: Optional[np.ndarray] = None
        self.mask_path: Optional[Path] = None
        self.already_annotated: bool = False


# ======================================================
# Input events
# ======================================================
PRIMARY = "primary"
SECONDARY = "secondary"

COMMANDS = {
    "next", "previous", "quit",
    "zoom_in", "zoom_out", "zoom_reset",
    "pan_left", "pan_up", "pan_right", "pan_down",
    "toggle_reference", "toggle_filename",
    "marker_up", "marker_down",
}


@dataclass(frozen=True)
class PointerEvent:
    """Pointer move/down/up in display coordinates.

    ``button`` is the button pressed or held during the event, so a drag is a
    ``move`` carrying a button.
    """
    kind: str
    x: int
    y: int
    button: Optional[str] = None


@dataclass(frozen=True)
class WheelEvent:
    inwards: bool
    ctrl: bool = False
    shift: bool = False


@dataclass(frozen=True)
class CommandEvent:
    command: str

    def __post_init__(self):
        if self.command not in COMMANDS:
            raise ValueError(f"Unknown command: {self.command}")
