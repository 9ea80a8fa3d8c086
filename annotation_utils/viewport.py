from gt_utils.config import PAN_FRACTION

from .state import clamp

PAN_DIRECTIONS = {
    "left": (-1, 0),
    "up": (0, -1),
    "right": (1, 0),
    "down": (0, 1),
}


def _scaled(size, factor):
    # rounding alone would stall small rectangles, always move by one pixel
    new = int(round(size * factor))
    if factor < 1:
        return min(new, size - 1)
    if factor > 1:
        return max(new, size + 1)
    return new


class Viewport:
    """
    Rectangle of the source image that is magnified onto the display.

    The rectangle always lies inside the image. Zooming keeps the source point
    under the cursor fixed unless the rectangle would leave the image, in which
    case it is pinned to the image border instead (the view "jumps").
    """

    def __init__(self, width=None, height=None):
        self.W = 0
        self.H = 0
        self.x = 0
        self.y = 0
        self.width = 0
        self.height = 0
        if width is not None and height is not None:
            self.initialize(width, height)

    @property
    def rect(self):
        return self.x, self.y, self.width, self.height

    def initialize(self, W, H):
        if W <= 0 or H <= 0:
            raise ValueError(f"Invalid image size {W}x{H}")
        self.W, self.H = int(W), int(H)
        self.reset_full()

    def reset_full(self):
        self.x, self.y = 0, 0
        self.width, self.height = self.W, self.H

    # ======================================================
    # Coordinate mapping
    # ======================================================
    def to_source(self, point, display_size):
        dx, dy = point
        dw, dh = display_size
        return (
            self.x + dx * (self.width / float(dw)),
            self.y + dy * (self.height / float(dh)),
        )

    def to_display(self, point, display_size):
        sx, sy = point
        dw, dh = display_size
        return (
            (sx - self.x) * (dw / float(self.width)),
            (sy - self.y) * (dh / float(self.height)),
        )

    # ======================================================
    # Zoom / pan
    # ======================================================
    def zoom(self, factor, cursor, display_size):
        """Zoom in for factors in (0, 1), out for factors > 1, around ``cursor``."""
        if factor <= 0:
            raise ValueError(f"Invalid zoom factor {factor}")

        anchor_x, anchor_y = self.to_source(cursor, display_size)

        # ratios of the cursor inside the view, kept constant across the zoom
        width_ratio = cursor[0] / float(display_size[0])
        height_ratio = cursor[1] / float(display_size[1])

        self.width = clamp(_scaled(self.width, factor), 1, self.W)
        self.height = clamp(_scaled(self.height, factor), 1, self.H)

        # clamping binds on zooming out near the border, this is the "jump"
        self.x = clamp(int(round(anchor_x - width_ratio * self.width)), 0, self.W - self.width)
        self.y = clamp(int(round(anchor_y - height_ratio * self.height)), 0, self.H - self.height)
        return self.rect

    def pan(self, direction, display_size=None):
        if direction not in PAN_DIRECTIONS:
            raise ValueError(f"Unknown pan direction: {direction}")
        sx, sy = PAN_DIRECTIONS[direction]
        self.x = clamp(self.x + sx * int(PAN_FRACTION * self.width), 0, self.W - self.width)
        self.y = clamp(self.y + sy * int(PAN_FRACTION * self.height), 0, self.H - self.height)
        return self.rect

    def zoom_factor(self, display_width):
        return display_width / float(self.width)
