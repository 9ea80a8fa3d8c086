import logging

import cv2

from gt_utils.config import (
    BLEND_RANGE, FRAME_INTERVAL_MS, KEY_BINDINGS, MARKER_SIZE_RANGE,
    WINDOW_NAME, WINDOW_SIZE,
)

from .session import INTERACTIVE
from .state import PRIMARY, SECONDARY, CommandEvent, PointerEvent, WheelEvent

logger = logging.getLogger(__name__)


def translate_mouse(event, x, y, flags):
    """Map a HighGUI mouse callback to a session event, or None."""
    if event in (cv2.EVENT_MOUSEWHEEL, cv2.EVENT_MOUSEHWHEEL):
        return WheelEvent(
            inwards=cv2.getMouseWheelDelta(flags) < 0,
            ctrl=bool(flags & cv2.EVENT_FLAG_CTRLKEY),
            shift=bool(flags & cv2.EVENT_FLAG_SHIFTKEY),
        )
    if event == cv2.EVENT_LBUTTONDOWN:
        return PointerEvent("down", x, y, PRIMARY)
    if event == cv2.EVENT_RBUTTONDOWN:
        return PointerEvent("down", x, y, SECONDARY)
    if event in (cv2.EVENT_LBUTTONUP, cv2.EVENT_RBUTTONUP):
        return PointerEvent("up", x, y)
    if event == cv2.EVENT_MOUSEMOVE:
        if flags & cv2.EVENT_FLAG_LBUTTON:
            return PointerEvent("move", x, y, PRIMARY)
        if flags & cv2.EVENT_FLAG_RBUTTON:
            return PointerEvent("move", x, y, SECONDARY)
        return PointerEvent("move", x, y)
    return None


def translate_key(key):
    if key < 0:
        return None
    command = KEY_BINDINGS.get(key & 0xFF)
    return CommandEvent(command) if command else None


class CvAnnotator:
    """Runs an AnnotationSession inside an OpenCV window."""

    def __init__(self, *, session, window_name=WINDOW_NAME, window_size=WINDOW_SIZE):
        self.session = session
        self.window = window_name
        self.window_size = window_size

    # ======================================================
    # Window
    # ======================================================
    def _open(self):
        cv2.namedWindow(self.window, cv2.WINDOW_NORMAL | cv2.WINDOW_KEEPRATIO | cv2.WINDOW_GUI_EXPANDED)
        cv2.resizeWindow(self.window, *self.window_size)
        cv2.setMouseCallback(self.window, self._on_mouse)

        cv2.createTrackbar("Size", self.window, self.session.marker_size,
                           MARKER_SIZE_RANGE[1], self.session.set_marker_size)
        cv2.setTrackbarMin("Size", self.window, MARKER_SIZE_RANGE[0])
        cv2.createTrackbar("Blending", self.window, self.session.blend,
                           BLEND_RANGE[1], self.session.set_blend)

    def _sync_trackbars(self):
        cv2.setTrackbarPos("Size", self.window, self.session.marker_size)
        cv2.setTrackbarPos("Blending", self.window, self.session.blend)

    def _closed(self):
        return cv2.getWindowProperty(self.window, cv2.WND_PROP_VISIBLE) < 1

    def _show(self):
        frame = self.session.render()
        cv2.imshow(self.window, cv2.cvtColor(frame, cv2.COLOR_RGB2BGR))

    # ======================================================
    # Events
    # ======================================================
    def _on_mouse(self, event, x, y, flags, param=None):
        if self.session.state != INTERACTIVE:
            return
        ev = translate_mouse(event, x, y, flags)
        if ev is None:
            return
        self.session.dispatch(ev)
        if isinstance(ev, WheelEvent):
            self._sync_trackbars()

    def run(self):
        if self.session.start() != INTERACTIVE:
            logger.info("Nothing to annotate")
            return self.session.state

        self._open()
        try:
            while self.session.state == INTERACTIVE:
                self._show()
                key = cv2.waitKey(FRAME_INTERVAL_MS)
                if self._closed():
                    self.session.quit()
                    break
                ev = translate_key(key)
                if ev is None:
                    continue
                self.session.dispatch(ev)
                if self.session.state == INTERACTIVE:
                    self._sync_trackbars()
        finally:
            cv2.destroyWindow(self.window)
        return self.session.state
