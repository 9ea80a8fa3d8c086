import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from gt_utils.config import (
    BLEND_DEFAULT, BLEND_STEP, KEY_ZOOM, MARKER_SIZE_DEFAULT, MARKER_SIZE_STEP,
    WHEEL_ZOOM,
)
from gt_utils.ledger import CompletionLedger
from gt_utils.mask_utils import (
    image_identity, load_image, load_mask, mask_path, save_mask,
)

from . import compositor
from .paint_ops import mark_at_cursor
from .state import (
    PRIMARY, SECONDARY, CommandEvent, CursorState, DisplayState, ImageState,
    PointerEvent, WheelEvent,
)
from .viewport import Viewport

logger = logging.getLogger(__name__)

LOADING = "loading"
INTERACTIVE = "interactive"
QUIT = "quit"
DONE = "done"

Rect = Tuple[int, int, int, int]


class AnnotationSession:
    """
    Walks an operator through a list of images, one mask at a time.

    ``dispatch`` applies a single input event to the current image and returns
    the session state afterwards. Moving to the next/previous image saves the
    mask and records the image in the ledger; quitting saves nothing.
    """

    def __init__(
        self,
        images: Sequence[Path],
        output_dir: Path,
        *,
        ledger: Optional[CompletionLedger] = None,
        reference: Optional[Dict[str, List[Rect]]] = None,
        start_index: int = 0,
        skip_to: Optional[str] = None,
        display_size: Optional[Tuple[int, int]] = None,
        marker_size: int = MARKER_SIZE_DEFAULT,
        blend: int = BLEND_DEFAULT,
    ):
        self.images = [Path(p) for p in images]
        self.output_dir = Path(output_dir)
        self.ledger = ledger if ledger is not None else CompletionLedger.for_output_dir(self.output_dir)
        # images finished during this run stay reachable with "previous"
        self._done_at_start = set(self.ledger)
        self.reference = reference or {}
        self.start_index = start_index
        self._skip_to = skip_to or None
        self._display_size = display_size

        self.cursor = CursorState(marker_size)
        self.display = DisplayState(blend)
        self.viewport = Viewport()
        self.S = ImageState()
        self.state = LOADING

    # ======================================================
    # Properties
    # ======================================================
    @property
    def finished(self):
        return self.state in (QUIT, DONE)

    @property
    def display_size(self):
        if self._display_size is not None:
            return self._display_size
        H, W = self.S.image_np.shape[:2]
        return W, H

    @property
    def marker_size(self):
        return self.cursor.marker_size

    @property
    def blend(self):
        return self.display.blend

    # trackbar setters, clamped
    def set_marker_size(self, value):
        return self.cursor.set_marker_size(value)

    def set_blend(self, value):
        return self.display.set_blend(value)

    # ======================================================
    # Loading / resume
    # ======================================================
    def start(self):
        return self.load(self.start_index)

    def load(self, index):
        """
        Enter the first image at or after ``index`` that should be annotated.

        Images before the skip-to target are passed over, then images that
        were already in the ledger when the session started or that cannot be
        read. Leaving the list ends the session.
        """
        self.state = LOADING
        n = len(self.images)
        i = index

        while 0 <= i < n:
            path = self.images[i]
            identity = image_identity(path)

            if self._skip_to is not None:
                if identity != self._skip_to:
                    i += 1
                    continue
                self._skip_to = None
            elif identity in self._done_at_start:
                logger.debug("Skipping %s, already annotated", identity)
                i += 1
                continue

            image = load_image(path)
            if image is None:
                i += 1
                continue
            logger.info("%d/%d - Loaded image: %s", i, n, path)

            out_path = mask_path(self.output_dir, path)
            try:
                mask = load_mask(out_path, image.shape)
            except ValueError as e:
                logger.error("Skipping %s: %s", path, e)
                i += 1
                continue

            self.S.index = i
            self.S.path = path
            self.S.identity = identity
            self.S.image_np = image
            self.S.mask_np = mask
            self.S.mask_path = out_path
            self.S.already_annotated = identity in self.ledger

            H, W = image.shape[:2]
            self.viewport.initialize(W, H)
            self.state = INTERACTIVE
            return self.state

        logger.info("No more images to annotate")
        self.state = DONE
        return self.state

    # ======================================================
    # Transitions
    # ======================================================
    def advance(self, delta):
        save_mask(self.S.mask_np, self.S.mask_path)
        if not self.S.already_annotated:
            self.ledger.append(self.S.identity)
        return self.load(self.S.index + delta)

    def quit(self):
        if self.S.identity is not None:
            logger.info("Quit, discarding changes to %s", self.S.identity)
        self.state = QUIT
        return self.state

    # ======================================================
    # Event dispatch
    # ======================================================
    def dispatch(self, event):
        if self.state != INTERACTIVE:
            return self.state

        if isinstance(event, PointerEvent):
            self._on_pointer(event)
        elif isinstance(event, WheelEvent):
            self._on_wheel(event)
        elif isinstance(event, CommandEvent):
            return self._on_command(event.command)
        else:
            raise TypeError(f"Unsupported event: {event!r}")
        return self.state

    def replay(self, events):
        for event in events:
            if self.dispatch(event) in (QUIT, DONE):
                break
        return self.state

    def _on_pointer(self, event):
        self.cursor.position = (event.x, event.y)
        if event.kind not in ("down", "move") or event.button is None:
            return
        if event.button not in (PRIMARY, SECONDARY):
            return
        mark_at_cursor(
            self.S.mask_np, self.viewport, self.cursor.position, self.display_size,
            self.cursor.marker_size, set_mark=event.button == PRIMARY,
        )

    def _on_wheel(self, event):
        if event.ctrl:
            factor = WHEEL_ZOOM if event.inwards else 1.0 / WHEEL_ZOOM
            self.viewport.zoom(factor, self.cursor.position, self.display_size)
        elif event.shift:
            step = BLEND_STEP if event.inwards else -BLEND_STEP
            self.set_blend(self.display.blend + step)
        else:
            step = 1 if event.inwards else -1
            self.set_marker_size(self.cursor.marker_size + step)

    def _on_command(self, command):
        if command == "next":
            return self.advance(1)
        if command == "previous":
            return self.advance(-1)
        if command == "quit":
            return self.quit()

        if command in ("zoom_in", "zoom_out"):
            # no zooming while the cursor is outside the view
            if self._cursor_inside():
                factor = KEY_ZOOM if command == "zoom_in" else 1.0 / KEY_ZOOM
                self.viewport.zoom(factor, self.cursor.position, self.display_size)
        elif command == "zoom_reset":
            self.viewport.reset_full()
        elif command.startswith("pan_"):
            self.viewport.pan(command[len("pan_"):], self.display_size)
        elif command == "toggle_reference":
            self.display.show_reference = not self.display.show_reference
        elif command == "toggle_filename":
            self.display.show_filename = not self.display.show_filename
        elif command == "marker_up":
            self.set_marker_size(self.cursor.marker_size + MARKER_SIZE_STEP)
        elif command == "marker_down":
            self.set_marker_size(self.cursor.marker_size - MARKER_SIZE_STEP)
        return self.state

    def _cursor_inside(self):
        x, y = self.cursor.position
        dw, dh = self.display_size
        return 0 <= x <= dw and 0 <= y <= dh

    # ======================================================
    # Rendering
    # ======================================================
    def render(self):
        if self.state != INTERACTIVE:
            raise RuntimeError("No image loaded")
        return compositor.render(
            self.S.image_np,
            self.S.mask_np,
            self.viewport,
            self.display.blend,
            reference_rects=self.reference.get(self.S.identity, ()),
            cursor=self.cursor.position,
            marker_size=self.cursor.marker_size,
            display_size=self.display_size,
            show_reference=self.display.show_reference,
            filename=self.S.path.name if self.display.show_filename else None,
        )
