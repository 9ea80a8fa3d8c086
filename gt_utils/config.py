from pathlib import Path

DEFAULT_OUTPUT_DIR = Path("GT")
DEFAULT_LABEL_FILE = Path("manlabel.txt")
LEDGER_NAME = ".annotated.txt"
MASK_SUFFIX = ".png"

EXTS = {".jpg", ".jpeg", ".png", ".bmp", ".tif", ".tiff"}

# ---------------- window ----------------
WINDOW_NAME = "AnnotationTool"
WINDOW_SIZE = (1600, 900)
FRAME_INTERVAL_MS = 1000 // 60

# ---------------- painting ----------------
MARKED = 255
UNMARKED = 0

MARKER_SIZE_DEFAULT = 5
MARKER_SIZE_RANGE = (1, 50)
MARKER_SIZE_STEP = 5

BLEND_DEFAULT = 35
BLEND_RANGE = (0, 100)
BLEND_STEP = 5

# ---------------- viewport ----------------
WHEEL_ZOOM = 0.95
KEY_ZOOM = 0.8
PAN_FRACTION = 0.2

# colors are RGB, frames are converted to BGR only when shown
REFERENCE_COLOR = (0, 0, 255)
REFERENCE_THICKNESS = 2
CURSOR_COLOR = (0, 0, 0)
TEXT_COLOR = (255, 255, 255)

# ---------------- keys ----------------
KEY_BINDINGS = {
    ord("n"): "next",
    ord("\n"): "next",
    ord("\r"): "next",
    ord("p"): "previous",
    8: "previous",  # backspace
    ord("q"): "quit",
    27: "quit",  # esc
    ord("+"): "marker_up",
    ord("-"): "marker_down",
    ord("i"): "toggle_filename",
    ord("f"): "zoom_in",
    ord("g"): "zoom_out",
    ord("G"): "zoom_reset",
    # w,a,s,d instead of arrows, highgui binds the arrows to the trackbars
    ord("a"): "pan_left",
    ord("w"): "pan_up",
    ord("d"): "pan_right",
    ord("s"): "pan_down",
    ord("z"): "toggle_reference",
}
