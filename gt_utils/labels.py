import logging
from pathlib import Path

logger = logging.getLogger(__name__)

IGNORED_TYPES = {"sound"}


def parse_label_lines(lines):
    """
    Build the reference rectangles per image from label rows.

    Row format: ``filename y_min x_min y_max x_max defect_type``.

    The annotated images are crops of the labelled originals, so every
    rectangle of a file is shifted by the smallest (x_min, y_min) seen for
    that file. Rows of an ignored type are not shown but still count towards
    that offset.

    Returns
    -------
    dict[str, list[tuple[int, int, int, int]]]
        filename -> list of (x, y, w, h)
    """
    anchors = {}
    rects = {}

    for n, line in enumerate(lines, start=1):
        parts = line.split()
        if not parts:
            continue
        if len(parts) != 6:
            logger.warning("Skipping malformed label line %d: %r", n, line.rstrip())
            continue
        name, kind = parts[0], parts[5]
        try:
            y0, x0, y1, x1 = (int(v) for v in parts[1:5])
        except ValueError:
            logger.warning("Skipping malformed label line %d: %r", n, line.rstrip())
            continue

        ax, ay = anchors.get(name, (x0, y0))
        anchors[name] = (min(ax, x0), min(ay, y0))

        if kind in IGNORED_TYPES:
            continue
        rects.setdefault(name, []).append((x0, y0, x1 - x0, y1 - y0))

    return {
        name: [(x - anchors[name][0], y - anchors[name][1], w, h) for x, y, w, h in rs]
        for name, rs in rects.items()
    }


def load_labels(path):
    path = Path(path)
    if not path.exists():
        logger.info("No label file at %s, reference rectangles disabled", path)
        return {}
    with open(path) as f:
        labels = parse_label_lines(f)
    logger.info("Loaded reference rectangles for %d images from %s", len(labels), path)
    return labels
