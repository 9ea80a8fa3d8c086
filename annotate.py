#!/usr/bin/env python3
"""Paint ground-truth masks for every image in a directory."""

from __future__ import annotations

import argparse
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from annotation_utils.cv_ui import CvAnnotator
from annotation_utils.session import AnnotationSession
from gt_utils.config import DEFAULT_LABEL_FILE, DEFAULT_OUTPUT_DIR
from gt_utils.labels import load_labels
from gt_utils.ledger import CompletionLedger
from gt_utils.mask_utils import list_images

logger = logging.getLogger("annotate")

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="GUI to annotate images from within a specified directory."
    )
    parser.add_argument("image_dir", type=Path, help="directory of images to be annotated")
    parser.add_argument("-o", "--output-dir", type=Path, default=DEFAULT_OUTPUT_DIR,
                        help="directory where the annotated masks are stored")
    parser.add_argument("--start-index", type=int, default=0, help="index of the first image")
    parser.add_argument("--skip-to", default=None,
                        help="identity (file stem) of the image to skip to")
    parser.add_argument("--labels", type=Path, default=DEFAULT_LABEL_FILE,
                        help="label file with reference rectangles")
    parser.add_argument("--log-file", type=Path, default=None, help="also log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def configure_logging(verbose: bool = False, log_file: Path | None = None) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)
    if log_file is not None:
        handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=2)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(handler)


def prepare_dirs(image_dir: Path, output_dir: Path) -> str | None:
    """Validate the input directory and create the output one; returns an error message."""
    if not image_dir.is_dir():
        return f"Image directory [{image_dir}] is not available!"
    if output_dir.exists():
        if not output_dir.is_dir():
            return f"Output directory [{output_dir}] is not a directory!"
    else:
        logger.info("Create output directory [%s]", output_dir)
        output_dir.mkdir(parents=True)
    return None


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose, args.log_file)

    error = prepare_dirs(args.image_dir, args.output_dir)
    if error:
        print(f"Error! {error}", file=sys.stderr)
        return 1

    session = AnnotationSession(
        list_images(args.image_dir),
        args.output_dir,
        ledger=CompletionLedger.for_output_dir(args.output_dir),
        reference=load_labels(args.labels),
        start_index=args.start_index,
        skip_to=args.skip_to,
    )
    state = CvAnnotator(session=session).run()
    logger.info("Session ended (%s)", state)
    return 0


if __name__ == "__main__":
    sys.exit(main())
