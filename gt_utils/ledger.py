import logging
from pathlib import Path

from gt_utils.config import LEDGER_NAME

logger = logging.getLogger(__name__)


class CompletionLedger:
    """Append-only record of image identities whose mask is finished.

    Backed by a newline-delimited file, one identity per line.
    """

    def __init__(self, path, identities=()):
        self.path = Path(path)
        self._done = list(identities)
        self._seen = set(self._done)

    @classmethod
    def for_output_dir(cls, output_dir):
        return cls.load(Path(output_dir) / LEDGER_NAME)

    @classmethod
    def load(cls, path):
        path = Path(path)
        identities = []
        if path.exists():
            with open(path) as f:
                identities = [line.strip() for line in f if line.strip()]
            logger.info("Read %d annotated images from %s", len(identities), path)
        return cls(path, identities)

    def __contains__(self, identity):
        return identity in self._seen

    def __len__(self):
        return len(self._done)

    def __iter__(self):
        return iter(self._done)

    def append(self, identity):
        """Record ``identity``; returns False if it was already present."""
        if identity in self._seen:
            return False
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # a hand-edited file may lack the final newline
        prefix = "\n" if self._missing_newline() else ""
        with open(self.path, "a") as f:
            f.write(prefix)
            f.write(f"{identity}\n")
        self._done.append(identity)
        self._seen.add(identity)
        logger.info("Marked %s as annotated", identity)
        return True

    def _missing_newline(self):
        if not self.path.exists() or self.path.stat().st_size == 0:
            return False
        with open(self.path, "rb") as f:
            f.seek(-1, 2)
            return f.read(1) != b"\n"
