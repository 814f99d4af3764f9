from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

_HANDLER_TAG = "_taskboard_handler"


class _AppOnlyFilter(logging.Filter):
    """Keep taskboard logs; let third-party records (streamlit, sqlalchemy,
    urllib3...) through only at ERROR and above."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "taskboard" or record.name.startswith("taskboard."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    level: int = logging.INFO,
    log_dir: Optional[Union[str, Path]] = None,
) -> None:
    """Attach console (and optional file) handlers to the root logger.

    Streamlit reruns page scripts on every interaction, so this is safe to
    call repeatedly: handlers installed by an earlier call are replaced.
    """
    root = logging.getLogger()
    # The file handler wants everything; the console handler filters by level.
    root.setLevel(logging.DEBUG if log_dir else level)

    for h in list(root.handlers):
        if getattr(h, _HANDLER_TAG, False):
            root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_AppOnlyFilter())
    setattr(ch, _HANDLER_TAG, True)
    root.addHandler(ch)

    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(path / "taskboard.log"), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        setattr(fh, _HANDLER_TAG, True)
        root.addHandler(fh)

    logging.captureWarnings(True)
