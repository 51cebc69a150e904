from __future__ import annotations

import logging
import os
from typing import Iterator

logger = logging.getLogger(__name__)


def iter_documents(root: str, *, extension: str = ".cnxml") -> Iterator[str]:
    """
    Yield document paths under ``root`` depth-first, entries in sorted order.

    Unreadable directories are logged and skipped; the walk continues with
    their siblings.
    """
    if os.path.isfile(root):
        yield root
        return

    try:
        entries = sorted(os.scandir(root), key=lambda e: e.name)
    except OSError as e:
        logger.error("Error reading directory: %s: %s", root, e)
        return

    for entry in entries:
        try:
            is_dir = entry.is_dir()
        except OSError as e:
            logger.error("Error reading entry: %s: %s", entry.path, e)
            continue
        if is_dir:
            yield from iter_documents(entry.path, extension=extension)
        elif entry.name.endswith(extension):
            yield entry.path
