"""File-based debug logging setup."""

from __future__ import annotations

import logging
from pathlib import Path


def setup_file_logging(log_dir: Path) -> Path:
    """Configure file-based debug logging into *log_dir*; the TUI owns the terminal."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / 'vn_debug.log'
    root = logging.getLogger('vn')
    for existing in root.handlers:
        if isinstance(existing, logging.FileHandler) and Path(existing.baseFilename).resolve() == log_path.resolve():
            return log_path

    handler = logging.FileHandler(log_path, encoding='utf-8')
    handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s'))
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)
    logging.getLogger('vn.app').info('Debug logging started → %s', log_path)
    return log_path
