"""Filesystem helpers for the per-density output layout.

Every density gets a ``drawable-<name>`` directory next to the source file.
"""
from __future__ import annotations

import shutil
import threading
from pathlib import Path

from ..densities import Density
from ..errors import EncodeFailure

folder_lock = threading.Lock()


def output_path(source: Path, density: Density) -> Path:
    """Path of the variant of ``source`` for ``density``."""
    return source.parent / f"drawable-{density.name}" / source.name


def ensure_output_dir(directory: Path) -> None:
    """Create ``directory`` if it does not exist yet.

    The exists/create check runs under ``folder_lock`` so two jobs never
    race on the same directory.
    """
    try:
        with folder_lock:
            if not directory.exists():
                directory.mkdir()
    except OSError as e:
        raise EncodeFailure(f"Could not create {directory}: {e}") from e


def remove_stale(path: Path) -> None:
    """Delete a previous output at ``path``, if any."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        raise EncodeFailure(f"Could not replace {path}: {e}") from e


def copy_source(source: Path, target: Path) -> None:
    """Byte-copy ``source`` to ``target``."""
    try:
        shutil.copyfile(source, target)
    except OSError as e:
        raise EncodeFailure(f"Could not copy {source} to {target}: {e}") from e
