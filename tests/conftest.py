from __future__ import annotations

import struct
import zlib
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from dpiforge.densities import Density

BLACK = 0xFF000000

CATALOG = (
    Density("ldpi", 0.75),
    Density("mdpi", 1.0),
    Density("hdpi", 1.5),
)
MDPI = CATALOG[1]


def write_rgba(path: Path, rgba: np.ndarray) -> Path:
    Image.fromarray(rgba.astype(np.uint8)).save(path)
    return path


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data))


def write_oversized_png(path: Path, width: int = 20000, height: int = 20000) -> Path:
    """A PNG whose header declares a huge RGBA image but carries almost no data."""
    header = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    path.write_bytes(
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", zlib.compress(b"\x00" * 16))
        + _png_chunk(b"IEND", b"")
    )
    return path


def gradient_rgba(width: int, height: int, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    x = np.linspace(0, 255, width)[None, :]
    y = np.linspace(0, 255, height)[:, None]
    rgba = np.empty((height, width, 4), dtype=np.uint8)
    rgba[..., 0] = np.broadcast_to(x, (height, width))
    rgba[..., 1] = np.broadcast_to(y, (height, width))
    rgba[..., 2] = rng.integers(0, 256, size=(height, width))
    rgba[..., 3] = 255
    return rgba


def nine_patch_argb(size: int = 10, content: int = 0xFF3366CC) -> np.ndarray:
    """A size x size 9-patch with solid content and a few border markers."""
    arr = np.zeros((size, size), dtype=np.uint32)
    arr[1:-1, 1:-1] = content
    arr[0, 3:6] = BLACK
    arr[3:7, 0] = BLACK
    arr[-1, 2:8] = BLACK
    arr[2:8, -1] = BLACK
    return arr


@pytest.fixture
def catalog():
    return CATALOG


@pytest.fixture
def icon_png(tmp_path: Path) -> Path:
    return write_rgba(tmp_path / "icon.png", gradient_rgba(40, 24))


@pytest.fixture
def nine_patch_png(tmp_path: Path) -> Path:
    from dpiforge.utils.pixels import unpack_argb

    return write_rgba(tmp_path / "button.9.png", unpack_argb(nine_patch_argb(12)))
