"""ARGB32 pixel buffers backed by NumPy arrays.

A pixel buffer is a 2-D ``uint32`` array of shape (H, W) where each element
holds one ``0xAARRGGBB`` pixel in row-major order. Pillow works in RGBA byte
order, so these helpers convert between the two layouts.
"""
from __future__ import annotations

import numpy as np

Array = np.ndarray

OPAQUE_BLACK = np.uint32(0xFF000000)
ALPHA_MASK = np.uint32(0xFF000000)


def check_buffer(arr: Array) -> None:
    """Raise if ``arr`` is not an (H, W) uint32 ARGB buffer."""
    if not isinstance(arr, np.ndarray):
        raise TypeError("arr must be a NumPy array")
    if arr.dtype != np.uint32:
        raise TypeError("arr must have dtype=uint32")
    if arr.ndim != 2:
        raise ValueError("arr must have shape (H, W)")


def new_buffer(width: int, height: int) -> Array:
    """Allocate a fully transparent buffer of the given size."""
    if width < 1 or height < 1:
        raise ValueError("width and height must be >= 1")
    return np.zeros((height, width), dtype=np.uint32)


def pack_argb(rgba: Array) -> Array:
    """Pack an (H, W, 4) uint8 RGBA array into an (H, W) ARGB32 buffer.

    Parameters
    ----------
    rgba : np.ndarray
        Array of shape (H, W, 4), dtype=uint8, in RGBA order.

    Returns
    -------
    np.ndarray
        Array of shape (H, W), dtype=uint32.
    """
    if not isinstance(rgba, np.ndarray) or rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError("rgba must have shape (H, W, 4)")
    c = rgba.astype(np.uint32)
    return (c[..., 3] << 24) | (c[..., 0] << 16) | (c[..., 1] << 8) | c[..., 2]


def unpack_argb(arr: Array) -> Array:
    """Unpack an ARGB32 buffer into an (H, W, 4) uint8 RGBA array."""
    check_buffer(arr)
    out = np.empty(arr.shape + (4,), dtype=np.uint8)
    out[..., 0] = (arr >> 16) & 0xFF
    out[..., 1] = (arr >> 8) & 0xFF
    out[..., 2] = arr & 0xFF
    out[..., 3] = arr >> 24
    return out
