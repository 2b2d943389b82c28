"""Bilinear resizing utilities for ARGB32 pixel buffers.

``rescale`` is the entry point used for density conversion. Large downscales
are done as a series of halvings followed by one final bilinear step, which
keeps the result from aliasing the way a single large bilinear step would.
"""
from __future__ import annotations

import numpy as np

from .pixels import Array, check_buffer, pack_argb


def _sample_axis(src_len: int, dst_len: int) -> tuple[Array, Array, Array]:
    """Map destination pixel centres onto source indices and weights."""
    pos = (np.arange(dst_len, dtype=np.float64) + 0.5) * (src_len / dst_len) - 0.5
    pos = np.clip(pos, 0.0, src_len - 1)
    i0 = np.floor(pos).astype(np.int64)
    i1 = np.minimum(i0 + 1, src_len - 1)
    return i0, i1, pos - i0


def resize_bilinear(arr: Array, new_w: int, new_h: int) -> Array:
    """Resize an ARGB32 buffer to (new_h, new_w) with one bilinear step.

    Interpolation runs on alpha-premultiplied channels so that the colour of
    fully transparent pixels does not bleed into neighbouring edges.

    Parameters
    ----------
    arr : np.ndarray
        Input buffer of shape (H, W), dtype=uint32.
    new_w : int
        Target width (>=1).
    new_h : int
        Target height (>=1).

    Returns
    -------
    np.ndarray
        A new buffer of shape (new_h, new_w).
    """
    check_buffer(arr)
    if new_h < 1 or new_w < 1:
        raise ValueError("new_h and new_w must be >= 1")

    H, W = arr.shape
    if H == new_h and W == new_w:
        return arr.copy()

    a = (arr >> 24).astype(np.float64)
    r = ((arr >> 16) & 0xFF).astype(np.float64)
    g = ((arr >> 8) & 0xFF).astype(np.float64)
    b = (arr & 0xFF).astype(np.float64)
    premul = np.stack([r * a / 255.0, g * a / 255.0, b * a / 255.0, a], axis=-1)

    y0, y1, fy = _sample_axis(H, new_h)
    x0, x1, fx = _sample_axis(W, new_w)
    fx = fx[None, :, None]
    fy = fy[:, None, None]

    top = premul[y0[:, None], x0[None, :]] * (1.0 - fx) + premul[y0[:, None], x1[None, :]] * fx
    bottom = premul[y1[:, None], x0[None, :]] * (1.0 - fx) + premul[y1[:, None], x1[None, :]] * fx
    out = top * (1.0 - fy) + bottom * fy

    alpha = out[..., 3]
    with np.errstate(divide="ignore", invalid="ignore"):
        rgb = np.where(alpha[..., None] > 0, out[..., :3] * 255.0 / alpha[..., None], 0.0)

    rgba = np.empty((new_h, new_w, 4), dtype=np.uint8)
    rgba[..., :3] = np.clip(np.rint(rgb), 0, 255)
    rgba[..., 3] = np.clip(np.rint(alpha), 0, 255)
    return pack_argb(rgba)


def rescale(arr: Array, target_w: int, target_h: int) -> Array:
    """Rescale an ARGB32 buffer to (target_h, target_w).

    A requested dimension of 0 is clamped to 1. While the target width is
    less than roughly half the current width (``target_w * 2 < W - 1``), the
    buffer is first halved on both axes. Only width decides when to halve;
    height follows it in lockstep.

    Parameters
    ----------
    arr : np.ndarray
        Input buffer of shape (H, W), dtype=uint32.
    target_w : int
        Target width (>=0).
    target_h : int
        Target height (>=0).

    Returns
    -------
    np.ndarray
        Rescaled buffer. The input is never modified.
    """
    check_buffer(arr)
    target_w = max(1, target_w)
    target_h = max(1, target_h)

    work = arr
    while target_w * 2 < work.shape[1] - 1:
        h, w = work.shape
        work = resize_bilinear(work, w // 2, max(1, h // 2))
    return resize_bilinear(work, target_w, target_h)


def scaled_size(width: int, height: int, ratio: float) -> tuple[int, int]:
    """Return ``(int(ratio * width), int(ratio * height))``."""
    if ratio <= 0:
        raise ValueError("ratio must be > 0")
    return int(ratio * width), int(ratio * height)
