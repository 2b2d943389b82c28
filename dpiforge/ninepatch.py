"""Rescaling of 9-patch images.

A 9-patch image carries a 1-pixel border whose opaque black pixels mark the
stretchable and padding regions of the content. The border must not be
interpolated like the content. Each edge is cut out as a strip, checked,
resized on its own and put back around the rescaled content.

Pipeline
--------
1. ``trim_border``: drop the outer ring, leaving the content.
2. ``extract_borders``: cut the four edge strips, without the corners.
3. ``verify_border``: every strip pixel is transparent or opaque black.
4. ``resize_border``: bilinear + re-binarize when growing, nearest active
   pixel mapping when shrinking.
5. ``recompose``: assemble border strips and content into a new image.
"""
from __future__ import annotations

from pathlib import Path
from typing import NamedTuple, Union

import numpy as np

from .errors import Wrong9Patch
from .utils.pixels import ALPHA_MASK, OPAQUE_BLACK, Array, check_buffer, new_buffer
from .utils.resize import rescale, scaled_size


class BorderStrips(NamedTuple):
    left: Array  # (H, 1)
    right: Array  # (H, 1)
    top: Array  # (1, W)
    bottom: Array  # (1, W)


def is_nine_patch(path: Union[str, Path]) -> bool:
    """True for names like ``button.9.png``."""
    suffixes = Path(path).suffixes
    return len(suffixes) >= 2 and suffixes[-2] == ".9"


def trim_border(arr: Array) -> Array:
    """Return a copy of ``arr`` without its outermost 1-pixel ring."""
    check_buffer(arr)
    H, W = arr.shape
    if H < 3 or W < 3:
        raise Wrong9Patch(f"9-patch image is too small ({W}x{H})")
    return arr[1:-1, 1:-1].copy()


def extract_borders(arr: Array) -> BorderStrips:
    """Cut the four border strips out of an untrimmed 9-patch image.

    Corner pixels are excluded; they carry no stretch information.
    """
    check_buffer(arr)
    H, W = arr.shape
    if H < 3 or W < 3:
        raise Wrong9Patch(f"9-patch image is too small ({W}x{H})")
    return BorderStrips(
        left=arr[1:-1, 0:1].copy(),
        right=arr[1:-1, W - 1:W].copy(),
        top=arr[0:1, 1:-1].copy(),
        bottom=arr[H - 1:H, 1:-1].copy(),
    )


def verify_border(strip: Array) -> None:
    """Raise ``Wrong9Patch`` unless every pixel is transparent or opaque black."""
    visible = (strip & ALPHA_MASK) != 0
    bad = visible & (strip != OPAQUE_BLACK)
    if np.any(bad):
        idx = int(np.flatnonzero(bad)[0])
        value = int(strip.reshape(-1)[idx])
        raise Wrong9Patch(f"malformed 9-patch: border pixel {idx} is 0x{value:08X}")


def enforce_border_colors(strip: Array) -> Array:
    """Force every pixel of ``strip`` to opaque black or fully transparent.

    Works in place and returns the same array. Only call this on a buffer
    that was just allocated and is not visible to anyone else.
    """
    visible = (strip & ALPHA_MASK) != 0
    strip[visible] = OPAQUE_BLACK
    strip[~visible] = 0
    return strip


def resize_border(strip: Array, target_w: int, target_h: int) -> Array:
    """Resize a border strip along its free axis.

    Growing uses bilinear rescaling followed by ``enforce_border_colors``.
    Shrinking (or keeping the size) maps each opaque pixel at ``x`` to
    ``min(x * target // length, target - 1)`` so no marker is ever dropped.

    Parameters
    ----------
    strip : np.ndarray
        Border strip of shape (H, 1) or (1, W).
    target_w : int
        Target width (>=1).
    target_h : int
        Target height (>=1).

    Returns
    -------
    np.ndarray
        A new strip of shape (target_h, target_w).
    """
    check_buffer(strip)
    target_w = max(1, target_w)
    target_h = max(1, target_h)
    H, W = strip.shape
    if target_w > W or target_h > H:
        return enforce_border_colors(rescale(strip, target_w, target_h))

    out = new_buffer(target_w, target_h)
    ys, xs = np.nonzero((strip & ALPHA_MASK) != 0)
    new_y = np.minimum(ys * target_h // H, target_h - 1)
    new_x = np.minimum(xs * target_w // W, target_w - 1)
    out[new_y, new_x] = OPAQUE_BLACK
    return out


def recompose(content: Array, borders: BorderStrips) -> Array:
    """Place resized border strips around ``content``.

    The strips must already match the content size on their free axis.
    Corners stay fully transparent.
    """
    check_buffer(content)
    H, W = content.shape
    if borders.left.shape != (H, 1) or borders.right.shape != (H, 1):
        raise ValueError(f"vertical strips must have shape ({H}, 1)")
    if borders.top.shape != (1, W) or borders.bottom.shape != (1, W):
        raise ValueError(f"horizontal strips must have shape (1, {W})")

    out = new_buffer(W + 2, H + 2)
    out[1:-1, 0] = borders.left[:, 0]
    out[1:-1, -1] = borders.right[:, 0]
    out[0, 1:-1] = borders.top[0]
    out[-1, 1:-1] = borders.bottom[0]
    out[1:-1, 1:-1] = content
    return out


def scale_nine_patch(arr: Array, ratio: float) -> Array:
    """Rescale a 9-patch image by ``ratio`` keeping its border valid.

    Parameters
    ----------
    arr : np.ndarray
        Untrimmed 9-patch image, dtype=uint32.
    ratio : float
        Target scale over source scale.

    Returns
    -------
    np.ndarray
        New image of size ``(content_h' + 2, content_w' + 2)``.

    Raises
    ------
    Wrong9Patch
        If the image is too small or any border strip is malformed.
    """
    borders = extract_borders(arr)
    for strip in borders:
        verify_border(strip)

    content = trim_border(arr)
    h, w = content.shape
    target_w, target_h = scaled_size(w, h, ratio)
    content = rescale(content, target_w, target_h)
    h, w = content.shape

    resized = BorderStrips(
        left=resize_border(borders.left, 1, h),
        right=resize_border(borders.right, 1, h),
        top=resize_border(borders.top, w, 1),
        bottom=resize_border(borders.bottom, w, 1),
    )
    return recompose(content, resized)
