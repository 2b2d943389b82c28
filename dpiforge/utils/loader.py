"""Image loading and saving utilities using Pillow, with NumPy arrays.

All processing in this project occurs on ARGB32 NumPy arrays. These helpers
only convert between Pillow images and those arrays for IO.

Pillow calls are serialized through ``codec_lock``. Decoding and encoding
are short compared to rescaling, and the codec plugins are not assumed to be
safe to drive from several threads at once.
"""
from __future__ import annotations

import threading
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..errors import DecodeFailure, EncodeFailure
from .pixels import Array, check_buffer, pack_argb, unpack_argb

codec_lock = threading.Lock()

# Formats Pillow cannot write with an alpha channel.
_NO_ALPHA_FORMATS = {".jpg", ".jpeg", ".bmp"}


def load_image(path: Union[str, Path]) -> Array:
    """Load an image file into an ARGB32 NumPy array.

    Parameters
    ----------
    path : str | Path
        Path to an image supported by Pillow.

    Returns
    -------
    np.ndarray
        Array of shape (H, W), dtype=uint32.

    Raises
    ------
    DecodeFailure
        If the file cannot be read or is not an image.
    """
    p = Path(path)
    try:
        with codec_lock:
            with Image.open(p) as im:
                rgba = np.array(im.convert("RGBA"), dtype=np.uint8)
    except UnidentifiedImageError as e:
        raise DecodeFailure(f"Not an image: {p}") from e
    except Image.DecompressionBombError as e:
        raise DecodeFailure(f"Image too large to decode: {p}: {e}") from e
    except (OSError, ValueError, SyntaxError) as e:
        raise DecodeFailure(f"Could not read {p}: {e}") from e
    return pack_argb(rgba)


def save_image(arr: Array, path: Union[str, Path]) -> None:
    """Save an ARGB32 NumPy array to an image file via Pillow.

    Parameters
    ----------
    arr : np.ndarray
        Array of shape (H, W), dtype=uint32.
    path : str | Path
        Output file path. The format is inferred from the extension.

    Raises
    ------
    EncodeFailure
        If the file cannot be written.
    """
    check_buffer(arr)
    p = Path(path)
    im = Image.fromarray(unpack_argb(arr))
    if p.suffix.lower() in _NO_ALPHA_FORMATS:
        im = im.convert("RGB")
    try:
        with codec_lock:
            im.save(p)
    except (OSError, ValueError) as e:
        raise EncodeFailure(f"Could not write {p}: {e}") from e
