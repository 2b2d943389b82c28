"""Utility functions for dpiforge.

Modules:
- pixels: ARGB32 buffer helpers.
- resize: Bilinear resizing and staged-halving rescale.
- loader: Load/save Pillow <-> NumPy conversion, serialized on the codec lock.
- files: Output directory layout and file operations.
"""
from .pixels import new_buffer, pack_argb, unpack_argb
from .resize import rescale, resize_bilinear, scaled_size
from .loader import load_image, save_image

__all__ = [
    "new_buffer",
    "pack_argb",
    "unpack_argb",
    "rescale",
    "resize_bilinear",
    "scaled_size",
    "load_image",
    "save_image",
]
