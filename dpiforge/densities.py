"""Screen densities and the catalog of output variants.

The catalog is an ordered sequence of ``Density`` records. Outputs are
always produced in catalog order. A custom catalog can be read from a JSON
object mapping density names to scale factors::

    {"ldpi": 0.75, "mdpi": 1.0, "hdpi": 1.5}
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Union


@dataclass(frozen=True)
class Density:
    name: str
    scale_factor: float

    def ratio_to(self, other: "Density") -> float:
        """Scale ratio that converts an image authored at ``other`` to this density."""
        return self.scale_factor / other.scale_factor


DEFAULT_CATALOG: tuple[Density, ...] = (
    Density("ldpi", 0.75),
    Density("mdpi", 1.0),
    Density("hdpi", 1.5),
    Density("xhdpi", 2.0),
    Density("xxhdpi", 3.0),
    Density("xxxhdpi", 4.0),
)


def load_catalog(path: Union[str, Path]) -> tuple[Density, ...]:
    """Load an ordered density catalog from a JSON file.

    Parameters
    ----------
    path : str | Path
        JSON file holding an object of ``name -> scale factor``.

    Returns
    -------
    tuple[Density, ...]
        Densities in file order.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the content is not a non-empty object of positive numbers.
    """
    p = Path(path)
    with open(p, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid density catalog {p}: {e}") from e

    if not isinstance(data, dict) or not data:
        raise ValueError(f"Density catalog {p} must be a non-empty JSON object")

    catalog = []
    for name, scale in data.items():
        if isinstance(scale, bool) or not isinstance(scale, (int, float)) or scale <= 0:
            raise ValueError(f"Density {name!r} must have a positive scale factor, got {scale!r}")
        catalog.append(Density(str(name), float(scale)))
    return tuple(catalog)


def find_density(name: str, catalog: Sequence[Density] = DEFAULT_CATALOG) -> Density:
    """Look a density up by name (case-insensitive)."""
    for density in catalog:
        if density.name.lower() == name.lower():
            return density
    known = ", ".join(d.name for d in catalog)
    raise ValueError(f"Unknown density: {name} (known: {known})")
