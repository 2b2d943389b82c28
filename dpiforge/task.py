"""Conversion of one source image into every density of a catalog.

``run_job`` takes a PENDING job and drives it to a terminal status. The
source is decoded once. Densities are then processed in catalog order:
the identity density is a byte copy, every other density is rescaled (or
9-patch rescaled) from the decoded pixels and encoded to its own
``drawable-<name>`` directory. A failure ends the job; outputs written for
earlier densities are left in place.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Sequence

from .densities import DEFAULT_CATALOG, Density
from .errors import ConversionError
from .job import ConversionJob, JobStatus, transition
from .ninepatch import is_nine_patch, scale_nine_patch
from .utils.files import copy_source, ensure_output_dir, output_path, remove_stale
from .utils.loader import load_image, save_image
from .utils.pixels import Array
from .utils.resize import rescale, scaled_size

logger = logging.getLogger(__name__)

Notify = Callable[[ConversionJob], None]


def _ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


def scale_image(image: Array, ratio: float, nine_patch: bool = False) -> Array:
    """Scale decoded pixels by ``ratio``, handling the 9-patch border if asked."""
    if nine_patch:
        return scale_nine_patch(image, ratio)
    h, w = image.shape
    target_w, target_h = scaled_size(w, h, ratio)
    return rescale(image, target_w, target_h)


def convert_density(job: ConversionJob, image: Array, density: Density) -> None:
    """Write the ``density`` variant of an already decoded source."""
    source = job.source_path
    target = output_path(source, density)
    ensure_output_dir(target.parent)
    remove_stale(target)

    if density.scale_factor == job.input_density.scale_factor:
        copy_source(source, target)
        logger.debug("Copied %s to %s", source.name, target.parent.name)
        return

    start = time.perf_counter()
    scaled = scale_image(image, density.ratio_to(job.input_density), is_nine_patch(source))
    logger.debug("Scaling %s %s: %.1f ms", source.name, density.name, _ms(start))

    start = time.perf_counter()
    save_image(scaled, target)
    logger.debug("Writing %s: %.1f ms", target, _ms(start))


def run_job(
    job: ConversionJob,
    catalog: Sequence[Density] = DEFAULT_CATALOG,
    notify: Optional[Notify] = None,
) -> ConversionJob:
    """Run ``job`` to a terminal status and return the final record.

    Parameters
    ----------
    job : ConversionJob
        A job in ``PENDING`` status.
    catalog : Sequence[Density]
        Densities to produce, in order.
    notify : callable | None
        Called with the job after every status change.

    Returns
    -------
    ConversionJob
        The job in ``FINISHED`` or ``ERROR`` status.
    """

    def advance(status: JobStatus, error: Optional[ConversionError] = None) -> ConversionJob:
        if error is None:
            new = transition(job, status)
            logger.info("%s", new.describe())
        else:
            new = transition(job, status, failure=error.kind, reason=str(error))
            logger.warning("%s", new.describe())
        if notify is not None:
            notify(new)
        return new

    start = time.perf_counter()
    try:
        image = load_image(job.source_path)
    except ConversionError as e:
        return advance(JobStatus.ERROR, e)
    logger.debug("Opening %s: %.1f ms", job.source_path.name, _ms(start))

    job = advance(JobStatus.IN_PROGRESS)
    try:
        for density in catalog:
            convert_density(job, image, density)
    except ConversionError as e:
        return advance(JobStatus.ERROR, e)
    return advance(JobStatus.FINISHED)
