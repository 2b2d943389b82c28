from __future__ import annotations

from dpiforge.densities import DEFAULT_CATALOG, Density, find_density, load_catalog  # noqa: F401
from dpiforge.errors import ConversionError, DecodeFailure, EncodeFailure, Wrong9Patch  # noqa: F401
from dpiforge.job import ConversionJob, FailureKind, JobStatus, transition  # noqa: F401
from dpiforge.ninepatch import is_nine_patch, scale_nine_patch  # noqa: F401
from dpiforge.scheduler import FanoutScheduler, StatusChannel, convert_batch  # noqa: F401
from dpiforge.task import run_job  # noqa: F401
from dpiforge.utils.resize import rescale  # noqa: F401

__all__ = [
    "DEFAULT_CATALOG",
    "Density",
    "find_density",
    "load_catalog",
    "ConversionError",
    "DecodeFailure",
    "EncodeFailure",
    "Wrong9Patch",
    "ConversionJob",
    "FailureKind",
    "JobStatus",
    "transition",
    "is_nine_patch",
    "scale_nine_patch",
    "FanoutScheduler",
    "StatusChannel",
    "convert_batch",
    "run_job",
    "rescale",
]
