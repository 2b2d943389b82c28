"""Conversion job records and their status state machine."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .densities import Density


class JobStatus(Enum):
    """Lifecycle of a conversion job."""

    PENDING = "Pending"
    IN_PROGRESS = "In progress"
    FINISHED = "Finished"
    ERROR = "Error"


class FailureKind(Enum):
    """Reasons a job can end in ``JobStatus.ERROR``."""

    DECODE = "decode failure"
    WRONG_9PATCH = "malformed 9-patch"
    ENCODE = "encode/write failure"


_TRANSITIONS = {
    JobStatus.PENDING: {JobStatus.IN_PROGRESS, JobStatus.ERROR},
    JobStatus.IN_PROGRESS: {JobStatus.FINISHED, JobStatus.ERROR},
    JobStatus.FINISHED: set(),
    JobStatus.ERROR: set(),
}


@dataclass(frozen=True)
class ConversionJob:
    """One source image to be fanned out to every density of a catalog."""

    source_path: Path
    input_density: Density
    status: JobStatus = JobStatus.PENDING
    failure: Optional[FailureKind] = None
    reason: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (JobStatus.FINISHED, JobStatus.ERROR)

    def describe(self) -> str:
        text = f"{self.source_path.name}: {self.status.value}"
        if self.reason:
            text += f" ({self.reason})"
        return text


def transition(
    job: ConversionJob,
    status: JobStatus,
    failure: Optional[FailureKind] = None,
    reason: Optional[str] = None,
) -> ConversionJob:
    """Return a copy of ``job`` moved to ``status``.

    Parameters
    ----------
    job : ConversionJob
        Current job record. It is not modified.
    status : JobStatus
        Requested next status.
    failure : FailureKind | None
        Required when moving to ``ERROR``, rejected otherwise.
    reason : str | None
        Human-readable reason. Defaults to the failure description.

    Returns
    -------
    ConversionJob
        The job in its new status.

    Raises
    ------
    ValueError
        If the transition is not allowed from the job's current status.
    """
    if status not in _TRANSITIONS[job.status]:
        raise ValueError(f"Illegal job transition: {job.status.name} -> {status.name}")
    if status is JobStatus.ERROR:
        if failure is None:
            raise ValueError("An ERROR transition requires a failure kind")
        reason = reason or failure.value
    elif failure is not None:
        raise ValueError(f"failure is only valid for ERROR, not {status.name}")
    return dataclasses.replace(job, status=status, failure=failure, reason=reason)
