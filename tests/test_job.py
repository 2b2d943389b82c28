from __future__ import annotations

from pathlib import Path

import pytest

from conftest import MDPI
from dpiforge.job import ConversionJob, FailureKind, JobStatus, transition


@pytest.fixture
def job():
    return ConversionJob(Path("icon.png"), MDPI)


def test_new_job_is_pending(job):
    assert job.status is JobStatus.PENDING
    assert job.failure is None
    assert not job.is_terminal


def test_happy_path(job):
    running = transition(job, JobStatus.IN_PROGRESS)
    done = transition(running, JobStatus.FINISHED)
    assert job.status is JobStatus.PENDING
    assert running.status is JobStatus.IN_PROGRESS
    assert done.is_terminal
    assert done.describe() == "icon.png: Finished"


def test_decode_failure_from_pending(job):
    failed = transition(job, JobStatus.ERROR, failure=FailureKind.DECODE)
    assert failed.is_terminal
    assert failed.reason == "decode failure"
    assert failed.describe() == "icon.png: Error (decode failure)"


def test_error_keeps_explicit_reason(job):
    running = transition(job, JobStatus.IN_PROGRESS)
    failed = transition(running, JobStatus.ERROR, FailureKind.WRONG_9PATCH, "bad pixel")
    assert failed.failure is FailureKind.WRONG_9PATCH
    assert failed.reason == "bad pixel"


@pytest.mark.parametrize(
    "path",
    [
        [JobStatus.FINISHED],
        [JobStatus.PENDING],
        [JobStatus.IN_PROGRESS, JobStatus.IN_PROGRESS],
        [JobStatus.IN_PROGRESS, JobStatus.FINISHED, JobStatus.IN_PROGRESS],
    ],
)
def test_illegal_transitions(job, path):
    with pytest.raises(ValueError):
        for status in path:
            job = transition(job, status)


def test_terminal_error_is_final(job):
    failed = transition(job, JobStatus.ERROR, failure=FailureKind.DECODE)
    with pytest.raises(ValueError):
        transition(failed, JobStatus.IN_PROGRESS)


def test_error_requires_failure_kind(job):
    with pytest.raises(ValueError):
        transition(job, JobStatus.ERROR)
    with pytest.raises(ValueError):
        transition(job, JobStatus.IN_PROGRESS, failure=FailureKind.ENCODE)
