"""Concurrent fan-out of conversion jobs.

Jobs run on a fixed ``ThreadPoolExecutor`` sized to the host's CPU count.
Rescaling runs fully in parallel; the only shared resources are the codec
(``utils.loader.codec_lock``) and output-directory creation
(``utils.files.folder_lock``).

Status changes are handed to a ``StatusChannel``, which calls the observer
from its own thread so a slow observer never holds up a worker.
"""
from __future__ import annotations

import logging
import os
import queue
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from .densities import DEFAULT_CATALOG, Density
from .job import ConversionJob
from .task import run_job

logger = logging.getLogger(__name__)

Observer = Callable[[ConversionJob], None]

_STOP = object()


class StatusChannel:
    """Delivers job updates to an observer on a dedicated thread."""

    def __init__(self, observer: Observer) -> None:
        self._observer = observer
        self._queue: "queue.Queue[object]" = queue.Queue()
        self._thread = threading.Thread(target=self._dispatch, name="dpiforge-status", daemon=True)
        self._thread.start()

    def publish(self, job: ConversionJob) -> None:
        self._queue.put_nowait(job)

    def close(self) -> None:
        """Deliver everything already published, then stop the thread."""
        if not self._thread.is_alive():
            return
        self._queue.put_nowait(_STOP)
        self._thread.join()

    def _dispatch(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                break
            try:
                self._observer(item)  # type: ignore[arg-type]
            except Exception:
                logger.exception("Status observer failed for %s", item)


class FanoutScheduler:
    """Runs conversion jobs concurrently on a bounded worker pool.

    Submission never blocks. Use ``wait()`` to collect terminal jobs.
    """

    def __init__(
        self,
        catalog: Optional[Sequence[Density]] = None,
        max_workers: Optional[int] = None,
        observer: Optional[Observer] = None,
    ) -> None:
        self.catalog: Tuple[Density, ...] = tuple(catalog or DEFAULT_CATALOG)
        if max_workers is None:
            max_workers = os.cpu_count() or 1
        self.max_workers = max_workers
        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self._executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="dpiforge")
        self._channel = StatusChannel(observer) if observer is not None else None
        self._futures: List["Future[ConversionJob]"] = []

    def _publish(self, job: ConversionJob) -> None:
        if self._channel is not None:
            self._channel.publish(job)

    def submit(self, source_path: Union[str, Path], input_density: Density) -> "Future[ConversionJob]":
        """Queue one source image and return a future for its final job."""
        job = ConversionJob(Path(source_path), input_density)
        self._publish(job)
        future = self._executor.submit(run_job, job, self.catalog, self._publish)
        future.add_done_callback(_log_crash)
        self._futures.append(future)
        return future

    def submit_batch(self, items: Iterable[Tuple[Union[str, Path], Density]]) -> List["Future[ConversionJob]"]:
        return [self.submit(path, density) for path, density in items]

    def wait(self) -> List[ConversionJob]:
        """Block until every job submitted so far is terminal.

        Results come back in submission order. Collected futures are
        released, so a later ``wait()`` only returns jobs submitted after
        this one.
        """
        pending, self._futures = self._futures, []
        return [f.result() for f in pending]

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
        if self._channel is not None and wait:
            self._channel.close()

    def __enter__(self) -> "FanoutScheduler":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown(wait=True)


def _log_crash(future: "Future[ConversionJob]") -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error("Conversion job crashed", exc_info=exc)


def convert_batch(
    paths: Iterable[Union[str, Path]],
    input_density: Density,
    catalog: Optional[Sequence[Density]] = None,
    observer: Optional[Observer] = None,
    max_workers: Optional[int] = None,
) -> List[ConversionJob]:
    """Convert every path and block until all jobs are terminal."""
    with FanoutScheduler(catalog=catalog, max_workers=max_workers, observer=observer) as scheduler:
        scheduler.submit_batch((p, input_density) for p in paths)
        return scheduler.wait()
