"""
Recognition Queue - One-at-a-time access to the shared OCR engine

Recognition requests go through a FIFO queue drained by one worker task per
event loop. The engine call itself runs under EngineHandle.recognize, whose
lock spans the whole blocking call, so at most one recognition is in flight
in the process even when several event loops (threads each running
asyncio.run) share the queue, or when a cancelled worker leaves its thread
still running. A job that fails settles its own future with an EngineError
and the worker moves on to the next job.

Callers wait on their job through asyncio.shield: a caller that times out
stops waiting, but its job is neither cancelled nor skipped, and the jobs
queued behind it still start only after it settles.
"""

import asyncio
import itertools
import logging
import threading
import time
import weakref
from dataclasses import dataclass, field
from typing import List, Optional

from ..exceptions import EngineError, EngineTimeoutError
from .engine import EngineHandle, get_engine_handle

logger = logging.getLogger(__name__)


@dataclass
class RecognitionJob:
    """One image waiting for (or undergoing) recognition."""
    job_id: int
    image_bytes: bytes
    future: asyncio.Future
    submitted_at: float = field(default_factory=time.monotonic)


@dataclass
class LoopWorker:
    """Jobs and consumer task owned by one event loop."""
    jobs: asyncio.Queue = field(default_factory=asyncio.Queue)
    task: Optional[asyncio.Task] = None
    current_job: Optional[RecognitionJob] = None


def _mark_retrieved(future: asyncio.Future):
    # A caller that timed out never reads the result; keep asyncio quiet about it
    if not future.cancelled():
        future.exception()


class RecognitionQueue:
    """FIFO queue in front of the OCR engine, usable from any event loop."""

    def __init__(self, engine_handle: EngineHandle):
        self.engine_handle = engine_handle
        self._workers = weakref.WeakKeyDictionary()
        self._workers_lock = threading.Lock()
        self._job_ids = itertools.count(1)

    def _live_workers(self) -> List[LoopWorker]:
        with self._workers_lock:
            return list(self._workers.values())

    @property
    def pending_count(self) -> int:
        return sum(worker.jobs.qsize() for worker in self._live_workers())

    @property
    def current_job(self) -> Optional[RecognitionJob]:
        for worker in self._live_workers():
            if worker.current_job is not None:
                return worker.current_job
        return None

    def _ensure_worker(self) -> LoopWorker:
        loop = asyncio.get_running_loop()

        with self._workers_lock:
            worker = self._workers.get(loop)
            if worker is None:
                worker = LoopWorker()
                self._workers[loop] = worker

        if worker.task is None or worker.task.done():
            worker.task = loop.create_task(self._consume(worker), name="ocr-recognition-queue")
            logger.debug("Started OCR recognition worker")

        return worker

    def submit(self, image_bytes: bytes) -> asyncio.Future:
        """Append a job and return the future it will settle."""
        worker = self._ensure_worker()
        future = asyncio.get_running_loop().create_future()
        future.add_done_callback(_mark_retrieved)

        job = RecognitionJob(job_id=next(self._job_ids), image_bytes=image_bytes, future=future)
        worker.jobs.put_nowait(job)
        logger.debug(f"Queued recognition job #{job.job_id} ({worker.jobs.qsize()} waiting)")
        return future

    async def recognize(self, image_bytes: bytes, timeout: Optional[float] = None) -> str:
        """
        Recognize image_bytes once every earlier job has settled.

        Raises:
            EngineTimeoutError: the job did not settle within timeout seconds
            EngineError: the engine failed to start or to recognize the image
        """
        future = self.submit(image_bytes)
        if timeout is None:
            return await asyncio.shield(future)

        try:
            return await asyncio.wait_for(asyncio.shield(future), timeout)
        except asyncio.TimeoutError as e:
            raise EngineTimeoutError(f"OCR recognition timed out after {timeout:g}s") from e

    async def _consume(self, worker: LoopWorker):
        while True:
            job = await worker.jobs.get()
            worker.current_job = job
            try:
                await self._run(job)
            finally:
                worker.current_job = None
                worker.jobs.task_done()

    async def _run(self, job: RecognitionJob):
        waited = time.monotonic() - job.submitted_at

        try:
            engine = await self.engine_handle.get()
            started = time.monotonic()
            text = await asyncio.to_thread(self.engine_handle.recognize, engine, job.image_bytes)
        except EngineError as e:
            logger.error(f"❌ Recognition job #{job.job_id} failed: {e}")
            self._settle(job, error=e)
        except Exception as e:
            logger.error(f"❌ Recognition job #{job.job_id} failed: {e}", exc_info=True)
            self._settle(job, error=EngineError(f"OCR processing failed: {e}"))
        else:
            text = text or ''
            logger.info(f"✅ Recognition job #{job.job_id} complete: {len(text)} characters "
                        f"in {time.monotonic() - started:.2f}s (queued {waited:.2f}s)")
            self._settle(job, text=text)

    def _settle(self, job: RecognitionJob, text: Optional[str] = None,
                error: Optional[BaseException] = None):
        if job.future.done():
            return
        if error is not None:
            job.future.set_exception(error)
        else:
            job.future.set_result(text)

    async def close(self):
        """
        Stop this event loop's worker and fail every job it has not finished.

        An engine call already running in its thread keeps the engine lock
        until it returns, so work submitted after close() still waits for it.
        """
        loop = asyncio.get_running_loop()
        with self._workers_lock:
            worker = self._workers.pop(loop, None)
        if worker is None:
            return

        running = worker.current_job
        if worker.task is not None and not worker.task.done():
            worker.task.cancel()
            await asyncio.gather(worker.task, return_exceptions=True)

        if running is not None:
            self._settle(running, error=EngineError("Recognition queue closed"))

        while not worker.jobs.empty():
            job = worker.jobs.get_nowait()
            self._settle(job, error=EngineError("Recognition queue closed"))
            worker.jobs.task_done()


# Singleton instance
_recognition_queue = None
_recognition_queue_lock = threading.Lock()


def get_recognition_queue() -> RecognitionQueue:
    """Get or create the process-wide recognition queue."""
    global _recognition_queue

    with _recognition_queue_lock:
        if _recognition_queue is None:
            _recognition_queue = RecognitionQueue(get_engine_handle())

    return _recognition_queue
