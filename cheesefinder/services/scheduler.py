"""
Execution Contexts - Main loop and worker scheduling for the pipeline.

GLibMainContext runs callbacks on the GLib main loop, where all widget
updates must happen. ThreadWorkerContext runs blocking lookups on a
thread pool so the main loop stays responsive.

GLib.idle_add is safe to call from any thread, which is how worker
results are handed back to the main loop.
"""

from concurrent.futures import ThreadPoolExecutor

from gi.repository import GLib
from loguru import logger


def _run_once(callback, args) -> bool:
    """Wrapper for GLib source callbacks so they never repeat."""
    callback(*args)
    return False  # Don't repeat


class GLibMainContext:
    """Primary execution context backed by the default GLib main loop."""

    def post(self, callback, *args) -> int:
        """Queue callback to run on the main loop. Thread-safe."""
        return GLib.idle_add(_run_once, callback, args)

    def call_later(self, delay_ms: int, callback, *args) -> int:
        """
        Run callback on the main loop after delay_ms.

        Returns:
            GLib source id, usable with cancel()
        """
        return GLib.timeout_add(delay_ms, _run_once, callback, args)

    def cancel(self, handle: int) -> None:
        """Remove a pending call_later() source."""
        GLib.source_remove(handle)


class ThreadWorkerContext:
    """
    Background execution context backed by a thread pool.

    Args:
        max_workers: Maximum number of concurrent lookups
    """

    def __init__(self, max_workers: int = 4):
        self.max_workers = max_workers
        self._pool = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="cheesefinder-lookup",
        )

    def submit(self, fn, *args):
        """Run fn(*args) on a worker thread. Returns the Future."""
        future = self._pool.submit(fn, *args)
        future.add_done_callback(_log_unhandled)
        return future

    def shutdown(self) -> None:
        """Drop queued work without waiting for running lookups."""
        self._pool.shutdown(wait=False, cancel_futures=True)
        logger.debug("Worker pool shut down")


def _log_unhandled(future) -> None:
    """Surface exceptions that escaped a worker task."""
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        logger.opt(exception=error).error("Unhandled error in worker task")
