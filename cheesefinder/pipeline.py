"""
Event Pipeline - Debounced dual-source search dispatch.

Combines two event sources into one stream of queries:
  - continuous input (typing): texts shorter than min_query_length are
    dropped, then bursts are debounced so only the last text with no
    successor for debounce_ms goes through
  - manual trigger (search button): forwarded immediately, unfiltered

Each query runs through:
  on_before_lookup() [main] -> lookup(query) [worker] -> on_result/on_error [main]

Lookups are not capped or superseded, so results of overlapping queries
may arrive in any order. stop() detaches both sources, cancels the
pending debounce timer and abandons in-flight lookups. Their results are
dropped when they reach the main context.

All pipeline state is owned by the main context. Worker threads only
run the lookup and post the outcome back.
"""

from typing import Callable, Optional, Sequence

from loguru import logger

from cheesefinder.errors import IllegalStateError, QueryLookupError, RegistrationError
from cheesefinder.search.sources import EventSource

DEFAULT_DEBOUNCE_MS = 1000
DEFAULT_MIN_QUERY_LENGTH = 2


class EventPipeline:
    """
    Run lookups for queries coming from a manual and a continuous source.

    Args:
        manual_source: Source emitting on explicit triggers
        continuous_source: Source emitting on every text change
        lookup: Blocking search function, run on the worker context
        main_context: Primary context (post, call_later, cancel)
        worker_context: Background context (submit)
        on_before_lookup: Called on the main context before each lookup
        on_result: Called on the main context with the lookup result
        on_error: Called on the main context with a QueryLookupError
        debounce_ms: Quiet window for continuous input
        min_query_length: Shorter continuous texts are ignored
    """

    def __init__(
        self,
        manual_source: EventSource,
        continuous_source: EventSource,
        lookup: Callable[[str], Sequence[str]],
        *,
        main_context,
        worker_context,
        on_before_lookup: Callable[[], None],
        on_result: Callable[[list[str]], None],
        on_error: Callable[[Exception], None],
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        min_query_length: int = DEFAULT_MIN_QUERY_LENGTH,
    ):
        if debounce_ms < 0:
            raise ValueError(f"debounce_ms must be >= 0, got {debounce_ms}")
        if min_query_length < 0:
            raise ValueError(f"min_query_length must be >= 0, got {min_query_length}")

        self.manual_source = manual_source
        self.continuous_source = continuous_source
        self.lookup = lookup
        self.main_context = main_context
        self.worker_context = worker_context
        self.on_before_lookup = on_before_lookup
        self.on_result = on_result
        self.on_error = on_error
        self.debounce_ms = debounce_ms
        self.min_query_length = min_query_length

        self._active = False
        # Bumped on every start/stop; lookups from older runs are discarded
        self._generation = 0
        self._debounce_handle = None

    @classmethod
    def for_view(cls, view, manual_source, continuous_source, lookup, **kwargs) -> "EventPipeline":
        """
        Build a pipeline that drives a view's progress and result display.

        The view must provide show_progress_bar(), hide_progress_bar(),
        show_result(results) and show_error(error).
        """
        def on_result(results):
            view.hide_progress_bar()
            view.show_result(results)

        def on_error(error):
            view.hide_progress_bar()
            view.show_error(error)

        return cls(
            manual_source,
            continuous_source,
            lookup,
            on_before_lookup=view.show_progress_bar,
            on_result=on_result,
            on_error=on_error,
            **kwargs,
        )

    @property
    def is_active(self) -> bool:
        return self._active

    def start(self) -> None:
        """
        Attach both sources and begin dispatching queries.

        Raises:
            IllegalStateError: If the pipeline is already started
            RegistrationError: If a source fails to attach. Any source
                attached before the failure is released again.
        """
        if self._active:
            raise IllegalStateError("Pipeline already started; call stop() first")

        self._generation += 1
        self._active = True

        attached = []
        try:
            self.continuous_source.attach(self._on_continuous)
            attached.append(self.continuous_source)
            self.manual_source.attach(self._on_manual)
            attached.append(self.manual_source)
        except RegistrationError:
            self._active = False
            self._generation += 1
            for source in attached:
                source.release()
            raise

        logger.debug(
            f"Pipeline started (debounce={self.debounce_ms}ms, "
            f"min_length={self.min_query_length})"
        )

    def stop(self) -> None:
        """
        Detach both sources, cancel the debounce timer and abandon
        in-flight lookups.

        Raises:
            IllegalStateError: If the pipeline is not started
        """
        if not self._active:
            raise IllegalStateError("Pipeline is not started")

        self._active = False
        self._generation += 1
        self._cancel_debounce()

        try:
            self.continuous_source.release()
        finally:
            self.manual_source.release()

        logger.debug("Pipeline stopped")

    def _on_continuous(self, text: str) -> None:
        if not self._active:
            return
        if len(text) < self.min_query_length:
            return

        self._cancel_debounce()
        self._debounce_handle = self.main_context.call_later(
            self.debounce_ms, self._on_debounce_elapsed, self._generation, text
        )

    def _on_debounce_elapsed(self, generation: int, text: str) -> None:
        if generation != self._generation:
            return
        self._debounce_handle = None
        self._dispatch(text)

    def _on_manual(self, text: str) -> None:
        if not self._active:
            return
        self._dispatch(text)

    def _cancel_debounce(self) -> None:
        handle, self._debounce_handle = self._debounce_handle, None
        if handle is not None:
            self.main_context.cancel(handle)

    def _dispatch(self, query: str) -> None:
        logger.debug(f"Dispatching lookup for '{query}'")
        self.on_before_lookup()
        self.worker_context.submit(self._run_lookup, self._generation, query)

    def _run_lookup(self, generation: int, query: str) -> None:
        """Worker side: run the lookup and hand the outcome to the main context."""
        try:
            results = list(self.lookup(query))
        except Exception as e:
            logger.warning(f"Lookup failed for '{query}': {e}")
            error = QueryLookupError(query)
            error.__cause__ = e
            self.main_context.post(self._deliver_error, generation, error)
            return

        self.main_context.post(self._deliver_result, generation, query, results)

    def _is_current(self, generation: int) -> bool:
        return self._active and generation == self._generation

    def _deliver_result(self, generation: int, query: str, results: list[str]) -> None:
        if not self._is_current(generation):
            logger.debug(f"Discarding stale result for '{query}'")
            return
        logger.debug(f"Lookup for '{query}' returned {len(results)} results")
        self.on_result(results)

    def _deliver_error(self, generation: int, error: QueryLookupError) -> None:
        if not self._is_current(generation):
            logger.debug(f"Discarding stale error for '{error.query}'")
            return
        self.on_error(error)
