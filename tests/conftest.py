"""
Shared test fixtures for the Cheese Finder test suite.

Provides deterministic execution contexts (a virtual-clock main context
and synchronous/deferred workers), fake widgets that act as event
sources, and real settings and cheese list files on disk.
"""

import pytest
import toml

from cheesefinder.pipeline import EventPipeline
from cheesefinder.search.sources import ContinuousInput, ManualTrigger


class FakeMainContext:
    """
    Main context with a virtual clock.

    post() queues callbacks until run_pending(). call_later() timers fire
    when advance() moves the clock past their due time.
    """

    def __init__(self):
        self.now = 0
        self._timers = {}
        self._posted = []
        self._next_handle = 1
        self.cancelled = []

    def post(self, callback, *args):
        self._posted.append((callback, args))

    def call_later(self, delay_ms, callback, *args):
        handle = self._next_handle
        self._next_handle += 1
        self._timers[handle] = (self.now + delay_ms, handle, callback, args)
        return handle

    def cancel(self, handle):
        # KeyError here means a timer was cancelled twice or after firing
        del self._timers[handle]
        self.cancelled.append(handle)

    @property
    def pending_timers(self):
        return len(self._timers)

    def run_pending(self):
        while self._posted:
            callback, args = self._posted.pop(0)
            callback(*args)

    def advance(self, ms):
        """Move the clock forward, firing due timers in order."""
        target = self.now + ms
        while True:
            due = [timer for timer in self._timers.values() if timer[0] <= target]
            if not due:
                break
            when, handle, callback, args = min(due)
            del self._timers[handle]
            self.now = when
            callback(*args)
            self.run_pending()
        self.now = target


class InlineWorker:
    """Runs submitted work immediately on the calling thread."""

    def __init__(self):
        self.submitted = 0

    def submit(self, fn, *args):
        self.submitted += 1
        fn(*args)


class DeferredWorker:
    """Holds submitted work until run_all() or run_next()."""

    def __init__(self):
        self.jobs = []

    def submit(self, fn, *args):
        self.jobs.append((fn, args))

    def run_next(self, index=0):
        fn, args = self.jobs.pop(index)
        fn(*args)

    def run_all(self):
        while self.jobs:
            self.run_next()


class FakeTextField:
    """Text field exposing a change-listener registration."""

    def __init__(self, text=""):
        self.text = text
        self.listeners = []
        self.release_count = 0

    def register_change_listener(self, callback):
        self.listeners.append(callback)

        def release():
            self.release_count += 1
            self.listeners.remove(callback)

        return release

    def type(self, text):
        self.text = text
        for listener in list(self.listeners):
            listener(text)


class FakeButton:
    """Button exposing a click-trigger registration."""

    def __init__(self):
        self.listeners = []
        self.release_count = 0

    def register_trigger(self, callback):
        self.listeners.append(callback)

        def release():
            self.release_count += 1
            self.listeners.remove(callback)

        return release

    def click(self):
        for listener in list(self.listeners):
            listener()


class RecordingView:
    """View that records every call in order."""

    def __init__(self):
        self.calls = []

    def show_progress_bar(self):
        self.calls.append(("show_progress_bar",))

    def hide_progress_bar(self):
        self.calls.append(("hide_progress_bar",))

    def show_result(self, results):
        self.calls.append(("show_result", results))

    def show_error(self, error):
        self.calls.append(("show_error", error))

    def names(self):
        return [call[0] for call in self.calls]


class RecordingLookup:
    """Lookup that records queries and answers with a canned result."""

    def __init__(self, results=None, error=None):
        self.queries = []
        self.results = results
        self.error = error

    def __call__(self, query):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        if self.results is not None:
            return self.results
        return [f"{query} result"]


@pytest.fixture
def main_context():
    return FakeMainContext()


@pytest.fixture
def worker():
    return InlineWorker()


@pytest.fixture
def field():
    return FakeTextField()


@pytest.fixture
def button():
    return FakeButton()


@pytest.fixture
def view():
    return RecordingView()


@pytest.fixture
def lookup():
    return RecordingLookup()


@pytest.fixture
def make_pipeline(main_context, worker, field, button, view, lookup):
    """Factory building a view-bound pipeline over the fake widgets."""

    def factory(**overrides):
        kwargs = {
            "main_context": main_context,
            "worker_context": worker,
        }
        kwargs.update(overrides)
        lookup_fn = kwargs.pop("lookup", lookup)
        return EventPipeline.for_view(
            view,
            ManualTrigger(button.register_trigger, lambda: field.text),
            ContinuousInput(field.register_change_listener),
            lookup_fn,
            **kwargs,
        )

    return factory


@pytest.fixture
def tmp_settings(tmp_path):
    """Create a real settings TOML file overriding some sections."""
    settings_path = tmp_path / "settings.toml"
    data = {
        "search": {"debounce_ms": 250, "max_results": 5},
        "worker": {"max_workers": 2},
    }
    settings_path.write_text(toml.dumps(data))
    return settings_path


@pytest.fixture
def tmp_cheeses(tmp_path):
    """Create a real cheese list file with comments and blank lines."""
    cheeses_path = tmp_path / "cheeses.txt"
    cheeses_path.write_text(
        "# Test cheeses\n"
        "Cheddar\n"
        "\n"
        "Brie de Meaux\n"
        "  White Stilton  \n"
        "Stilton\n"
    )
    return cheeses_path
