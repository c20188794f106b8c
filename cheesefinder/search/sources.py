"""
Event Sources - Turn widget callbacks into query string emitters.

Two variants feed the search pipeline:
  - ManualTrigger: emits the current text only when a trigger fires
    (search button click)
  - ContinuousInput: emits the text on every change (typing)

A source is built from a registration function. Registering hands the
source's callback to the widget layer and returns a release hook that
undoes the registration. The hook runs at most once per attachment.
"""

from typing import Callable, Optional

from loguru import logger

from cheesefinder.errors import RegistrationError

ReleaseHook = Callable[[], None]
Emit = Callable[[str], None]


class EventSource:
    """Base class holding the registration/release lifecycle."""

    name = "source"

    def __init__(self):
        self._release: Optional[ReleaseHook] = None

    @property
    def attached(self) -> bool:
        return self._release is not None

    def attach(self, emit: Emit) -> None:
        """
        Register with the widget layer so that queries flow into emit.

        Raises:
            RegistrationError: If already attached or registration fails
        """
        if self._release is not None:
            raise RegistrationError(f"{self.name} is already attached")

        try:
            release = self._register(emit)
        except RegistrationError:
            raise
        except Exception as e:
            raise RegistrationError(f"Failed to attach {self.name}: {e}") from e

        if not callable(release):
            raise RegistrationError(f"{self.name} registration returned no release hook")

        self._release = release
        logger.debug(f"Attached {self.name}")

    def release(self) -> None:
        """Run the release hook if attached. Safe to call more than once."""
        release, self._release = self._release, None
        if release is None:
            return
        release()
        logger.debug(f"Released {self.name}")

    def _register(self, emit: Emit) -> ReleaseHook:
        raise NotImplementedError


class ManualTrigger(EventSource):
    """
    Emit the current query text whenever an explicit trigger fires.

    Args:
        register_trigger: Takes a no-argument callback, returns a release hook
        read_text: Returns the query text at trigger time
    """

    name = "manual trigger"

    def __init__(self, register_trigger: Callable[[Callable[[], None]], ReleaseHook],
                 read_text: Callable[[], str]):
        super().__init__()
        self._register_trigger = register_trigger
        self._read_text = read_text

    def _register(self, emit: Emit) -> ReleaseHook:
        return self._register_trigger(lambda: emit(self._read_text()))


class ContinuousInput(EventSource):
    """
    Emit the query text on every change.

    Args:
        register_change_listener: Takes a callback receiving the current
            text, returns a release hook
    """

    name = "continuous input"

    def __init__(self, register_change_listener: Callable[[Emit], ReleaseHook]):
        super().__init__()
        self._register_change_listener = register_change_listener

    def _register(self, emit: Emit) -> ReleaseHook:
        return self._register_change_listener(emit)


def button_clicks(button, entry) -> ManualTrigger:
    """
    ManualTrigger bound to a button's "clicked" signal.

    Args:
        button: Gtk.Button (or Ignis Button) acting as the trigger
        entry: Gtk.Entry whose text is read when the button is clicked
    """
    def register(callback):
        handler_id = button.connect("clicked", lambda _button: callback())
        return lambda: button.disconnect(handler_id)

    return ManualTrigger(register, entry.get_text)


def text_changes(entry) -> ContinuousInput:
    """ContinuousInput bound to an entry's "changed" signal."""
    def register(emit):
        handler_id = entry.connect("changed", lambda editable: emit(editable.get_text()))
        return lambda: entry.disconnect(handler_id)

    return ContinuousInput(register)
