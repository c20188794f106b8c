"""
Search Panel - Cheese search window driven by the event pipeline.

Features:
- Search entry; typing searches after a pause (debounced)
- Search button and Enter search immediately, whatever the text length
- Spinner while a lookup is running
- Results list, or a "Search failed" row when the lookup raises
- Pipeline runs only while the window is visible
- Escape closes the window, clearing the entry
"""

from gi.repository import Gdk, Gtk
from ignis import widgets
from loguru import logger

from cheesefinder.pipeline import EventPipeline
from cheesefinder.search.sources import button_clicks, text_changes
from cheesefinder.utils.helpers import WINDOW_NAMESPACE_PREFIX, close_finder


class SearchPanel:
    """
    Window with a search entry and results list.

    Implements the view side of the pipeline: show_progress_bar(),
    hide_progress_bar(), show_result() and show_error().

    Args:
        engine: Object with a blocking search(query) method
        main_context: Primary execution context (GLib main loop)
        worker_context: Background execution context for lookups
        settings: Settings dictionary from load_settings()
    """

    def __init__(self, engine, main_context, worker_context, settings):
        self.engine = engine
        self.main_context = main_context
        self.worker_context = worker_context
        self.settings = settings

        # Widgets (created in create_window)
        self.search_entry = None
        self.search_button = None
        self.spinner = None
        self.results_box = None
        self.pipeline = None

    def create_window(self):
        """
        Create the search window and its pipeline.

        Returns:
            widgets.Window positioned at top center, initially hidden
        """
        self.search_entry = widgets.Entry(
            placeholder_text="Search cheeses...",
            css_classes=["search-entry"],
            hexpand=True,
        )
        # Enter behaves like the search button
        self.search_entry.connect("activate", lambda _entry: self.search_button.emit("clicked"))

        self.search_button = widgets.Button(
            css_classes=["search-button"],
            child=widgets.Label(label="Search"),
        )

        self.spinner = Gtk.Spinner()
        self.spinner.set_visible(False)

        self.results_box = widgets.Box(
            vertical=True,
            spacing=2,
            css_classes=["search-results"],
        )

        panel_settings = self.settings["panel"]
        window = widgets.Window(
            namespace=f"{WINDOW_NAMESPACE_PREFIX}search",
            anchor=["top"],
            exclusivity="normal",
            kb_mode="on_demand",
            layer="top",
            visible=False,
            default_width=panel_settings["width"],
            default_height=panel_settings["height"],
            child=widgets.Box(
                vertical=True,
                css_classes=["panel", "search-panel"],
                child=[
                    widgets.Box(
                        spacing=8,
                        child=[self.search_entry, self.spinner, self.search_button],
                    ),
                    widgets.Scroll(
                        vexpand=True,
                        hexpand=True,
                        child=self.results_box,
                    ),
                ],
            ),
        )

        search_settings = self.settings["search"]
        self.pipeline = EventPipeline.for_view(
            self,
            button_clicks(self.search_button, self.search_entry),
            text_changes(self.search_entry),
            self.engine.search,
            main_context=self.main_context,
            worker_context=self.worker_context,
            debounce_ms=search_settings["debounce_ms"],
            min_query_length=search_settings["min_query_length"],
        )

        key_controller = Gtk.EventControllerKey()
        key_controller.connect("key-pressed", self._on_key_press)
        window.add_controller(key_controller)

        window.connect("notify::visible", self._on_visibility_changed)

        return window

    def show_progress_bar(self):
        self.spinner.set_visible(True)
        self.spinner.start()

    def hide_progress_bar(self):
        self.spinner.stop()
        self.spinner.set_visible(False)

    def show_result(self, results):
        """Replace the results list with one row per cheese."""
        self._clear_results()
        if not results:
            self.results_box.append(self._create_row("No cheeses found", ["empty-result"]))
            return
        for cheese in results:
            self.results_box.append(self._create_row(cheese, ["result-item"]))

    def show_error(self, error):
        self._clear_results()
        self.results_box.append(self._create_row("Search failed", ["error-result"]))
        logger.debug(f"Displayed search error: {error}")

    def _create_row(self, text, css_classes):
        return widgets.Label(
            label=text,
            css_classes=css_classes,
            halign="start",
            ellipsize="end",
        )

    def _clear_results(self):
        child = self.results_box.get_first_child()
        while child:
            next_child = child.get_next_sibling()
            self.results_box.remove(child)
            child = next_child

    def _on_visibility_changed(self, window, param):
        """Start the pipeline on show, stop it and reset on hide."""
        if window.get_visible():
            if not self.pipeline.is_active:
                self.pipeline.start()
            self.search_entry.grab_focus()
        else:
            if self.pipeline.is_active:
                self.pipeline.stop()
            # Detached before clearing, so this text change is not searched
            self.search_entry.set_text("")
            self.hide_progress_bar()
            self._clear_results()

    def _on_key_press(self, controller, keyval, keycode, state):
        if keyval == Gdk.KEY_Escape:
            close_finder()
            return True
        return False
