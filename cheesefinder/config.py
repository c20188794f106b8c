"""
Cheese Finder - Main Ignis Configuration

This file is the entry point for Ignis. It loads settings and the cheese
list, then creates the search window.

Usage:
  ignis init -c /path/to/cheesefinder/config.py
  ignis open-window cheesefinder-search
"""

import os

from ignis.app import IgnisApp
from loguru import logger

from cheesefinder.panels.search import SearchPanel
from cheesefinder.search.engine import CheeseSearchEngine
from cheesefinder.services.scheduler import GLibMainContext, ThreadWorkerContext
from cheesefinder.utils.helpers import load_cheeses, load_settings

config_dir = os.path.dirname(os.path.realpath(__file__))

app = IgnisApp.get_default()

styles_dir = os.path.join(config_dir, "styles")
try:
    app.apply_css(os.path.join(styles_dir, "main.css"))
except Exception as e:
    logger.warning(f"Could not load main.css: {e}")

settings = load_settings()

engine = CheeseSearchEngine(
    load_cheeses(),
    max_results=settings["search"]["max_results"],
    delay_ms=settings["search"]["lookup_delay_ms"],
)
worker_context = ThreadWorkerContext(max_workers=settings["worker"]["max_workers"])
app.connect("shutdown", lambda _app: worker_context.shutdown())

search_panel = SearchPanel(engine, GLibMainContext(), worker_context, settings)
search_window = search_panel.create_window()

# Keep a reference so the panel outlives this module's globals
search_window.panel = search_panel

logger.info("Cheese Finder initialized; open with: ignis open-window cheesefinder-search")
