# Cheese Finder Services Package
"""
Execution contexts the pipeline schedules its work on.

Import from cheesefinder.services.scheduler directly; it needs GLib.
"""
