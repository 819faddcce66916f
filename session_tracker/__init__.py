"""
Client-side session and engagement tracker.

Groups host activity into sessions and page-views, reports cumulative
progress through periodic heartbeats, and flushes on hide/unload.
"""

from session_tracker.components.sessions import SessionTracker

__all__ = ["SessionTracker"]
