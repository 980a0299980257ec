"""Mini README: HTTP interface for the sales tracker.

Exports the FastAPI application factory. The browser client it serves lives
in the ``static`` directory next to this module.
"""

from .web_app import create_application

__all__ = ["create_application"]
