"""Mini README: Core package initializer for the sales tracker service.

The service records income and expense entries in a relational database and
serves CRUD endpoints plus a date-ranged analytics summary to a static web
client. Subpackages:

    * ledger - entry types and the pure statistics helpers.
    * storage - table definitions, migrations and the entry store.
    * interface - the FastAPI application factory and the browser client.
"""

from .logging_utils import get_logger

__version__ = "0.1.0"

__all__ = ["__version__", "get_logger"]
