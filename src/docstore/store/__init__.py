"""Table/view store: databases, tables with ancestor cascading, live views.

Usage:
    from docstore.store import Database, Table, View
"""

from docstore.store.database import Database
from docstore.store.table import Table
from docstore.store.view import View

__all__ = ["Database", "Table", "View"]
