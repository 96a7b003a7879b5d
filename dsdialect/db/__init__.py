"""Statement execution for dialects.

``dsdialect.db.connection`` pairs managers with dialects and is imported
on its own since it depends on ``dsdialect.dialects``.
"""

from dsdialect.db.base import Manager, QueryResult, as_int, as_string, shape_row
from dsdialect.db.manager import SQLAlchemyManager, bind_positional

__all__ = [
    # Base classes
    "Manager",
    "QueryResult",
    "as_int",
    "as_string",
    "shape_row",
    # SQLAlchemy implementation
    "SQLAlchemyManager",
    "bind_positional",
]
