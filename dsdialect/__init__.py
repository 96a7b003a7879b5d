"""dsdialect: one interface over relational database engine differences.

dsdialect provides:
- Table, key and schema discovery
- Sequence lookup
- Datastore and table create/drop
- Foreign key check toggling
- MySQL, SQLite, PostgreSQL, Oracle and SQL Server dialects
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Core exports
from dsdialect.exceptions import (
    DSDialectError,
    ConfigurationError,
    DatabaseError,
    UnsupportedDialectError,
)

__all__ = [
    "__version__",
    "DSDialectError", 
    "ConfigurationError",
    "DatabaseError",
    "UnsupportedDialectError",
]
