"""Core exceptions for dsdialect."""

from typing import Any, Dict, List, Optional


class DSDialectError(Exception):
    """Base exception for all dsdialect errors."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(DSDialectError):
    """Raised when there's an error in configuration parsing or validation."""
    pass


class DatabaseError(DSDialectError):
    """Raised when a manager fails to execute or read a statement."""
    
    def __init__(
        self, 
        message: str, 
        database_type: Optional[str] = None,
        statement: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.database_type = database_type
        self.statement = statement


class UnsupportedDialectError(DSDialectError):
    """Raised when a requested dialect is not registered."""

    def __init__(self, name: str, available: List[str]) -> None:
        super().__init__(
            f"Unsupported dialect '{name}'. Available: {', '.join(available)}",
            details={'available': available},
        )
        self.dialect_name = name
        self.available = available
