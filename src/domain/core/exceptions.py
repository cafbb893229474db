# src/domain/core/exceptions.py
from typing import Any, Optional, List

class DomainException(Exception):
    """Base exception for all domain-specific errors."""
    pass

class ValidationError(DomainException):
    """Raised when domain validation fails."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.details = details

class InvalidSelectionError(ValidationError):
    """Raised when a selection count or percentage is out of range."""
    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(f"Invalid {field} {value!r}: {reason}", {field: value})
        self.field = field
        self.value = value

class ConfigurationError(DomainException):
    """Raised when there's an issue with configuration."""
    def __init__(self, message: str, missing_fields: Optional[List[str]] = None):
        super().__init__(message)
        self.missing_fields = missing_fields or []
