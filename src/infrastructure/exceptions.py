from typing import Optional, Any

class InfrastructureError(Exception):
    """Base exception for infrastructure-related errors."""
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.details = details

class AWSError(InfrastructureError):
    """Raised when AWS operations fail."""
    def __init__(self, message: str, operation: Optional[str] = None,
                 error_code: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.operation = operation
        self.error_code = error_code
