# src/infrastructure/aws/exceptions.py
from botocore.exceptions import (
    ClientError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)

from src.infrastructure.exceptions import AWSError

class AuthorizationError(AWSError):
    """Raised when the caller is not allowed to perform the operation."""
    pass

class ThrottlingError(AWSError):
    """Raised when AWS rate limits the request."""
    pass

class NetworkError(AWSError):
    """Raised when AWS cannot be reached or times out."""
    pass

class ResourceNotFoundError(AWSError):
    """Raised when an AWS resource cannot be found."""
    pass


_ERROR_CODE_MAP = {
    'UnauthorizedOperation': AuthorizationError,
    'AccessDenied': AuthorizationError,
    'AccessDeniedException': AuthorizationError,
    'AuthFailure': AuthorizationError,
    'Throttling': ThrottlingError,
    'ThrottlingException': ThrottlingError,
    'RequestLimitExceeded': ThrottlingError,
    'RequestTimeout': NetworkError,
    'ServiceUnavailable': NetworkError,
    'ResourceNotFound': ResourceNotFoundError,
    'InvalidInstanceID.NotFound': ResourceNotFoundError,
}


def convert_client_error(error: Exception, operation: str) -> AWSError:
    """Convert a botocore error raised by ``operation`` to an AWSError."""
    if isinstance(error, ClientError):
        error_code = error.response.get('Error', {}).get('Code', 'Unknown')
        error_message = error.response.get('Error', {}).get('Message', str(error))
        error_class = _ERROR_CODE_MAP.get(error_code, AWSError)
        return error_class(
            f"AWS {operation} failed: {error_code} - {error_message}",
            operation=operation,
            error_code=error_code,
            details=error.response,
        )
    if isinstance(error, (EndpointConnectionError, ConnectTimeoutError, ReadTimeoutError)):
        return NetworkError(f"AWS {operation} failed: {error}", operation=operation)
    return AWSError(f"AWS {operation} failed: {error}", operation=operation)
