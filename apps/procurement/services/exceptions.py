"""
Domain exceptions for procurement services.

Exception Hierarchy:
    ProcurementServiceError (base)
    ├── RequestNotFoundError
    ├── RequestValidationError
    │   ├── UnsupportedMediaTypeError
    │   └── PayloadTooLargeError
    └── ImageStorageError

Views translate these into HTTP responses (404 / 400 / 500).
"""


class ProcurementServiceError(Exception):
    """Base exception for procurement services."""
    pass


class RequestNotFoundError(ProcurementServiceError):
    """Raised when a procurement request does not exist."""
    pass


class RequestValidationError(ProcurementServiceError):
    """
    Raised when request data violates a field rule.

    ``errors`` maps field names to lists of messages.
    """

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors or {}


class UnsupportedMediaTypeError(RequestValidationError):
    """Raised when an uploaded attachment is not an image."""
    pass


class PayloadTooLargeError(RequestValidationError):
    """Raised when an uploaded image exceeds the configured size ceiling."""
    pass


class ImageStorageError(ProcurementServiceError):
    """Raised when the image backend cannot store an upload."""
    pass
