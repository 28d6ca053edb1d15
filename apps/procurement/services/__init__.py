"""Services for procurement request business logic."""

from .exceptions import (
    ProcurementServiceError,
    RequestNotFoundError,
    RequestValidationError,
    UnsupportedMediaTypeError,
    PayloadTooLargeError,
    ImageStorageError,
)
from .request_management import (
    create_request,
    get_request_by_id,
    update_request,
    delete_request,
)
from .request_search import (
    search_requests,
)
from .image_storage import (
    ImageStorage,
    ImageStorageConfig,
    LocalImageStorage,
    CloudinaryImageStorage,
    get_image_storage,
)

__all__ = [
    # Exceptions
    'ProcurementServiceError',
    'RequestNotFoundError',
    'RequestValidationError',
    'UnsupportedMediaTypeError',
    'PayloadTooLargeError',
    'ImageStorageError',
    # Request Management
    'create_request',
    'get_request_by_id',
    'update_request',
    'delete_request',
    # Request Search
    'search_requests',
    # Image Storage
    'ImageStorage',
    'ImageStorageConfig',
    'LocalImageStorage',
    'CloudinaryImageStorage',
    'get_image_storage',
]
