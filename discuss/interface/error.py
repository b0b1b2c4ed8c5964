"""Interface layer error translation."""

from fastapi import HTTPException, status

from discuss.adapter.error import BackendError, BackendNotFoundError
from discuss.domain.error import (
    DomainError,
    InvalidStateError,
    NotAuthorizedError,
    NotFoundError,
)


def to_http_exception(error: DomainError | BackendError) -> HTTPException:
    """Map a domain or backend error to the HTTP error returned to clients.

    Args:
        error: Error raised by a use case

    Returns:
        HTTPException with matching status code
    """
    if isinstance(error, (NotFoundError, BackendNotFoundError)):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, NotAuthorizedError):
        code = status.HTTP_403_FORBIDDEN
    elif isinstance(error, InvalidStateError):
        code = status.HTTP_409_CONFLICT
    elif isinstance(error, BackendError):
        # Client errors from the backend (403 not the author, 400 rejected
        # reply) pass through; anything else is a gateway failure
        if error.status_code is not None and 400 <= error.status_code < 500:
            code = error.status_code
        else:
            code = status.HTTP_502_BAD_GATEWAY
    else:
        code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=code, detail=str(error))
