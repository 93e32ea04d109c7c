"""Translation of service errors into HTTP responses."""
from contextlib import contextmanager

from fastapi import HTTPException, status

from app.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)


@contextmanager
def http_errors():
    """
    Re-raise service errors as HTTPException with the matching status code.

    Example:
        >>> with http_errors():
        ...     return await service.get_vision_board(user_id, board_id)
    """
    try:
        yield
    except (ValidationError, ConflictError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e)) from e
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)) from e
