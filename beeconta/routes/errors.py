"""
Translation of failed service envelopes into HTTP errors.
"""

import logging
from typing import Optional, TypeVar

from fastapi import HTTPException, status

from beeconta.services.errors import NotFoundError, PermissionDeniedError
from beeconta.services.result import ServiceResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


def raise_for_result(
    result: ServiceResult[T],
    error_code: str,
    details: str
) -> Optional[T]:
    """
    Return the payload of a successful result, or raise the matching HTTPException.

    - PermissionDeniedError -> 403 {"error": "forbidden"}
    - NotFoundError -> 404 {"error": "not_found"}
    - anything else -> 500 {"error": error_code, "details": details}
    """
    if result.ok:
        return result.data

    error = result.error

    if isinstance(error, PermissionDeniedError):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "forbidden", "details": str(error)}
        )

    if isinstance(error, NotFoundError):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "not_found", "details": str(error)}
        )

    logger.error(f"{error_code}: {error}")
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": error_code, "details": details}
    )
