"""
Uniform result envelope returned by every service function.

A service either succeeds with a payload (possibly None, e.g. for soft
deletes) or fails with an error. Both fields are never set together, and a
failure always carries an error.
"""

import functools
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """
    Envelope with an optional payload and an optional error.

    Attributes:
        data: Payload on success
        error: The underlying exception on failure
    """
    data: Optional[T] = None
    error: Optional[Exception] = None

    def __post_init__(self) -> None:
        if self.data is not None and self.error is not None:
            raise ValueError("ServiceResult cannot carry both data and error")

    @classmethod
    def success(cls, data: Optional[T] = None) -> "ServiceResult[T]":
        return cls(data=data)

    @classmethod
    def failure(cls, error: Exception) -> "ServiceResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None


def service_operation(
    description: str
) -> Callable[[Callable[..., Awaitable[Any]]], Callable[..., Awaitable[ServiceResult[Any]]]]:
    """
    Wrap an async service body so it returns a ServiceResult.

    The wrapped body returns its payload or raises. Any exception is logged
    on the service module's logger and turned into a failed result; nothing
    propagates past the service layer.

    Args:
        description: What the operation does, used in the log line
                     ("Failed to <description>: ...")

    Usage:
        >>> @service_operation("list bank accounts")
        >>> async def list_company_bank_accounts(client, company_id):
        ...     result = client.table("contas_bancarias").select("*").execute()
        ...     return result.data or []
    """
    def decorator(
        func: Callable[..., Awaitable[Any]]
    ) -> Callable[..., Awaitable[ServiceResult[Any]]]:
        logger = logging.getLogger(func.__module__)

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> ServiceResult[Any]:
            try:
                data = await func(*args, **kwargs)
            except Exception as e:
                logger.error(f"Failed to {description}: {e}")
                return ServiceResult.failure(e)
            return ServiceResult.success(data)

        return wrapper

    return decorator
