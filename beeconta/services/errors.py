"""
Domain errors raised inside service bodies.

Every service converts these (and backend errors) into a failed
ServiceResult, so they never escape the service layer. Routes inspect the
error type to pick the HTTP status.
"""


class ServiceError(Exception):
    """Base class for application-level failures."""


class PermissionDeniedError(ServiceError):
    """The user lacks the access level required for a mutation."""


class NotFoundError(ServiceError):
    """A lookup by id matched no row (or no active row)."""
