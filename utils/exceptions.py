"""Errors raised by the location core and rendered by the app's exception handlers."""


class LocatorError(Exception):
    """Base class for every error surfaced to a caller."""

    status_code = 400
    code = "LOCATOR_ERROR"

    def __init__(self, message: str = "Request could not be processed") -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(LocatorError):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message)


class PermissionDeniedError(LocatorError):
    status_code = 403
    code = "PERMISSION_DENIED"

    def __init__(self, message: str = "Permission denied") -> None:
        super().__init__(message)


class InvalidArgumentError(LocatorError):
    status_code = 400
    code = "INVALID_ARGUMENT"


class VendorInactiveError(InvalidArgumentError):
    """Location write attempted while the seller is not active."""

    status_code = 409
    code = "VENDOR_INACTIVE"


class InternalError(LocatorError):
    """Persistence collaborator failure."""

    status_code = 500
    code = "INTERNAL"

    def __init__(self, message: str = "Internal error") -> None:
        super().__init__(message)
