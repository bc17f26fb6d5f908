from fastapi import Request
from fastapi.responses import JSONResponse
from typing import Callable

from .enums import ErrorKind


class StorefrontException(Exception):
    """ Base class for all exceptions raised by the storefront services. """

    kind: ErrorKind
    default_detail = "Storefront error"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationException(StorefrontException):
    """ Exception is raised when an add-to-cart payload is malformed. """

    kind = ErrorKind.VALIDATION_ERROR
    default_detail = "Invalid payload"


class EmptyCartException(StorefrontException):
    """ Exception is raised when a user checks out a cart with no items. """

    kind = ErrorKind.EMPTY_CART
    default_detail = "Cart is empty"


class InvalidDiscountCodeException(StorefrontException):
    """ Exception is raised when a discount code is unknown or already used. """

    kind = ErrorKind.INVALID_DISCOUNT_CODE
    default_detail = "Invalid or already used discount code"


class NotFoundException(StorefrontException):
    """ Exception is raised when a looked-up resource does not exist. """

    kind = ErrorKind.NOT_FOUND
    default_detail = "Resource not found"


def create_exception_handler(status_code: int) -> Callable[[Request, Exception], JSONResponse]:
    async def exception_handler(request: Request, exception: StorefrontException):
        return JSONResponse(
            content={"detail": exception.detail, "kind": exception.kind.value},
            status_code=status_code
        )

    return exception_handler
