import enum


class ErrorKind(str, enum.Enum):
    VALIDATION_ERROR = "validation_error"
    EMPTY_CART = "empty_cart"
    INVALID_DISCOUNT_CODE = "invalid_discount_code"
    NOT_FOUND = "not_found"
