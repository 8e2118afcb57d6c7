class PayloadError(Exception):
    """Raised when a request payload cannot be used."""


class PayloadValidationError(PayloadError):
    """Raised when raw payload data fails domain validation."""
