"""Error taxonomy shared by every layer of the gateway."""


class GatewayError(Exception):
    """Base exception for all caller-facing gateway errors."""

    code = "gateway_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(GatewayError):
    """A player name or identifier could not be translated."""

    code = "not_found"


class ValidationError(GatewayError):
    """An operation received malformed or missing input."""

    code = "validation_error"
