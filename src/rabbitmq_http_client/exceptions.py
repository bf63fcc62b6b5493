"""
RabbitMQ HTTP client exceptions.

Custom exception hierarchy for the client.
"""


class RabbitMQHTTPError(Exception):
    """Base exception for all RabbitMQ HTTP client errors."""

    def __init__(self, message: str, code: int | None = None):
        self.message = message
        self.code = code
        super().__init__(message)


class InvalidURLError(RabbitMQHTTPError):
    """Raised when a URL string cannot be parsed as an absolute URL."""

    def __init__(self, message: str, url: str | None = None):
        self.url = url
        super().__init__(message)


class MissingRequiredFieldError(RabbitMQHTTPError):
    """Raised when client parameters are validated with a mandatory field unset."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} is required; it must not be None or empty")


class ConnectionError(RabbitMQHTTPError):
    """Raised when the management API cannot be reached."""

    pass


class HTTPStatusError(RabbitMQHTTPError):
    """Raised when the management API answers with an error status."""

    def __init__(self, message: str, code: int | None = None, body: str | None = None):
        self.body = body
        super().__init__(message, code)


class ResponseDecodeError(RabbitMQHTTPError):
    """Raised when a successful response body is not JSON or does not match the expected type."""

    def __init__(self, message: str, code: int | None = None, body: str | None = None):
        self.body = body
        super().__init__(message, code)
