"""Shared exceptions module."""

from typing import Optional


class FlickrException(Exception):
    """Base exception for pyflickr."""

    def __init__(self, message: Optional[str] = "Flickr request failed"):
        """Create a new FlickrException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class DecodeError(FlickrException):
    """Raised when a response body is not a decodable JSON object."""

    def __init__(self, method: str, body: str):
        """Create a new DecodeError instance.

        Args:
        ----
            method (str): The API method whose response could not be decoded.
            body (str): The raw, undecoded response body.

        """
        self.method = method
        self.body = body
        super().__init__(f"Unable to decode Flickr response to {method} request: {body}")


class ApiError(FlickrException):
    """Raised when the Flickr API reports ``stat: fail``."""

    def __init__(self, code: int, message: str, method: Optional[str] = None):
        """Create a new ApiError instance.

        Args:
        ----
            code (int): The machine error code from the response envelope.
            message (str): The human readable message from the response envelope.
            method (str, optional): The API method that failed.

        """
        self.code = code
        self.method = method
        super().__init__(message)

    def __repr__(self) -> str:
        return f"ApiError(code={self.code!r}, message={self.message!r}, method={self.method!r})"


class AuthStateError(FlickrException):
    """Raised when an operation needs auth state that has not been established yet."""

    def __init__(self, message: Optional[str] = "No OAuth token is available for this operation"):
        """Create a new AuthStateError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        super().__init__(message)


class OAuthExchangeError(FlickrException):
    """Raised when an OAuth token endpoint returns an unusable response."""

    def __init__(self, message: str, response_text: str = ""):
        """Create a new OAuthExchangeError instance.

        Args:
        ----
            message (str): The error message.
            response_text (str, optional): The body returned by the token endpoint.

        """
        self.response_text = response_text
        super().__init__(message)


class ConfigurationError(FlickrException):
    """Raised when the client cannot be built from the given configuration."""

    pass
