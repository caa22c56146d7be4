"""Error taxonomy for URL shortener."""


class URLShortenerError(Exception):
    """Base error for URL shortener operations.

    Each subclass carries the HTTP status the transport layer answers with
    and a stable, user-facing default message.
    """

    status_code: int = 500
    default_message: str = "Internal server error."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidUrl(URLShortenerError):
    """The supplied link is not a well-formed absolute URL."""

    status_code = 400
    default_message = "A valid web address is required."


class InvalidShortCode(URLShortenerError):
    """The supplied custom code does not satisfy the short code policy."""

    status_code = 400
    default_message = "The custom code is not valid."


class CodeConflict(URLShortenerError):
    """The short code is already mapped."""

    status_code = 409
    default_message = "This custom code is already in use."


class NotFound(URLShortenerError):
    status_code = 404
    default_message = "Short link not found."


class Expired(URLShortenerError):
    status_code = 410
    default_message = "This short link has expired."


class PersistenceFailure(URLShortenerError):
    """Durable storage could not be written."""

    status_code = 500
    default_message = "Failed to persist short links."
