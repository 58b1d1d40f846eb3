"""Exception classes for the gpodder.net API client."""


class NetworkError(Exception):
    """Any failure while talking to the gpodder.net service.

    Covers connection and timeout failures, non-2xx HTTP responses and
    response bodies that cannot be decoded into the expected shape.

    Attributes:
        message: Human-readable description
        status_code: HTTP status code if the server answered, else None
        response: Raw response body text if the server answered, else None
    """

    def __init__(self, message: str, status_code: int | None = None, response: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response

    def __str__(self) -> str:
        return self.message
