"""Exception type shared by the request and response helpers."""


class MapsError(Exception):
    """Raised when a request is invalid or the service reports a failure."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message