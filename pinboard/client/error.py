"""Client errors."""


class ClientError(Exception):
    """Raised when a call to the Pinboard API fails.

    Wraps transport errors and non-success responses alike.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
