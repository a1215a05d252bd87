from fastapi import HTTPException


class MocksterError(HTTPException):
    """Base exception for mockster.

    Raised for caller mistakes (bad query syntax, impossible ranges). The
    message is always safe to return to the client.
    """

    def __init__(self, message: str, status_code: int = 400):
        """Initialize the mockster error.

        Args:
            message: The error message.
            status_code: The HTTP status code to return.
        """
        super().__init__(status_code=status_code, detail=message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class ParseError(MocksterError):
    """Malformed selector or directive value."""


class RangeError(MocksterError):
    """Value bounds or time range that cannot be synthesized."""


class InvalidParameterError(MocksterError):
    """Request parameter (time, step, missing query) that cannot be used."""

    def __init__(self, name: str, reason: str):
        """Initialize with the offending parameter name."""
        super().__init__(f'invalid parameter "{name}": {reason}')
        self.name = name
