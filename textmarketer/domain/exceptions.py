"""
Exceptions for the TextMarketer gateway client.

Four failure families are distinguished:
- EndpointException: the gateway reported one or more errors
- ProtocolViolationError: the response could not be mapped to a result
- InvalidValueError: a value object was constructed with bad input
- TransportError: the HTTP exchange itself failed
"""

from dataclasses import dataclass
from typing import Tuple


# Reserved code for failures synthesized locally rather than reported by the gateway
PROTOCOL_VIOLATION_CODE = -1


@dataclass(frozen=True)
class EndpointError:
    """
    A single (code, message) pair reported by the gateway.

    Attributes:
        code: Numeric error code from the ``code`` attribute
        message: Text content of the error element
    """
    code: int
    message: str

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class TextMarketerError(Exception):
    """Base exception for TextMarketer client errors."""
    pass


class EndpointException(TextMarketerError):
    """
    Exception raised when the gateway reports errors.

    A single failed call can carry several errors; all of them are kept,
    in the order the gateway listed them.
    """

    def __init__(self, *errors: EndpointError):
        if not errors:
            raise ValueError("EndpointException requires at least one EndpointError")
        self.errors: Tuple[EndpointError, ...] = tuple(errors)
        super().__init__("; ".join(str(error) for error in self.errors))

    @property
    def codes(self) -> Tuple[int, ...]:
        """Error codes in reported order."""
        return tuple(error.code for error in self.errors)

    @property
    def messages(self) -> Tuple[str, ...]:
        """Error messages in reported order."""
        return tuple(error.message for error in self.errors)


class ProtocolViolationError(EndpointException):
    """
    Exception raised when a response is well-formed XML but unusable.

    Missing fields, non-numeric counters, unknown statuses and invalid
    phone numbers all land here with the reserved code -1.
    """

    def __init__(self, message: str):
        super().__init__(EndpointError(PROTOCOL_VIOLATION_CODE, message))


class InvalidValueError(TextMarketerError, ValueError):
    """Exception raised when a value object receives invalid input."""
    pass


class TransportError(TextMarketerError):
    """Exception raised when the HTTP exchange fails or returns a non-XML body."""
    pass
