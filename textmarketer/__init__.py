"""
TextMarketer SMS Gateway Client.

Client library for the TextMarketer REST API: sending and scheduling
messages, account and sub-account management, credit transfers, keyword
checks, send groups and delivery report listings.

Main components:
- Domain: Models, exceptions and endpoint interfaces
- Adapters: REST adapter and XML wire codec
- Factory: Adapter construction from environment configuration

Usage:
    import requests
    from textmarketer import Authentication, TextMarketerAdapter

    adapter = TextMarketerAdapter(
        Authentication("username", "password"),
        session=requests.Session(),
    )
    print(adapter.get_credit_count())
"""

from textmarketer.adapters.textmarketer_adapter import TextMarketerAdapter
from textmarketer.domain.exceptions import (
    EndpointError,
    EndpointException,
    InvalidValueError,
    ProtocolViolationError,
    TextMarketerError,
    TransportError,
)
from textmarketer.domain.models import (
    Authentication,
    PhoneNumberCollection,
    QueuedMessage,
    ScheduledMessage,
    SendMessage,
    SentMessage,
)

__all__ = [
    "TextMarketerAdapter",
    "EndpointError",
    "EndpointException",
    "InvalidValueError",
    "ProtocolViolationError",
    "TextMarketerError",
    "TransportError",
    "Authentication",
    "PhoneNumberCollection",
    "QueuedMessage",
    "ScheduledMessage",
    "SendMessage",
    "SentMessage",
]

__version__ = "1.0.0"
