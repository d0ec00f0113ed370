"""
Domain layer for the TextMarketer client.

Contains value objects, exceptions and the endpoint interfaces.
"""

from textmarketer.domain.exceptions import (
    PROTOCOL_VIOLATION_CODE,
    EndpointError,
    EndpointException,
    InvalidValueError,
    ProtocolViolationError,
    TextMarketerError,
    TransportError,
)
from textmarketer.domain.interfaces import (
    IAccountEndpoint,
    ICreditEndpoint,
    IDeliveryReportEndpoint,
    IEndpoint,
    IGroupEndpoint,
    IKeywordEndpoint,
    IMessageEndpoint,
)
from textmarketer.domain.models import (
    AccountInformation,
    AddNumbersToGroupReport,
    Authentication,
    CreateSubAccount,
    DateRange,
    DeliveryReport,
    KeywordAvailability,
    MessageDeliveryReport,
    PhoneNumberCollection,
    QueuedMessage,
    ScheduledMessage,
    SendGroup,
    SendGroupSummary,
    SendMessage,
    SentMessage,
    TransferReport,
    UpdateAccountInformation,
)

__all__ = [
    "PROTOCOL_VIOLATION_CODE",
    "EndpointError",
    "EndpointException",
    "InvalidValueError",
    "ProtocolViolationError",
    "TextMarketerError",
    "TransportError",
    "IAccountEndpoint",
    "ICreditEndpoint",
    "IDeliveryReportEndpoint",
    "IEndpoint",
    "IGroupEndpoint",
    "IKeywordEndpoint",
    "IMessageEndpoint",
    "AccountInformation",
    "AddNumbersToGroupReport",
    "Authentication",
    "CreateSubAccount",
    "DateRange",
    "DeliveryReport",
    "KeywordAvailability",
    "MessageDeliveryReport",
    "PhoneNumberCollection",
    "QueuedMessage",
    "ScheduledMessage",
    "SendGroup",
    "SendGroupSummary",
    "SendMessage",
    "SentMessage",
    "TransferReport",
    "UpdateAccountInformation",
]
