"""
Domain models for the TextMarketer gateway client.

This module defines the commands sent to the gateway and the results
parsed back from it. All models are immutable (frozen dataclasses) and
validate themselves on construction.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, Iterator, List, Optional, Tuple, Union

from textmarketer.domain.exceptions import InvalidValueError


# International format without "+" or "00" prefix, e.g. 447700900001
PHONE_NUMBER_PATTERN = re.compile(r"[0-9]{10,15}")
ALPHANUMERIC_ORIGINATOR_PATTERN = re.compile(r"[A-Za-z0-9]{1,11}")
NUMERIC_ORIGINATOR_PATTERN = re.compile(r"[0-9]{1,16}")
EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")

MAX_MESSAGE_LENGTH = 612
MIN_VALIDITY_HOURS = 1
MAX_VALIDITY_HOURS = 72


@dataclass(frozen=True)
class Authentication:
    """
    Credentials for a TextMarketer account.

    Attributes:
        username: API username
        password: API password
    """
    username: str
    password: str

    def __post_init__(self) -> None:
        """Validate credentials after initialization."""
        if not self.username:
            raise InvalidValueError("username cannot be empty")
        if not self.password:
            raise InvalidValueError("password cannot be empty")

    def __repr__(self) -> str:
        return f"Authentication(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class PhoneNumberCollection:
    """
    Ordered collection of validated phone numbers.

    Attributes:
        numbers: Phone numbers in international format (digits only)
    """
    numbers: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Normalize to a tuple and validate every number."""
        numbers = tuple(self.numbers)
        for number in numbers:
            if not isinstance(number, str) or not PHONE_NUMBER_PATTERN.fullmatch(number):
                raise InvalidValueError(
                    f"Invalid phone number {number!r}: expected 10-15 digits "
                    "in international format"
                )
        object.__setattr__(self, "numbers", numbers)

    @classmethod
    def from_csv(cls, text: str) -> "PhoneNumberCollection":
        """Build a collection from a comma-separated string."""
        return cls(tuple(part.strip() for part in text.split(",") if part.strip()))

    def as_list(self) -> List[str]:
        return list(self.numbers)

    def __iter__(self) -> Iterator[str]:
        return iter(self.numbers)

    def __len__(self) -> int:
        return len(self.numbers)

    def __contains__(self, number: object) -> bool:
        return number in self.numbers


@dataclass(frozen=True)
class SendMessage:
    """
    Command to send an SMS message.

    Attributes:
        text: Message body
        recipients: Phone numbers to deliver to (non-empty)
        originator: Sender name (alphanumeric, max 11) or number (max 16 digits)
        reply_email: Optional address that replies are forwarded to
        validity_hours: Optional number of hours the message stays deliverable
        check_stop: Whether to drop recipients who replied STOP
    """
    text: str
    recipients: PhoneNumberCollection
    originator: str
    reply_email: Optional[str] = None
    validity_hours: Optional[int] = None
    check_stop: bool = False

    def __post_init__(self) -> None:
        """Validate model after initialization."""
        if not self.text:
            raise InvalidValueError("text cannot be empty")
        if len(self.text) > MAX_MESSAGE_LENGTH:
            raise InvalidValueError(
                f"text exceeds maximum length of {MAX_MESSAGE_LENGTH} characters"
            )
        if not isinstance(self.recipients, PhoneNumberCollection):
            object.__setattr__(self, "recipients", PhoneNumberCollection(tuple(self.recipients)))
        if len(self.recipients) == 0:
            raise InvalidValueError("recipients cannot be empty")
        if not (
            ALPHANUMERIC_ORIGINATOR_PATTERN.fullmatch(self.originator or "")
            or NUMERIC_ORIGINATOR_PATTERN.fullmatch(self.originator or "")
        ):
            raise InvalidValueError(
                "originator must be up to 11 alphanumeric characters or up to 16 digits"
            )
        if self.reply_email is not None and not EMAIL_PATTERN.fullmatch(self.reply_email):
            raise InvalidValueError(f"Invalid reply email: {self.reply_email!r}")
        if self.validity_hours is not None:
            if isinstance(self.validity_hours, bool) or not isinstance(self.validity_hours, int):
                raise InvalidValueError("validity_hours must be an integer")
            if not MIN_VALIDITY_HOURS <= self.validity_hours <= MAX_VALIDITY_HOURS:
                raise InvalidValueError(
                    f"validity_hours must be between {MIN_VALIDITY_HOURS} "
                    f"and {MAX_VALIDITY_HOURS}"
                )

    @property
    def has_reply_email(self) -> bool:
        return self.reply_email is not None

    @property
    def has_validity(self) -> bool:
        return self.validity_hours is not None


# =============================================================================
# Message delivery report (tagged union)
# =============================================================================


def _check_credits_used(credits_used: int) -> None:
    if credits_used < 0:
        raise InvalidValueError("credits_used cannot be negative")


@dataclass(frozen=True)
class SentMessage:
    """Message accepted and sent immediately."""
    status: ClassVar[str] = "SENT"

    message_id: str
    credits_used: int

    def __post_init__(self) -> None:
        _check_credits_used(self.credits_used)


@dataclass(frozen=True)
class QueuedMessage:
    """Message accepted and queued for sending."""
    status: ClassVar[str] = "QUEUED"

    message_id: str
    credits_used: int

    def __post_init__(self) -> None:
        _check_credits_used(self.credits_used)


@dataclass(frozen=True)
class ScheduledMessage:
    """Message accepted for delivery at a later time."""
    status: ClassVar[str] = "SCHEDULED"

    schedule_id: str
    credits_used: int

    def __post_init__(self) -> None:
        _check_credits_used(self.credits_used)


MessageDeliveryReport = Union[SentMessage, QueuedMessage, ScheduledMessage]


# =============================================================================
# Account
# =============================================================================


@dataclass(frozen=True)
class AccountInformation:
    """
    Account record as returned by the gateway.

    Warning: the gateway returns passwords in clear text.
    """
    account_id: str
    api_username: str
    api_password: str
    company_name: str
    create_date: datetime
    credits: int
    notification_email: str
    notification_mobile: str
    username: str
    password: str

    def __repr__(self) -> str:
        return (
            f"AccountInformation(account_id={self.account_id!r}, "
            f"company_name={self.company_name!r}, credits={self.credits})"
        )


@dataclass(frozen=True)
class UpdateAccountInformation:
    """
    Command to update the account in use.

    Only fields that are not None are sent; an empty string is a value.
    """
    api_password: Optional[str] = None
    api_username: Optional[str] = None
    account_password: Optional[str] = None
    account_username: Optional[str] = None
    company_name: Optional[str] = None
    notification_email: Optional[str] = None
    notification_mobile: Optional[str] = None

    def __post_init__(self) -> None:
        if all(value is None for value in vars(self).values()):
            raise InvalidValueError("At least one account field must be provided")


@dataclass(frozen=True)
class CreateSubAccount:
    """Command to create a sub-account under the account in use."""
    account_username: Optional[str] = None
    account_password: Optional[str] = None
    company_name: Optional[str] = None
    notification_email: Optional[str] = None
    notification_mobile: Optional[str] = None
    promo_code: Optional[str] = None
    override_pricing: bool = False


# =============================================================================
# Credits and keywords
# =============================================================================


@dataclass(frozen=True)
class TransferReport:
    """
    Credit balances around a transfer.

    Attributes:
        source_credits_before: Source balance before the transfer
        source_credits_after: Source balance after the transfer
        target_credits_before: Target balance before the transfer
        target_credits_after: Target balance after the transfer
    """
    source_credits_before: int
    source_credits_after: int
    target_credits_before: int
    target_credits_after: int


@dataclass(frozen=True)
class KeywordAvailability:
    available: bool
    recycled: bool


# =============================================================================
# Send groups
# =============================================================================


@dataclass(frozen=True)
class SendGroupSummary:
    """Entry of the groups list."""
    id: str
    name: str
    number_count: int
    is_stop_group: bool


@dataclass(frozen=True)
class SendGroup:
    """A send group with its member numbers."""
    id: str
    name: str
    is_stop_group: bool
    numbers: PhoneNumberCollection = field(default_factory=PhoneNumberCollection)


@dataclass(frozen=True)
class AddNumbersToGroupReport:
    """
    Outcome of adding numbers to a group.

    Attributes:
        added: Numbers newly added
        stopped: Numbers rejected because they opted out
        duplicates: Numbers already in the group
    """
    added: PhoneNumberCollection
    stopped: PhoneNumberCollection
    duplicates: PhoneNumberCollection


# =============================================================================
# Delivery reports
# =============================================================================


@dataclass(frozen=True)
class DateRange:
    """Inclusive date range used to filter delivery reports."""
    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidValueError("DateRange start must not be after end")


@dataclass(frozen=True)
class DeliveryReport:
    """A downloadable delivery report file."""
    name: str
    last_updated: datetime
    extension: str
