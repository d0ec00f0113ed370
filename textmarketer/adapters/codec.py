"""
Wire codec for the TextMarketer REST API.

Stateless functions that turn commands into request parameters and XML
response bodies into domain objects. Every parse_* function checks the
error envelope before reading any other field.

Response documents look like:

    <response processed_date="...">
        <credits>150</credits>
    </response>

and failures like:

    <response>
        <errors>
            <error code="1">Bad auth</error>
        </errors>
    </response>
"""

from datetime import datetime
from typing import Dict, List, Optional, Tuple
from xml.etree import ElementTree as ET

from loguru import logger

from textmarketer.domain.exceptions import (
    PROTOCOL_VIOLATION_CODE,
    EndpointError,
    EndpointException,
    InvalidValueError,
    ProtocolViolationError,
    TransportError,
)
from textmarketer.domain.models import (
    AccountInformation,
    AddNumbersToGroupReport,
    Authentication,
    CreateSubAccount,
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


WIRE_FALSE = "false"


# =============================================================================
# Request parameters
# =============================================================================


def format_wire_bool(value: bool) -> str:
    return "true" if value else WIRE_FALSE


def format_timestamp(value: datetime) -> str:
    """
    Format a datetime as ISO-8601 with its UTC offset.

    Raises:
        InvalidValueError: If the datetime is naive
    """
    if value.tzinfo is None or value.utcoffset() is None:
        raise InvalidValueError("Timestamps sent to the gateway must be timezone-aware")
    return value.isoformat(timespec="seconds")


def build_send_message_parameters(message: SendMessage) -> Dict[str, str]:
    """
    Build form parameters for POST sms.

    Args:
        message: Message to send

    Returns:
        Form parameters; email and validity only when set on the message
    """
    parameters = {
        "message": message.text,
        "to": ",".join(message.recipients),
        "originator": message.originator,
    }

    if message.has_reply_email:
        parameters["email"] = message.reply_email

    if message.has_validity:
        parameters["validity"] = str(message.validity_hours)

    parameters["check_stop"] = format_wire_bool(message.check_stop)

    return parameters


def build_scheduled_message_parameters(
    message: SendMessage,
    delivery_time: datetime,
) -> Dict[str, str]:
    """Build form parameters for a scheduled POST sms."""
    parameters = build_send_message_parameters(message)
    parameters["schedule"] = format_timestamp(delivery_time)
    return parameters


def _without_unset(parameters: Dict[str, Optional[str]]) -> Dict[str, str]:
    # Presence is "is not None": an empty string is a deliberate value
    return {name: value for name, value in parameters.items() if value is not None}


def build_update_account_parameters(command: UpdateAccountInformation) -> Dict[str, str]:
    """Build the sparse form parameters for POST account."""
    return _without_unset({
        "account_api_password": command.api_password,
        "account_api_username": command.api_username,
        "account_password": command.account_password,
        "account_username": command.account_username,
        "company_name": command.company_name,
        "notification_email": command.notification_email,
        "notification_mobile": command.notification_mobile,
    })


def build_create_sub_account_parameters(command: CreateSubAccount) -> Dict[str, str]:
    """Build the sparse form parameters for PUT account/sub."""
    return _without_unset({
        "account_username": command.account_username,
        "account_password": command.account_password,
        "company_name": command.company_name,
        "notification_email": command.notification_email,
        "notification_mobile": command.notification_mobile,
        "override_pricing": format_wire_bool(command.override_pricing),
        "promo_code": command.promo_code,
    })


def build_transfer_parameters(
    quantity: int,
    target: Optional[str] = None,
    target_credentials: Optional[Authentication] = None,
) -> Dict[str, str]:
    """
    Build form parameters for POST credits.

    Exactly one of target or target_credentials must be given.

    Raises:
        InvalidValueError: If quantity is not positive or the target is ambiguous
    """
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidValueError("quantity must be a positive integer")
    if (target is None) == (target_credentials is None):
        raise InvalidValueError("Provide exactly one of target or target_credentials")

    parameters = {"quantity": str(quantity)}
    if target_credentials is not None:
        parameters["target_username"] = target_credentials.username
        parameters["target_password"] = target_credentials.password
    else:
        if not target:
            raise InvalidValueError("target account ID cannot be empty")
        parameters["target"] = target
    return parameters


# =============================================================================
# Document access
# =============================================================================


def parse_document(body: str) -> ET.Element:
    """
    Parse a response body into its root element.

    Raises:
        TransportError: If the body is not well-formed XML
    """
    try:
        return ET.fromstring(body)
    except ET.ParseError as e:
        snippet = (body or "")[:200]
        raise TransportError(f"Gateway returned a non-XML body: {e} ({snippet!r})") from e


def _text_content(element: ET.Element) -> str:
    return "".join(element.itertext())


def parse_error_envelope(document: ET.Element) -> List[EndpointError]:
    """
    Collect every reported error, in document order.

    Errors are the error elements of any errors container in the document.
    A code that is missing or not numeric is reported as -1.
    """
    errors = []
    for container in document.iter("errors"):
        for element in container.findall("error"):
            try:
                code = int(element.get("code", ""))
            except ValueError:
                code = PROTOCOL_VIOLATION_CODE
            errors.append(EndpointError(code, _text_content(element).strip()))
    return errors


def raise_for_errors(document: ET.Element) -> None:
    """
    Raise if the document carries the error envelope.

    Raises:
        EndpointException: With every reported error
    """
    errors = parse_error_envelope(document)
    if errors:
        logger.warning(f"Gateway reported {len(errors)} error(s): {errors}")
        raise EndpointException(*errors)


def extract_scalar(document: ET.Element, tag: str) -> str:
    """
    Return the text of the first element named tag anywhere in the document.

    The lookup is not scoped to a parent: if tag recurs in nested blocks,
    the first occurrence in document order wins.

    Raises:
        ProtocolViolationError: If no such element exists
    """
    element = next(document.iter(tag), None)
    if element is None:
        raise ProtocolViolationError(f"Missing <{tag}> in gateway response")
    return _text_content(element)


def _to_int(value: str, what: str) -> int:
    try:
        return int(value.strip())
    except (AttributeError, ValueError) as e:
        raise ProtocolViolationError(f"Expected an integer for {what}, got {value!r}") from e


def extract_int(document: ET.Element, tag: str) -> int:
    return _to_int(extract_scalar(document, tag), f"<{tag}>")


def parse_wire_bool(text: Optional[str]) -> bool:
    """Only the exact text "false" is false; anything else is true."""
    return text != WIRE_FALSE


def parse_timestamp(value: str, what: str) -> datetime:
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise ProtocolViolationError(f"Could not parse {what} timestamp {value!r}") from e


def _attribute(element: ET.Element, name: str) -> str:
    value = element.get(name)
    if value is None:
        raise ProtocolViolationError(f"Missing attribute '{name}' on <{element.tag}>")
    return value


def _first(document: ET.Element, tag: str) -> ET.Element:
    element = next(document.iter(tag), None)
    if element is None:
        raise ProtocolViolationError(f"Missing <{tag}> in gateway response")
    return element


def _phone_numbers(numbers: List[str]) -> PhoneNumberCollection:
    try:
        return PhoneNumberCollection(tuple(numbers))
    except InvalidValueError as e:
        raise ProtocolViolationError(f"Could not parse returned numbers: {e}") from e


# =============================================================================
# Result parsers
# =============================================================================


def parse_message_delivery_report(document: ET.Element) -> MessageDeliveryReport:
    """
    Map a POST sms response to its delivery report variant.

    Raises:
        EndpointException: If the gateway reported errors
        ProtocolViolationError: If the status is not SENT, QUEUED or SCHEDULED
    """
    raise_for_errors(document)

    status = extract_scalar(document, "status").strip()

    if status == SentMessage.status:
        return SentMessage(
            extract_scalar(document, "message_id"), extract_int(document, "credits_used")
        )
    if status == QueuedMessage.status:
        return QueuedMessage(
            extract_scalar(document, "message_id"), extract_int(document, "credits_used")
        )
    if status == ScheduledMessage.status:
        return ScheduledMessage(
            extract_scalar(document, "scheduled_id"), extract_int(document, "credits_used")
        )

    raise ProtocolViolationError(f"Unexpected status from the endpoint: {status}")


def parse_credit_count(document: ET.Element) -> int:
    raise_for_errors(document)
    return extract_int(document, "credits")


def parse_transfer_report(document: ET.Element) -> TransferReport:
    raise_for_errors(document)
    return TransferReport(
        source_credits_before=extract_int(document, "source_credits_before"),
        source_credits_after=extract_int(document, "source_credits_after"),
        target_credits_before=extract_int(document, "target_credits_before"),
        target_credits_after=extract_int(document, "target_credits_after"),
    )


def parse_keyword_availability(document: ET.Element) -> KeywordAvailability:
    raise_for_errors(document)
    return KeywordAvailability(
        available=parse_wire_bool(extract_scalar(document, "available")),
        recycled=parse_wire_bool(extract_scalar(document, "recycle")),
    )


def parse_account_information(document: ET.Element) -> AccountInformation:
    """
    Map an account response to AccountInformation.

    All ten fields are required; any missing one is a protocol violation.
    """
    raise_for_errors(document)
    return AccountInformation(
        account_id=extract_scalar(document, "account_id"),
        api_username=extract_scalar(document, "api_username"),
        api_password=extract_scalar(document, "api_password"),
        company_name=extract_scalar(document, "company_name"),
        create_date=parse_timestamp(extract_scalar(document, "create_date"), "create_date"),
        credits=extract_int(document, "credits"),
        notification_email=extract_scalar(document, "notification_email"),
        notification_mobile=extract_scalar(document, "notification_mobile"),
        username=extract_scalar(document, "username"),
        password=extract_scalar(document, "password"),
    )


def parse_group(document: ET.Element) -> SendGroup:
    """Map a single-group response (first <group>) to SendGroup."""
    raise_for_errors(document)

    group = _first(document, "group")
    numbers = [_text_content(number).strip() for number in group.iter("number")]

    return SendGroup(
        id=_attribute(group, "id"),
        name=_attribute(group, "name"),
        is_stop_group=parse_wire_bool(_attribute(group, "is_stop")),
        numbers=_phone_numbers(numbers),
    )


def parse_group_summaries(document: ET.Element) -> Tuple[SendGroupSummary, ...]:
    raise_for_errors(document)
    return tuple(
        SendGroupSummary(
            id=_attribute(group, "id"),
            name=_attribute(group, "name"),
            number_count=_to_int(_attribute(group, "numbers"), "group numbers"),
            is_stop_group=parse_wire_bool(_attribute(group, "is_stop")),
        )
        for group in document.iter("group")
    )


def _container_numbers(document: ET.Element, tag: str) -> PhoneNumberCollection:
    container = _first(document, tag)
    return _phone_numbers([_text_content(child).strip() for child in container])


def parse_add_numbers_report(document: ET.Element) -> AddNumbersToGroupReport:
    """
    Map a POST groups/{group} response to AddNumbersToGroupReport.

    Each of the added, stopped and duplicates containers holds one child
    element per number.
    """
    raise_for_errors(document)
    return AddNumbersToGroupReport(
        added=_container_numbers(document, "added"),
        stopped=_container_numbers(document, "stopped"),
        duplicates=_container_numbers(document, "duplicates"),
    )


def parse_delivery_reports(document: ET.Element) -> Tuple[DeliveryReport, ...]:
    raise_for_errors(document)
    return tuple(
        DeliveryReport(
            name=_attribute(report, "name"),
            last_updated=parse_timestamp(_attribute(report, "last_updated"), "last_updated"),
            extension=_attribute(report, "extension"),
        )
        for report in document.iter("report")
    )
