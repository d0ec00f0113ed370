"""
TextMarketer REST API Adapter.

Implements IEndpoint for the TextMarketer SMS gateway.
Handles authentication, request building and response mapping.

Every operation follows the same sequence:
1. Build request parameters with the codec (none for reads)
2. Send the request with HTTP Basic Auth
3. Parse the XML body
4. Raise EndpointException if the error envelope is present
5. Map the remaining fields to a domain object

API Endpoints used:
- POST/DELETE sms - Send, schedule and delete messages
- GET/POST credits - Credit count and transfers
- GET keywords/{keyword} - Keyword availability
- GET/POST account, PUT account/sub - Account management
- GET/POST/PUT groups[/{group}] - Send groups
- GET deliveryReports[/...] - Delivery report listing
"""

from datetime import datetime
from typing import Optional, Tuple, Union
from urllib.parse import quote
from xml.etree import ElementTree as ET

import requests
from loguru import logger
from requests.auth import HTTPBasicAuth

from textmarketer.adapters import codec
from textmarketer.domain.exceptions import InvalidValueError, TransportError
from textmarketer.domain.interfaces import IEndpoint
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
    SendGroup,
    SendGroupSummary,
    SendMessage,
    TransferReport,
    UpdateAccountInformation,
)


PRODUCTION_URL = "https://api.textmarketer.co.uk/services/rest/"
SANDBOX_URL = "http://sandbox.textmarketer.biz/services/rest/"

RequestBody = Union[dict, str, None]


class TextMarketerAdapter(IEndpoint):
    """
    Adapter for the TextMarketer REST API.

    Production and sandbox differ only by base_url; use
    TextMarketerAdapter.sandbox() for the latter.

    The adapter keeps no state between calls besides its configuration,
    so it is as safe to share between threads as the session it is given.

    Attributes:
        base_url: REST API base URL (ending with a slash)
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        authentication: Authentication,
        session: requests.Session,
        base_url: str = PRODUCTION_URL,
        timeout: int = 30,
    ):
        """
        Initialize TextMarketer adapter.

        Args:
            authentication: Credentials used on every request
            session: HTTP session used to send requests
            base_url: REST API base URL
            timeout: Request timeout in seconds
        """
        self._authentication = authentication
        self._session = session
        self._auth = HTTPBasicAuth(authentication.username, authentication.password)
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout

    @classmethod
    def sandbox(
        cls,
        authentication: Authentication,
        session: requests.Session,
        timeout: int = 30,
    ) -> "TextMarketerAdapter":
        """Create an adapter pointed at the sandbox environment."""
        return cls(authentication, session, base_url=SANDBOX_URL, timeout=timeout)

    # =========================================================================
    # Messages
    # =========================================================================

    def send_message(self, message: SendMessage) -> MessageDeliveryReport:
        document = self._request_document(
            "POST", "sms", data=codec.build_send_message_parameters(message)
        )
        report = codec.parse_message_delivery_report(document)
        logger.info(f"Message to {len(message.recipients)} recipient(s): {report}")
        return report

    def send_scheduled_message(
        self,
        message: SendMessage,
        delivery_time: datetime,
    ) -> MessageDeliveryReport:
        parameters = codec.build_scheduled_message_parameters(message, delivery_time)
        document = self._request_document("POST", "sms", data=parameters)
        report = codec.parse_message_delivery_report(document)
        logger.info(f"Message scheduled for {parameters['schedule']}: {report}")
        return report

    def delete_scheduled_message(self, schedule_id: str) -> None:
        document = self._request_document("DELETE", "sms", schedule_id)
        codec.raise_for_errors(document)
        logger.info(f"Scheduled message {schedule_id} deleted")

    # =========================================================================
    # Credits
    # =========================================================================

    def get_credit_count(self) -> int:
        return codec.parse_credit_count(self._request_document("GET", "credits"))

    def transfer_credits_to_account_by_id(
        self,
        quantity: int,
        account_id: str,
    ) -> TransferReport:
        parameters = codec.build_transfer_parameters(quantity, target=account_id)
        return self._transfer_credits(parameters)

    def transfer_credits_to_account_by_credentials(
        self,
        quantity: int,
        destination: Authentication,
    ) -> TransferReport:
        parameters = codec.build_transfer_parameters(quantity, target_credentials=destination)
        return self._transfer_credits(parameters)

    def _transfer_credits(self, parameters: dict) -> TransferReport:
        document = self._request_document("POST", "credits", data=parameters)
        report = codec.parse_transfer_report(document)
        logger.info(f"Transferred {parameters['quantity']} credits: {report}")
        return report

    # =========================================================================
    # Keywords
    # =========================================================================

    def check_keyword_availability(self, keyword: str) -> KeywordAvailability:
        document = self._request_document("GET", "keywords", keyword)
        return codec.parse_keyword_availability(document)

    # =========================================================================
    # Account
    # =========================================================================

    def get_account_information(self) -> AccountInformation:
        return self._fetch_account_information()

    def get_account_information_for_account_id(self, account_id: str) -> AccountInformation:
        return self._fetch_account_information(account_id)

    def update_account_information(
        self,
        new_information: UpdateAccountInformation,
    ) -> AccountInformation:
        document = self._request_document(
            "POST", "account", data=codec.build_update_account_parameters(new_information)
        )
        return codec.parse_account_information(document)

    def create_sub_account(self, details: CreateSubAccount) -> AccountInformation:
        document = self._request_document(
            "PUT", "account", "sub", data=codec.build_create_sub_account_parameters(details)
        )
        account = codec.parse_account_information(document)
        logger.info(f"Sub-account {account.account_id} created")
        return account

    def _fetch_account_information(self, account_id: Optional[str] = None) -> AccountInformation:
        components = ("account",) if account_id is None else ("account", account_id)
        document = self._request_document("GET", *components)
        return codec.parse_account_information(document)

    # =========================================================================
    # Groups
    # =========================================================================

    def get_groups_list(self) -> Tuple[SendGroupSummary, ...]:
        return codec.parse_group_summaries(self._request_document("GET", "groups"))

    def add_numbers_to_group(
        self,
        group_name_or_id: str,
        numbers: PhoneNumberCollection,
    ) -> AddNumbersToGroupReport:
        if len(numbers) == 0:
            raise InvalidValueError("At least one number is required")
        # Raw comma-separated body, not form-encoded
        document = self._request_document(
            "POST", "groups", group_name_or_id, data=",".join(numbers)
        )
        report = codec.parse_add_numbers_report(document)
        logger.info(
            f"Group {group_name_or_id}: {len(report.added)} added, "
            f"{len(report.stopped)} stopped, {len(report.duplicates)} duplicates"
        )
        return report

    def create_group(self, group_name: str) -> SendGroup:
        return codec.parse_group(self._request_document("PUT", "groups", group_name))

    def get_group_information(self, group_name_or_id: str) -> SendGroup:
        return codec.parse_group(self._request_document("GET", "groups", group_name_or_id))

    # =========================================================================
    # Delivery reports
    # =========================================================================

    def get_delivery_report_list(self) -> Tuple[DeliveryReport, ...]:
        return self._fetch_delivery_reports()

    def get_delivery_report_list_by_name(self, report_name: str) -> Tuple[DeliveryReport, ...]:
        return self._fetch_delivery_reports(report_name)

    def get_delivery_report_list_by_name_and_date_range(
        self,
        report_name: str,
        created_between: DateRange,
    ) -> Tuple[DeliveryReport, ...]:
        return self._fetch_delivery_reports(report_name, *self._date_range_components(created_between))

    def get_delivery_report_list_by_name_and_tag(
        self,
        report_name: str,
        tag: str,
    ) -> Tuple[DeliveryReport, ...]:
        return self._fetch_delivery_reports(report_name, "tag", tag)

    def get_delivery_report_list_by_name_tag_and_date_range(
        self,
        report_name: str,
        tag: str,
        created_between: DateRange,
    ) -> Tuple[DeliveryReport, ...]:
        return self._fetch_delivery_reports(
            report_name, "tag", tag, *self._date_range_components(created_between)
        )

    def _fetch_delivery_reports(self, *components: str) -> Tuple[DeliveryReport, ...]:
        document = self._request_document("GET", "deliveryReports", *components)
        return codec.parse_delivery_reports(document)

    @staticmethod
    def _date_range_components(created_between: DateRange) -> Tuple[str, ...]:
        return (
            "start", codec.format_timestamp(created_between.start),
            "end", codec.format_timestamp(created_between.end),
        )

    # =========================================================================
    # Private Helper Methods
    # =========================================================================

    def build_endpoint_uri(self, *components: str) -> str:
        """
        Build an endpoint URL from positional path components.

        Each component is percent-encoded on its own (including "/"),
        then joined with "/".

        Raises:
            InvalidValueError: If a component is empty
        """
        for component in components:
            if not component:
                raise InvalidValueError("Endpoint path components cannot be empty")
        return self.base_url + "/".join(quote(component, safe="") for component in components)

    def _request_document(
        self,
        method: str,
        *components: str,
        data: RequestBody = None,
    ) -> ET.Element:
        """Send an authenticated request and parse the XML body."""
        uri = self.build_endpoint_uri(*components)
        body = self._send_authenticated_request(method, uri, data)
        return codec.parse_document(body)

    def _send_authenticated_request(
        self,
        method: str,
        uri: str,
        data: RequestBody = None,
    ) -> str:
        """
        Make HTTP request to the gateway with Basic Auth.

        The HTTP status is not checked: the XML error envelope is what
        signals a failed call.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            uri: Full endpoint URL
            data: Form parameters (dict) or raw body (str); ignored for GET/DELETE

        Returns:
            Response body text

        Raises:
            TransportError: If the request cannot be completed
        """
        if method in ("GET", "DELETE"):
            data = None

        logger.debug(f"{method} {uri}")

        try:
            response = self._session.request(
                method=method,
                url=uri,
                data=data,
                auth=self._auth,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"TextMarketer request {method} {uri} failed: {e}")
            raise TransportError(f"TextMarketer API request failed: {str(e)}") from e

        logger.debug(f"{method} {uri} -> HTTP {response.status_code}")
        return response.text

    def __repr__(self) -> str:
        """String representation of adapter."""
        return (
            f"TextMarketerAdapter(username={self._authentication.username}, "
            f"url={self.base_url})"
        )
