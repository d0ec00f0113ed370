"""
Endpoint interfaces for the TextMarketer gateway.

Each capability of the gateway has its own abstraction so callers can
depend on only what they use. IEndpoint combines all of them.

Note - some methods expect an account ID. It is shown in the page footer
of the TextMarketer message box.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Tuple

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


class IMessageEndpoint(ABC):
    """Sending and scheduling SMS messages."""

    @abstractmethod
    def send_message(self, message: SendMessage) -> MessageDeliveryReport:
        """
        Send an SMS message.

        Args:
            message: Message to send

        Returns:
            SentMessage, QueuedMessage or ScheduledMessage

        Raises:
            EndpointException: If the gateway rejects the message
        """
        pass

    @abstractmethod
    def send_scheduled_message(
        self,
        message: SendMessage,
        delivery_time: datetime,
    ) -> MessageDeliveryReport:
        """
        Schedule an SMS message to be sent at a given time.

        Args:
            message: Message to send
            delivery_time: Timezone-aware delivery time

        Returns:
            Delivery report (normally ScheduledMessage)

        Raises:
            EndpointException: If the gateway rejects the message
        """
        pass

    @abstractmethod
    def delete_scheduled_message(self, schedule_id: str) -> None:
        """
        Delete a scheduled SMS message.

        Fails if the message has already been sent.

        Raises:
            EndpointException: If the gateway rejects the deletion
        """
        pass


class ICreditEndpoint(ABC):
    """Reading and transferring prepaid credits."""

    @abstractmethod
    def get_credit_count(self) -> int:
        """Return the credits available on the account in use."""
        pass

    @abstractmethod
    def transfer_credits_to_account_by_id(
        self,
        quantity: int,
        account_id: str,
    ) -> TransferReport:
        """
        Transfer credits to another account using its account ID.

        Args:
            quantity: Number of credits to transfer (positive)
            account_id: Destination account ID

        Returns:
            TransferReport with balances before and after
        """
        pass

    @abstractmethod
    def transfer_credits_to_account_by_credentials(
        self,
        quantity: int,
        destination: Authentication,
    ) -> TransferReport:
        """
        Transfer credits to another account using its username and password.

        Args:
            quantity: Number of credits to transfer (positive)
            destination: Credentials of the destination account

        Returns:
            TransferReport with balances before and after
        """
        pass


class IKeywordEndpoint(ABC):

    @abstractmethod
    def check_keyword_availability(self, keyword: str) -> KeywordAvailability:
        """Retrieve the availability information of a keyword."""
        pass


class IAccountEndpoint(ABC):
    """Account and sub-account management."""

    @abstractmethod
    def get_account_information(self) -> AccountInformation:
        """
        Retrieve information for the account in use.

        Warning - the response includes passwords.
        """
        pass

    @abstractmethod
    def get_account_information_for_account_id(self, account_id: str) -> AccountInformation:
        """Retrieve information for a given account or sub-account."""
        pass

    @abstractmethod
    def update_account_information(
        self,
        new_information: UpdateAccountInformation,
    ) -> AccountInformation:
        """
        Update account information for the account in use.

        Only the fields set on the command are changed.
        """
        pass

    @abstractmethod
    def create_sub_account(self, details: CreateSubAccount) -> AccountInformation:
        """
        Create a new sub-account for the account in use.

        Note - disabled by default until TextMarketer enables it.
        """
        pass


class IGroupEndpoint(ABC):
    """Send-group management."""

    @abstractmethod
    def get_groups_list(self) -> Tuple[SendGroupSummary, ...]:
        """Retrieve all groups of the account in use, in gateway order."""
        pass

    @abstractmethod
    def add_numbers_to_group(
        self,
        group_name_or_id: str,
        numbers: PhoneNumberCollection,
    ) -> AddNumbersToGroupReport:
        """
        Add one or more numbers to a group.

        Returns:
            Report splitting the numbers into added, stopped and duplicates
        """
        pass

    @abstractmethod
    def create_group(self, group_name: str) -> SendGroup:
        """Create a new, empty group."""
        pass

    @abstractmethod
    def get_group_information(self, group_name_or_id: str) -> SendGroup:
        """Retrieve a group and its numbers."""
        pass


class IDeliveryReportEndpoint(ABC):
    """Listing delivery report files."""

    @abstractmethod
    def get_delivery_report_list(self) -> Tuple[DeliveryReport, ...]:
        """Retrieve every delivery report available for the account in use."""
        pass

    @abstractmethod
    def get_delivery_report_list_by_name(self, report_name: str) -> Tuple[DeliveryReport, ...]:
        pass

    @abstractmethod
    def get_delivery_report_list_by_name_and_date_range(
        self,
        report_name: str,
        created_between: DateRange,
    ) -> Tuple[DeliveryReport, ...]:
        pass

    @abstractmethod
    def get_delivery_report_list_by_name_and_tag(
        self,
        report_name: str,
        tag: str,
    ) -> Tuple[DeliveryReport, ...]:
        pass

    @abstractmethod
    def get_delivery_report_list_by_name_tag_and_date_range(
        self,
        report_name: str,
        tag: str,
        created_between: DateRange,
    ) -> Tuple[DeliveryReport, ...]:
        pass


class IEndpoint(
    IMessageEndpoint,
    ICreditEndpoint,
    IKeywordEndpoint,
    IAccountEndpoint,
    IGroupEndpoint,
    IDeliveryReportEndpoint,
):
    """The full TextMarketer API available to callers."""
    pass
