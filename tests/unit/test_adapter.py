"""Tests for the TextMarketer REST adapter."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
import requests
from requests.auth import HTTPBasicAuth

from textmarketer.adapters.textmarketer_adapter import (
    PRODUCTION_URL,
    SANDBOX_URL,
    TextMarketerAdapter,
)
from textmarketer.domain.exceptions import (
    EndpointError,
    EndpointException,
    InvalidValueError,
    ProtocolViolationError,
    TransportError,
)
from textmarketer.domain.interfaces import IEndpoint
from textmarketer.domain.models import (
    Authentication,
    CreateSubAccount,
    DateRange,
    PhoneNumberCollection,
    ScheduledMessage,
    SendMessage,
    SentMessage,
    UpdateAccountInformation,
)
from tests.conftest import (
    ACCOUNT_XML,
    BASE_URL,
    GROUP_XML,
    GROUPS_XML,
    error_xml,
    send_xml,
)


def _sent_call(session: MagicMock) -> dict:
    session.request.assert_called_once()
    return session.request.call_args.kwargs


def _message() -> SendMessage:
    return SendMessage(
        text="Hello",
        recipients=PhoneNumberCollection(("447700900001",)),
        originator="Shop",
    )


class TestConstruction:
    def test_implements_full_endpoint(self, adapter):
        assert isinstance(adapter, IEndpoint)

    def test_default_base_url_is_production(self, authentication, session):
        assert TextMarketerAdapter(authentication, session).base_url == PRODUCTION_URL

    def test_sandbox_only_changes_base_url(self, authentication, session):
        adapter = TextMarketerAdapter.sandbox(authentication, session, timeout=5)
        assert adapter.base_url == SANDBOX_URL
        assert adapter.timeout == 5

    def test_trailing_slash_added(self, authentication, session):
        adapter = TextMarketerAdapter(authentication, session, base_url="http://x.test/rest")
        assert adapter.build_endpoint_uri("credits") == "http://x.test/rest/credits"


class TestBuildEndpointUri:
    def test_space_is_encoded(self, adapter):
        assert adapter.build_endpoint_uri("groups", "My Group") == BASE_URL + "groups/My%20Group"

    def test_components_joined_in_order(self, adapter):
        assert adapter.build_endpoint_uri("account", "sub") == BASE_URL + "account/sub"

    def test_slash_inside_component_is_encoded(self, adapter):
        assert adapter.build_endpoint_uri("groups", "a/b") == BASE_URL + "groups/a%2Fb"

    def test_empty_component_rejected(self, adapter, session):
        with pytest.raises(InvalidValueError):
            adapter.get_group_information("")
        session.request.assert_not_called()


class TestAuthenticatedRequests:
    def test_basic_auth_on_every_verb(self, adapter, session, respond):
        respond("<response><credits>1</credits></response>")
        adapter.get_credit_count()
        auth = session.request.call_args.kwargs["auth"]
        assert isinstance(auth, HTTPBasicAuth)
        assert (auth.username, auth.password) == ("api-user", "api-secret")

        respond("<response/>")
        adapter.delete_scheduled_message("s1")
        assert session.request.call_args.kwargs["auth"].username == "api-user"

    def test_timeout_passed(self, authentication, session, respond):
        adapter = TextMarketerAdapter(authentication, session, base_url=BASE_URL, timeout=7)
        respond("<response><credits>1</credits></response>")
        adapter.get_credit_count()
        assert session.request.call_args.kwargs["timeout"] == 7

    def test_transport_failure_wrapped(self, adapter, session):
        session.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(TransportError) as exc_info:
            adapter.get_credit_count()
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)
        assert not isinstance(exc_info.value, EndpointException)

    def test_non_xml_body_is_transport_error(self, adapter, respond):
        respond("<html><body>Bad Gateway", status_code=502)
        with pytest.raises(TransportError):
            adapter.get_credit_count()

    def test_error_envelope_wins_regardless_of_status(self, adapter, respond):
        respond(error_xml((1, "Bad auth")), status_code=401)
        with pytest.raises(EndpointException) as exc_info:
            adapter.get_credit_count()
        assert exc_info.value.errors == (EndpointError(1, "Bad auth"),)


class TestMessages:
    def test_send_message(self, adapter, session, respond):
        respond(send_xml("SENT", message_id="m1", credits_used=1))
        report = adapter.send_message(_message())

        assert report == SentMessage("m1", 1)
        call = _sent_call(session)
        assert call["method"] == "POST"
        assert call["url"] == BASE_URL + "sms"
        assert call["data"] == {
            "message": "Hello",
            "to": "447700900001",
            "originator": "Shop",
            "check_stop": "false",
        }

    def test_send_scheduled_message(self, adapter, session, respond):
        respond(send_xml("SCHEDULED", scheduled_id="s9", credits_used=1))
        delivery = datetime(2026, 12, 1, 9, 0, tzinfo=timezone.utc)
        report = adapter.send_scheduled_message(_message(), delivery)

        assert report == ScheduledMessage("s9", 1)
        assert _sent_call(session)["data"]["schedule"] == "2026-12-01T09:00:00+00:00"

    def test_unexpected_status(self, adapter, respond):
        respond(send_xml("LOST", message_id="m1"))
        with pytest.raises(ProtocolViolationError) as exc_info:
            adapter.send_message(_message())
        assert exc_info.value.codes == (-1,)

    def test_delete_scheduled_message(self, adapter, session, respond):
        respond("<response><status>DELETED</status></response>")
        assert adapter.delete_scheduled_message("abc 1") is None
        call = _sent_call(session)
        assert call["method"] == "DELETE"
        assert call["url"] == BASE_URL + "sms/abc%201"
        assert call["data"] is None

    def test_delete_scheduled_message_error(self, adapter, respond):
        respond(error_xml((404, "Schedule not found")))
        with pytest.raises(EndpointException):
            adapter.delete_scheduled_message("s1")


class TestCredits:
    def test_get_credit_count(self, adapter, session, respond):
        respond("<response><credits>150</credits></response>")
        assert adapter.get_credit_count() == 150
        call = _sent_call(session)
        assert call["method"] == "GET"
        assert call["url"] == BASE_URL + "credits"
        assert call["data"] is None

    def test_get_credit_count_bad_auth(self, adapter, respond):
        respond("<response><errors><error code=\"1\">Bad auth</error></errors></response>")
        with pytest.raises(EndpointException) as exc_info:
            adapter.get_credit_count()
        assert exc_info.value.codes == (1,)
        assert exc_info.value.messages == ("Bad auth",)

    TRANSFER_XML = (
        "<response>"
        "<source_credits_before>100</source_credits_before>"
        "<source_credits_after>90</source_credits_after>"
        "<target_credits_before>0</target_credits_before>"
        "<target_credits_after>10</target_credits_after>"
        "</response>"
    )

    def test_transfer_by_id(self, adapter, session, respond):
        respond(self.TRANSFER_XML)
        report = adapter.transfer_credits_to_account_by_id(10, "5678")
        assert report.source_credits_after == 90
        call = _sent_call(session)
        assert call["method"] == "POST"
        assert call["data"] == {"quantity": "10", "target": "5678"}

    def test_transfer_by_credentials(self, adapter, session, respond):
        respond(self.TRANSFER_XML)
        report = adapter.transfer_credits_to_account_by_credentials(
            10, Authentication("dest-user", "dest-pass")
        )
        assert report.target_credits_after == 10
        assert _sent_call(session)["data"] == {
            "quantity": "10",
            "target_username": "dest-user",
            "target_password": "dest-pass",
        }
        # Own credentials still authenticate the call
        assert _sent_call(session)["auth"].username == "api-user"

    def test_transfer_rejects_bad_quantity_before_request(self, adapter, session):
        with pytest.raises(InvalidValueError):
            adapter.transfer_credits_to_account_by_id(0, "5678")
        session.request.assert_not_called()


class TestKeywords:
    def test_check_keyword_availability(self, adapter, session, respond):
        respond("<response><available>false</available><recycle>true</recycle></response>")
        availability = adapter.check_keyword_availability("PIZZA")
        assert availability.available is False
        assert availability.recycled is True
        assert _sent_call(session)["url"] == BASE_URL + "keywords/PIZZA"


class TestAccount:
    def test_get_account_information(self, adapter, session, respond):
        respond(ACCOUNT_XML)
        account = adapter.get_account_information()
        assert account.account_id == "1234"
        assert _sent_call(session)["url"] == BASE_URL + "account"

    def test_get_account_information_for_id(self, adapter, session, respond):
        respond(ACCOUNT_XML)
        adapter.get_account_information_for_account_id("5678")
        assert _sent_call(session)["url"] == BASE_URL + "account/5678"

    def test_update_account_information_is_sparse(self, adapter, session, respond):
        respond(ACCOUNT_XML)
        adapter.update_account_information(UpdateAccountInformation(company_name="Acme Ltd"))
        call = _sent_call(session)
        assert call["method"] == "POST"
        assert call["url"] == BASE_URL + "account"
        assert call["data"] == {"company_name": "Acme Ltd"}

    def test_create_sub_account(self, adapter, session, respond):
        respond(ACCOUNT_XML)
        account = adapter.create_sub_account(
            CreateSubAccount(account_username="sub", notification_email="sub@acme.test")
        )
        assert account.credits == 150
        call = _sent_call(session)
        assert call["method"] == "PUT"
        assert call["url"] == BASE_URL + "account/sub"
        assert call["data"] == {
            "account_username": "sub",
            "notification_email": "sub@acme.test",
            "override_pricing": "false",
        }


class TestGroups:
    def test_get_groups_list(self, adapter, session, respond):
        respond(GROUPS_XML)
        groups = adapter.get_groups_list()
        assert [group.name for group in groups] == ["Customers", "STOP"]
        assert _sent_call(session)["url"] == BASE_URL + "groups"

    def test_create_group(self, adapter, session, respond):
        respond(GROUP_XML)
        group = adapter.create_group("My Group")
        assert group.id == "42"
        call = _sent_call(session)
        assert call["method"] == "PUT"
        assert call["url"] == BASE_URL + "groups/My%20Group"

    def test_get_group_information(self, adapter, session, respond):
        respond(GROUP_XML)
        group = adapter.get_group_information("42")
        assert "447700900002" in group.numbers
        assert _sent_call(session)["method"] == "GET"

    def test_add_numbers_sends_raw_body(self, adapter, session, respond):
        respond(
            "<response>"
            "<added><number>447700900001</number></added>"
            "<stopped/>"
            "<duplicates><number>447700900002</number></duplicates>"
            "</response>"
        )
        report = adapter.add_numbers_to_group(
            "My Group", PhoneNumberCollection(("447700900001", "447700900002"))
        )
        assert report.added.as_list() == ["447700900001"]
        assert report.stopped.as_list() == []
        assert report.duplicates.as_list() == ["447700900002"]

        call = _sent_call(session)
        assert call["method"] == "POST"
        assert call["url"] == BASE_URL + "groups/My%20Group"
        assert call["data"] == "447700900001,447700900002"

    def test_group_error(self, adapter, respond):
        respond(error_xml((12, "Group not found"), (13, "Try again")))
        with pytest.raises(EndpointException) as exc_info:
            adapter.get_group_information("missing")
        assert len(exc_info.value.errors) == 2

    def test_add_numbers_requires_numbers(self, adapter, session):
        with pytest.raises(InvalidValueError):
            adapter.add_numbers_to_group("My Group", PhoneNumberCollection())
        session.request.assert_not_called()


class TestDeliveryReports:
    REPORTS_XML = (
        '<response><reports quantity="1">'
        '<report name="GatewayAPI_08-01-26" last_updated="2026-01-08T15:23:22+00:00" extension="csv"/>'
        "</reports></response>"
    )
    RANGE = DateRange(
        start=datetime(2026, 1, 1, tzinfo=timezone.utc),
        end=datetime(2026, 1, 31, 23, 59, 59, tzinfo=timezone.utc),
    )

    def test_list(self, adapter, session, respond):
        respond(self.REPORTS_XML)
        reports = adapter.get_delivery_report_list()
        assert reports[0].extension == "csv"
        assert _sent_call(session)["url"] == BASE_URL + "deliveryReports"

    def test_by_name(self, adapter, session, respond):
        respond(self.REPORTS_XML)
        adapter.get_delivery_report_list_by_name("GatewayAPI")
        assert _sent_call(session)["url"] == BASE_URL + "deliveryReports/GatewayAPI"

    def test_by_name_and_tag(self, adapter, session, respond):
        respond(self.REPORTS_XML)
        adapter.get_delivery_report_list_by_name_and_tag("GatewayAPI", "promo")
        assert _sent_call(session)["url"] == BASE_URL + "deliveryReports/GatewayAPI/tag/promo"

    def test_by_name_and_date_range(self, adapter, session, respond):
        respond(self.REPORTS_XML)
        adapter.get_delivery_report_list_by_name_and_date_range("GatewayAPI", self.RANGE)
        assert _sent_call(session)["url"] == (
            BASE_URL + "deliveryReports/GatewayAPI"
            "/start/2026-01-01T00%3A00%3A00%2B00%3A00"
            "/end/2026-01-31T23%3A59%3A59%2B00%3A00"
        )

    def test_by_name_tag_and_date_range(self, adapter, session, respond):
        respond(self.REPORTS_XML)
        adapter.get_delivery_report_list_by_name_tag_and_date_range(
            "GatewayAPI", "promo", self.RANGE
        )
        url = _sent_call(session)["url"]
        assert url.startswith(BASE_URL + "deliveryReports/GatewayAPI/tag/promo/start/")
        assert "/end/" in url
