"""Shared test fixtures for the TextMarketer client."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from textmarketer.adapters.textmarketer_adapter import TextMarketerAdapter
from textmarketer.domain.models import Authentication


BASE_URL = "https://api.example.test/services/rest/"


def make_response(body: str, status_code: int = 200) -> MagicMock:
    response = MagicMock(spec=requests.Response)
    response.text = body
    response.status_code = status_code
    return response


@pytest.fixture
def authentication() -> Authentication:
    return Authentication("api-user", "api-secret")


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=requests.Session)


@pytest.fixture
def adapter(authentication: Authentication, session: MagicMock) -> TextMarketerAdapter:
    return TextMarketerAdapter(authentication, session, base_url=BASE_URL)


@pytest.fixture
def respond(session: MagicMock):
    """Make the mocked session return the given XML body."""

    def _respond(body: str, status_code: int = 200) -> MagicMock:
        response = make_response(body, status_code)
        session.request.return_value = response
        return response

    return _respond


# --- Canned gateway responses ---

ACCOUNT_XML = """<?xml version="1.0" encoding="UTF-8"?>
<response processed_date="2026-10-18T10:00:00+00:00">
    <account_id>1234</account_id>
    <api_username>apiuser</api_username>
    <api_password>apipass</api_password>
    <company_name>Acme Ltd</company_name>
    <create_date>2012-03-01T15:23:22+00:00</create_date>
    <credits>150</credits>
    <notification_email>ops@acme.test</notification_email>
    <notification_mobile>447700900000</notification_mobile>
    <username>webuser</username>
    <password>webpass</password>
</response>"""

GROUP_XML = """<response>
    <group id="42" name="My Group" numbers="2" is_stop="false">
        <number>447700900001</number>
        <number>447700900002</number>
    </group>
</response>"""

GROUPS_XML = """<response>
    <groups>
        <group id="1" name="Customers" numbers="120" is_stop="false"/>
        <group id="2" name="STOP" numbers="3" is_stop="true"/>
    </groups>
</response>"""


def error_xml(*errors: tuple[int, str]) -> str:
    entries = "".join(f'<error code="{code}">{message}</error>' for code, message in errors)
    return f"<response><errors>{entries}</errors></response>"


def send_xml(status: str, message_id: str = "", scheduled_id: str = "", credits_used: int = 1) -> str:
    return (
        "<response>"
        f"<message_id>{message_id}</message_id>"
        f"<scheduled_id>{scheduled_id}</scheduled_id>"
        f"<credits_used>{credits_used}</credits_used>"
        f"<status>{status}</status>"
        "</response>"
    )
