"""Pytest configuration and shared fixtures."""

import copy
import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import httpx
import pytest

from hubform.client.fetcher import FormFetcher
from hubform.client.submitter import FormSubmitter
from hubform.config import HubFormSettings
from hubform.log import LOGGER_NAME

SCHEMA_PAYLOAD: dict[str, Any] = {
    "id": "form-guid",
    "name": "Contact us",
    "formType": "hubspot",
    "fieldGroups": [
        {
            "groupType": "default_group",
            "richTextType": "text",
            "fields": [
                {
                    "objectTypeId": "0-1",
                    "name": "firstname",
                    "label": "First name",
                    "required": True,
                    "hidden": False,
                    "fieldType": "single_line_text",
                },
                {
                    "objectTypeId": "0-1",
                    "name": "email",
                    "label": "Email",
                    "required": True,
                    "hidden": False,
                    "fieldType": "email",
                },
            ],
        },
        {
            "groupType": "default_group",
            "richTextType": "text",
            "fields": [
                {
                    "objectTypeId": "0-1",
                    "name": "interests",
                    "label": "Interests",
                    "required": False,
                    "hidden": False,
                    "fieldType": "multiple_checkboxes",
                    "options": [
                        {"label": "Product", "value": "product", "displayOrder": 0},
                        {"label": "Pricing", "value": "pricing", "displayOrder": 1},
                    ],
                },
                {
                    "objectTypeId": "0-1",
                    "name": "country",
                    "label": "Country",
                    "required": False,
                    "hidden": False,
                    "fieldType": "dropdown",
                    "options": [
                        {"label": "Canada", "value": "CA", "displayOrder": 0},
                        {"label": "France", "value": "FR", "displayOrder": 1},
                    ],
                },
            ],
        },
    ],
    "displayOptions": {"submitButtonText": "Send message", "renderRawHtml": False},
}


def reply(status: int, body: Any = None) -> httpx.Response:
    """Build an httpx.Response with a JSON, text or empty body."""
    if isinstance(body, (dict, list)):
        return httpx.Response(status, json=body)
    if isinstance(body, str):
        return httpx.Response(status, text=body)
    return httpx.Response(status)


class UpstreamStub:
    """Stands in for the HubSpot APIs behind an httpx.MockTransport.

    Records every request and answers schema reads and submissions with
    the configured status/body, or raises ``error`` for transport failures.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.schema: tuple[int, Any] = (200, SCHEMA_PAYLOAD)
        self.submission: tuple[int, Any] = (200, {"inlineMessage": "Thanks for submitting the form."})
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if request.url.host == "api.hubapi.com":
            return reply(*self.schema)
        if request.url.host == "api.hsforms.com":
            return reply(*self.submission)
        return reply(404)

    @property
    def submissions(self) -> list[dict[str, Any]]:
        """JSON bodies of all submission requests, in order."""
        return [
            json.loads(r.content)
            for r in self.requests
            if r.url.host == "api.hsforms.com"
        ]


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HUBFORM_HOME and HOME at temp dirs so no real config file is read."""
    home = tmp_path / "hubform-home"
    monkeypatch.setenv("HUBFORM_HOME", str(home))
    monkeypatch.setenv("HOME", str(tmp_path / "user-home"))
    monkeypatch.delenv("HUBFORM_CONFIG", raising=False)
    return home


@pytest.fixture
def settings() -> HubFormSettings:
    """Settings with test identifiers."""
    return HubFormSettings(
        api_token="test-token",
        portal_id="12345",
        form_id="form-guid",
    )


@pytest.fixture
def upstream() -> UpstreamStub:
    """A fresh upstream stub."""
    return UpstreamStub()


@pytest.fixture
def http_client(upstream: UpstreamStub) -> httpx.AsyncClient:
    """An AsyncClient routed to the upstream stub."""
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream))


@pytest.fixture
def fetcher(http_client: httpx.AsyncClient) -> FormFetcher:
    return FormFetcher(http_client)


@pytest.fixture
def submitter(http_client: httpx.AsyncClient) -> FormSubmitter:
    return FormSubmitter(http_client)


@pytest.fixture
def schema_payload() -> dict[str, Any]:
    """A copy of the sample v3 form schema."""
    return copy.deepcopy(SCHEMA_PAYLOAD)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo configure_logging() so caplog sees package records."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
