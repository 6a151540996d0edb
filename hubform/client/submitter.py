"""Form Submitter: post normalized fields to the HubSpot forms endpoint.

Failures are returned as SubmissionError values rather than raised, so
callers can render them. No retries and no idempotency key: submitting
twice creates two upstream records.
"""

import logging
from collections.abc import Sequence
from typing import Annotated, Any, Literal
from urllib.parse import quote

import httpx
from pydantic import BaseModel, Field

from hubform.client.http import HUBSPOT_FORMS_BASE, create_http_client
from hubform.fields.models import NormalizedField

logger = logging.getLogger(__name__)

SUBMISSION_FAILED_MESSAGE = "Submission failed"
UNEXPECTED_ERROR_MESSAGE = "Unexpected error"


class SubmissionSuccess(BaseModel):
    """The upstream accepted the submission."""

    status: Literal["success"] = "success"
    upstream: dict[str, Any] | None = None

    @property
    def ok(self) -> bool:
        return True


class SubmissionError(BaseModel):
    """The upstream rejected the submission or was unreachable."""

    status: Literal["error"] = "error"
    message: str
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return False


SubmissionResult = Annotated[
    SubmissionSuccess | SubmissionError,
    Field(discriminator="status"),
]


def build_payload(fields: Sequence[NormalizedField]) -> dict[str, Any]:
    """Build the JSON body expected by the submission endpoint."""
    return {"fields": [field.model_dump() for field in fields]}


def _upstream_message(response: httpx.Response) -> str | None:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return None


class FormSubmitter:
    """Submits normalized fields over a shared httpx client."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str = HUBSPOT_FORMS_BASE,
    ) -> None:
        """Initialize the submitter.

        Args:
            http_client: Client used for the request (owned by the caller).
            base_url: Forms ingestion base URL.
        """
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")

    def submit_url(self, account_id: str, form_id: str) -> str:
        return (
            f"{self.base_url}/submissions/v3/integration/submit/"
            f"{quote(account_id, safe='')}/{quote(form_id, safe='')}"
        )

    async def submit(
        self,
        account_id: str,
        form_id: str,
        fields: Sequence[NormalizedField],
    ) -> SubmissionSuccess | SubmissionError:
        """Submit normalized fields.

        Args:
            account_id: The HubSpot portal (account) id.
            form_id: The HubSpot form GUID.
            fields: Normalized name/value pairs, in submission order.

        Returns:
            SubmissionSuccess, or SubmissionError carrying the upstream
            message (or a generic fallback). Never raises for upstream
            or transport failures.
        """
        url = self.submit_url(account_id, form_id)
        try:
            response = await self.http_client.post(
                url,
                json=build_payload(fields),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            logger.warning("Error submitting form %s: %s", form_id, e)
            return SubmissionError(message=str(e) or UNEXPECTED_ERROR_MESSAGE)

        if not response.is_success:
            message = _upstream_message(response) or SUBMISSION_FAILED_MESSAGE
            logger.warning(
                "Form %s submission rejected (status %s): %s",
                form_id,
                response.status_code,
                message,
            )
            return SubmissionError(message=message, status_code=response.status_code)

        try:
            upstream = response.json() if response.content else {}
        except ValueError:
            upstream = {}
        if not isinstance(upstream, dict):
            upstream = {"data": upstream}

        logger.info("Form %s submitted with %d fields", form_id, len(fields))
        return SubmissionSuccess(upstream=upstream)


async def submit_form(
    account_id: str,
    form_id: str,
    fields: Sequence[NormalizedField],
    http_client: httpx.AsyncClient | None = None,
) -> SubmissionSuccess | SubmissionError:
    """Submit fields, creating a throwaway client if none is given."""
    if http_client is not None:
        return await FormSubmitter(http_client).submit(account_id, form_id, fields)

    async with create_http_client() as client:
        return await FormSubmitter(client).submit(account_id, form_id, fields)
