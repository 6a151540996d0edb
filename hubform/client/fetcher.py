"""Form Fetcher: read a form definition from the HubSpot marketing API.

One attempt per call, no caching. A failed fetch raises FetchError;
``fetch_or_default`` turns that into a FetchOutcome with empty defaults so
the caller can keep rendering.
"""

import logging
from urllib.parse import quote

import httpx
from pydantic import BaseModel, Field, ValidationError

from hubform.client.http import HUBSPOT_API_BASE, create_http_client
from hubform.errors import HubFormError
from hubform.fields.models import FieldGroup, FormDefinition

logger = logging.getLogger(__name__)


class FetchError(HubFormError):
    """Raised when a form schema cannot be retrieved."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class FetchOutcome(BaseModel):
    """Result of a fetch that never raises.

    ``definition`` always holds something renderable; ``error`` is set
    when the upstream call failed and the empty defaults are in use.
    """

    definition: FormDefinition = Field(default_factory=FormDefinition)
    error: str | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_form_definition(data: object) -> FormDefinition:
    """Extract field groups and submit label from a v3 form payload.

    Missing or null values default to ``[]`` and ``""``.

    Raises:
        FetchError: If field groups are present but malformed.
    """
    if not isinstance(data, dict):
        return FormDefinition()

    raw_groups = data.get("fieldGroups") or []
    display_options = data.get("displayOptions") or {}
    submit_text = ""
    if isinstance(display_options, dict):
        submit_text = display_options.get("submitButtonText") or ""

    try:
        groups = [FieldGroup.model_validate(group) for group in raw_groups]
    except (ValidationError, TypeError) as e:
        raise FetchError(f"Malformed fieldGroups in form schema: {e}") from e

    return FormDefinition(field_groups=groups, submit_button_text=str(submit_text))


class FormFetcher:
    """Fetches form schemas over a shared httpx client."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str = HUBSPOT_API_BASE,
    ) -> None:
        """Initialize the fetcher.

        Args:
            http_client: Client used for the request (owned by the caller).
            base_url: Marketing API base URL.
        """
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")

    def schema_url(self, form_id: str) -> str:
        return f"{self.base_url}/marketing/v3/forms/{quote(form_id, safe='')}"

    async def fetch(self, form_id: str, credential: str) -> FormDefinition:
        """Fetch the form definition.

        Args:
            form_id: The HubSpot form GUID.
            credential: Bearer token authorizing the read.

        Returns:
            FormDefinition with field groups and submit button text.

        Raises:
            FetchError: On non-2xx status, transport failure or a bad body.
        """
        url = self.schema_url(form_id)
        try:
            response = await self.http_client.get(
                url,
                headers={
                    "Authorization": f"Bearer {credential}",
                    "Cache-Control": "no-cache",
                },
            )
        except httpx.HTTPError as e:
            raise FetchError(f"Error fetching form {form_id}: {e}") from e

        if not response.is_success:
            raise FetchError(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise FetchError(
                f"Invalid JSON in form schema response: {e}",
                status_code=response.status_code,
            ) from e

        return parse_form_definition(data)

    async def fetch_or_default(self, form_id: str, credential: str) -> FetchOutcome:
        """Fetch the form definition, degrading to empty defaults on failure.

        The failure is logged and reported on the outcome, never raised.
        """
        try:
            definition = await self.fetch(form_id, credential)
        except FetchError as e:
            logger.error("Error fetching form %s: %s", form_id, e)
            return FetchOutcome(error=str(e), status_code=e.status_code)
        return FetchOutcome(definition=definition)


async def fetch_form(
    form_id: str,
    credential: str,
    http_client: httpx.AsyncClient | None = None,
) -> FormDefinition:
    """Fetch a form definition, creating a throwaway client if none is given."""
    if http_client is not None:
        return await FormFetcher(http_client).fetch(form_id, credential)

    async with create_http_client() as client:
        return await FormFetcher(client).fetch(form_id, credential)
