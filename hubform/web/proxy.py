"""JSON relay for client-only front ends.

The browser never sees the API token: it asks this proxy for the form
schema and posts its fields here, and the proxy talks to HubSpot.
"""

import logging
from typing import Any

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field

from hubform.client.fetcher import FetchError
from hubform.client.submitter import SubmissionError
from hubform.fields.models import NormalizedField
from hubform.fields.normalizer import normalize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["proxy"])


class PostFormRequest(BaseModel):
    """Body of POST /api/postHubSpotForm.

    ``fields`` is either the normalized list or a raw name -> value
    mapping, which is normalized here.
    """

    form_id: str | None = Field(default=None, alias="formId")
    fields: list[NormalizedField] | dict[str, Any] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    def normalized_fields(self) -> list[NormalizedField]:
        if isinstance(self.fields, dict):
            return normalize(self.fields)
        return self.fields


@router.get("/getHubSpotForm", response_model=None)
async def get_hubspot_form(
    request: Request,
    form_id: str | None = Query(default=None, alias="formId"),
) -> dict[str, Any] | PlainTextResponse:
    """Return ``{fieldGroups, submitButtonText}`` for a form."""
    settings = request.app.state.settings
    resolved_form_id = form_id or settings.form_id

    try:
        definition = await request.app.state.fetcher.fetch(resolved_form_id, settings.api_token)
    except FetchError as e:
        logger.error("Error fetching form %s: %s", resolved_form_id, e)
        return PlainTextResponse("Failed to fetch form", status_code=500)

    return definition.to_payload()


@router.post("/postHubSpotForm", response_model=None)
async def post_hubspot_form(
    request: Request,
    body: PostFormRequest,
) -> JSONResponse | PlainTextResponse:
    """Relay a submission and pass the upstream JSON response through."""
    settings = request.app.state.settings
    resolved_form_id = body.form_id or settings.form_id

    result = await request.app.state.submitter.submit(
        settings.portal_id,
        resolved_form_id,
        body.normalized_fields(),
    )
    if isinstance(result, SubmissionError):
        logger.error("Error submitting form %s: %s", resolved_form_id, result.message)
        return PlainTextResponse("Failed to submit form", status_code=500)

    return JSONResponse(result.upstream or {})
