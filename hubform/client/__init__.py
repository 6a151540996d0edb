"""HubSpot API clients: schema fetcher and submission poster."""

from hubform.client.fetcher import (
    FetchError,
    FetchOutcome,
    FormFetcher,
    fetch_form,
    parse_form_definition,
)
from hubform.client.http import HUBSPOT_API_BASE, HUBSPOT_FORMS_BASE, create_http_client
from hubform.client.submitter import (
    SUBMISSION_FAILED_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    FormSubmitter,
    SubmissionError,
    SubmissionResult,
    SubmissionSuccess,
    build_payload,
    submit_form,
)

__all__ = [
    "HUBSPOT_API_BASE",
    "HUBSPOT_FORMS_BASE",
    "create_http_client",
    # Fetcher
    "FetchError",
    "FetchOutcome",
    "FormFetcher",
    "fetch_form",
    "parse_form_definition",
    # Submitter
    "SUBMISSION_FAILED_MESSAGE",
    "UNEXPECTED_ERROR_MESSAGE",
    "FormSubmitter",
    "SubmissionError",
    "SubmissionResult",
    "SubmissionSuccess",
    "build_payload",
    "submit_form",
]
