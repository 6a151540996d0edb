"""Presentation shell for the contact form.

Orchestrates fetch -> render -> collect -> normalize -> submit -> display
and owns the form's state:

    IDLE -> LOADING -> READY -> SUBMITTING -> SUBMITTED
                                          \\-> SUBMIT_ERROR -> SUBMITTING ...

Loading always ends in READY, even when the fetch fails (the failure is
logged and kept on ``load_error``). A shell whose load failed still
renders, but refuses to submit since its values cannot be typed without
the schema. SUBMITTED is terminal.
"""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from hubform.client.fetcher import FormFetcher
from hubform.client.submitter import FormSubmitter, SubmissionError, SubmissionSuccess
from hubform.config import HubFormSettings
from hubform.errors import HubFormError
from hubform.fields.models import FormDefinition
from hubform.fields.normalizer import normalize

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "The form has been submitted successfully."
FORM_UNAVAILABLE_MESSAGE = "The form could not be loaded. Please try again later."


class ShellState(str, Enum):
    """State of the contact form shell."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"
    SUBMIT_ERROR = "submit_error"


class ShellError(HubFormError):
    """Raised when the shell is driven out of order."""

    pass


class InvalidTransitionError(ShellError):
    """Raised when an action is not allowed in the current state."""

    def __init__(self, state: ShellState, action: str) -> None:
        self.state = state
        self.action = action
        super().__init__(f"Cannot {action} while form is {state.value}")


class SubmissionInProgressError(ShellError):
    """Raised when a submit is attempted while another is in flight."""

    def __init__(self) -> None:
        super().__init__("A submission is already in progress")


class ContactFormShell:
    """Drives one form instance through load and submit.

    A shell is scoped to a single user interaction (one page view);
    it holds no state shared across users.
    """

    def __init__(
        self,
        settings: HubFormSettings,
        fetcher: FormFetcher,
        submitter: FormSubmitter,
        form_id: str | None = None,
    ) -> None:
        """Initialize the shell.

        Args:
            settings: Process settings (credential, portal id, form id).
            fetcher: Form Fetcher used on load.
            submitter: Form Submitter used on submit.
            form_id: Form to drive (default: the configured form id).
        """
        self.settings = settings
        self.fetcher = fetcher
        self.submitter = submitter
        self.form_id = form_id or settings.form_id

        self.state = ShellState.IDLE
        self.definition = FormDefinition()
        self.load_error: str | None = None
        self.error_message: str | None = None
        self.successful_submissions = 0

    @property
    def is_loading(self) -> bool:
        return self.state in (ShellState.IDLE, ShellState.LOADING)

    @property
    def is_submitting(self) -> bool:
        return self.state is ShellState.SUBMITTING

    @property
    def is_submitted(self) -> bool:
        return self.state is ShellState.SUBMITTED

    @property
    def can_submit(self) -> bool:
        return self.state in (ShellState.READY, ShellState.SUBMIT_ERROR)

    async def load(self) -> FormDefinition:
        """Fetch the form schema and move to READY.

        Returns:
            The loaded definition (empty defaults if the fetch failed).

        Raises:
            InvalidTransitionError: If the shell was already loaded.
        """
        if self.state is not ShellState.IDLE:
            raise InvalidTransitionError(self.state, "load")

        self.state = ShellState.LOADING
        outcome = await self.fetcher.fetch_or_default(self.form_id, self.settings.api_token)
        self.definition = outcome.definition
        self.load_error = outcome.error
        self.state = ShellState.READY
        return self.definition

    async def submit(self, raw_values: Mapping[str, Any]) -> SubmissionSuccess | SubmissionError:
        """Normalize and submit collected values.

        Args:
            raw_values: Field name -> raw value (string, list, labeled
                option or FieldValue).

        Returns:
            The submission result; also reflected on ``state`` and
            ``error_message``.

        Raises:
            SubmissionInProgressError: If a submission is already in flight.
            InvalidTransitionError: If the form is not ready or already submitted.
        """
        if self.state is ShellState.SUBMITTING:
            raise SubmissionInProgressError()
        if not self.can_submit:
            raise InvalidTransitionError(self.state, "submit")
        if self.load_error is not None:
            logger.warning("Not submitting form %s: schema unavailable", self.form_id)
            self.state = ShellState.SUBMIT_ERROR
            self.error_message = FORM_UNAVAILABLE_MESSAGE
            return SubmissionError(message=FORM_UNAVAILABLE_MESSAGE)

        previous_state = self.state
        self.state = ShellState.SUBMITTING
        self.error_message = None

        try:
            fields = normalize(raw_values)
            result = await self.submitter.submit(
                self.settings.portal_id,
                self.form_id,
                fields,
            )
        except BaseException:
            # Let the user try again after an unexpected failure
            self.state = previous_state
            raise

        if isinstance(result, SubmissionSuccess):
            self.state = ShellState.SUBMITTED
            self.successful_submissions += 1
        else:
            self.state = ShellState.SUBMIT_ERROR
            self.error_message = result.message

        return result

    def view(self) -> dict[str, Any]:
        """Return the render context for the current state."""
        return {
            "form_id": self.form_id,
            "state": self.state.value,
            "field_groups": self.definition.field_groups,
            "submit_button_text": self.definition.submit_button_text,
            "is_loading": self.is_loading,
            "is_submitting": self.is_submitting,
            "is_submitted": self.is_submitted,
            "success_message": SUCCESS_MESSAGE,
            "error_message": self.error_message,
            "load_error": self.load_error,
        }
