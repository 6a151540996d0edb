"""Presentation shell for the contact form."""

from hubform.shell.orchestrator import (
    FORM_UNAVAILABLE_MESSAGE,
    SUCCESS_MESSAGE,
    ContactFormShell,
    InvalidTransitionError,
    ShellError,
    ShellState,
    SubmissionInProgressError,
)

__all__ = [
    "FORM_UNAVAILABLE_MESSAGE",
    "SUCCESS_MESSAGE",
    "ContactFormShell",
    "InvalidTransitionError",
    "ShellError",
    "ShellState",
    "SubmissionInProgressError",
]
