"""Root of the Bundle Insight error hierarchy."""

from typing import Any, Mapping, Optional


class BundleInsightError(Exception):
    """
    An expected failure: bad input files, bad settings, unwritable output.

    ``details`` holds structured context that is appended to the message.
    ``hint`` is a suggested next step the CLI prints under the error.
    """

    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
        hint: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})
        if hint is not None:
            self.hint = hint

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
