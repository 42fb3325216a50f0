"""Errors raised while interpreting a model response.

All of them are terminal for one generation attempt.  Retrying means
asking the model again, which is the caller's decision.
"""

from __future__ import annotations


class SolutionResponseError(ValueError):
    """Base class: the model response could not be turned into solutions."""


class ParseError(SolutionResponseError):
    """Neither the strict nor the repaired parse produced JSON."""

    def __init__(self, message: str, first_error: str = "", text: str = ""):
        super().__init__(message)
        self.message = message
        self.first_error = first_error
        self.text = text


class EmptyResponseError(SolutionResponseError):
    """The provider returned no text and no structured payload."""


class NoSolutionsError(SolutionResponseError):
    """The payload parsed but held no candidate solutions."""
