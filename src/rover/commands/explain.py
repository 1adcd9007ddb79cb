"""
Explain Command

Prints the long-form explanation of an error code from the shared code table.
"""

from __future__ import annotations

from rover.domain.codes import explanation_for
from rover.domain.errors import UnknownErrorCode
from rover.domain.results import ErrorExplanation


def explain(code: str) -> ErrorExplanation:
    """
    Look up the explanation for ``code``.

    Args:
        code: Error code such as ``E029`` (case-insensitive)

    Returns:
        ErrorExplanation with the markdown text

    Raises:
        UnknownErrorCode: If no kind owns ``code``
    """
    explanation = explanation_for(code)
    if not explanation:
        raise UnknownErrorCode(requested_code=code)
    return ErrorExplanation(explanation_markdown=f"**{code.strip().upper()}**\n\n{explanation}")
