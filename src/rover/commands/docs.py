"""
Docs Commands

List the documentation shortlinks and open one in a browser.
"""

from __future__ import annotations

from collections.abc import Callable

import click

from rover.docs import shortlink_descriptions, shortlink_url
from rover.domain.errors import UnclassifiedError
from rover.domain.results import DocsList, EmptySuccess


def list_docs() -> DocsList:
    return DocsList(shortlinks=shortlink_descriptions())


def open_docs(slug: str, launcher: Callable[[str], object] | None = None) -> EmptySuccess:
    """
    Open the page behind ``slug``.

    Raises:
        UnclassifiedError: If ``slug`` is not a known shortlink
    """
    url = shortlink_url(slug)
    if url is None:
        raise UnclassifiedError(
            text=f'"{slug}" is not a known documentation shortlink. '
            "Run `rover docs list` to see the available slugs."
        )
    (launcher or click.launch)(url)
    return EmptySuccess()
