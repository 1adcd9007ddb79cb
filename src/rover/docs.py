"""Documentation shortlinks opened by ``rover docs open``."""

from __future__ import annotations

DOCS_ROOT_URL = "https://www.apollographql.com/docs/rover"

SHORTLINKS: dict[str, tuple[str, str]] = {
    "api-keys": ("Understanding Apollo's API Keys", "https://go.apollo.dev/r/api-keys"),
    "contributing": ("Contributing to Rover", f"{DOCS_ROOT_URL}/contributing"),
    "docs": ("Rover's Documentation Homepage", DOCS_ROOT_URL),
    "migration": ("Migrate from the Apollo CLI to Rover", f"{DOCS_ROOT_URL}/migration"),
    "start": ("Getting Started with Rover", f"{DOCS_ROOT_URL}/getting-started"),
    "template": ("Learn how to create new projects from templates", f"{DOCS_ROOT_URL}/commands/template"),
}


def shortlink_descriptions() -> dict[str, str]:
    return {slug: description for slug, (description, _url) in SHORTLINKS.items()}


def shortlink_url(slug: str) -> str | None:
    entry = SHORTLINKS.get(slug)
    return entry[1] if entry is not None else None
