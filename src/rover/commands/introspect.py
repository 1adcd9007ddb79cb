"""Introspection of a running GraphQL endpoint."""

from __future__ import annotations

from rover.domain.ports import Introspector
from rover.domain.results import Introspection

from ._transport import translate_transport_errors


def introspect(introspector: Introspector, endpoint: str, headers: dict[str, str]) -> Introspection:
    with translate_transport_errors(f"introspecting {endpoint}"):
        response = introspector.introspect(endpoint, headers)
    return Introspection(introspection_response=response)
