"""Readme commands."""

from __future__ import annotations

from rover.domain.models import GraphRef
from rover.domain.ports import StudioClient
from rover.domain.results import ReadmeFetch, ReadmePublish

from ._transport import translate_transport_errors


def fetch_readme(client: StudioClient, graph_ref: GraphRef) -> ReadmeFetch:
    with translate_transport_errors("fetching readme", graph_ref):
        content, last_updated = client.fetch_readme(graph_ref)
    return ReadmeFetch(graph_ref=graph_ref, content=content, last_updated_time=last_updated)


def publish_readme(client: StudioClient, graph_ref: GraphRef, content: str) -> ReadmePublish:
    with translate_transport_errors("publishing readme", graph_ref):
        new_content, last_updated = client.publish_readme(graph_ref, content)
    return ReadmePublish(
        graph_ref=graph_ref, new_content=new_content, last_updated_time=last_updated
    )
