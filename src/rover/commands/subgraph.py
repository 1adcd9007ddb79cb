"""
Subgraph Commands

List, fetch, publish and delete the subgraphs of a federated graph. Publish
and delete can succeed while the supergraph fails to compose; those build
errors stay on the result and are reported alongside it.
"""

from __future__ import annotations

import logging

from rover.domain.errors import SubgraphNotFound
from rover.domain.models import GraphRef
from rover.domain.ports import StudioClient
from rover.domain.results import Fetch, SubgraphDelete, SubgraphList, SubgraphPublish

from ._transport import translate_transport_errors

logger = logging.getLogger(__name__)


def list_subgraphs(client: StudioClient, graph_ref: GraphRef) -> SubgraphList:
    with translate_transport_errors("listing subgraphs", graph_ref):
        response = client.list_subgraphs(graph_ref)
    return SubgraphList(list_response=response)


def fetch_subgraph(client: StudioClient, graph_ref: GraphRef, subgraph: str) -> Fetch:
    """
    Fetch one subgraph's SDL.

    Raises:
        SubgraphNotFound: If ``subgraph`` does not exist; the error lists the
            subgraphs that do
    """
    try:
        with translate_transport_errors("fetching subgraph schema", graph_ref):
            response = client.fetch_subgraph(graph_ref, subgraph)
    except SubgraphNotFound as error:
        if error.valid_subgraphs:
            raise
        with translate_transport_errors("listing subgraphs", graph_ref):
            listing = client.list_subgraphs(graph_ref)
        raise SubgraphNotFound(
            invalid_subgraph=subgraph,
            valid_subgraphs=[info.name for info in listing.subgraphs],
        ) from error
    return Fetch(fetch_response=response)


def publish_subgraph(
    client: StudioClient,
    graph_ref: GraphRef,
    subgraph: str,
    schema: str,
    routing_url: str | None = None,
) -> SubgraphPublish:
    """
    Publish ``schema`` as ``subgraph`` of ``graph_ref``.

    Returns:
        SubgraphPublish, which may carry build errors from composition
    """
    with translate_transport_errors("publishing subgraph", graph_ref):
        response = client.publish_subgraph(graph_ref, subgraph, schema, routing_url)
    if response.build_errors:
        logger.debug("Publish of %s returned %d build errors", subgraph, len(response.build_errors))
    return SubgraphPublish(graph_ref=graph_ref, subgraph=subgraph, publish_response=response)


def delete_subgraph(
    client: StudioClient, graph_ref: GraphRef, subgraph: str, *, dry_run: bool
) -> SubgraphDelete:
    """
    Delete ``subgraph`` from ``graph_ref``, or predict the effect when ``dry_run``.
    """
    operation = "checking subgraph deletion" if dry_run else "deleting subgraph"
    with translate_transport_errors(operation, graph_ref):
        response = client.delete_subgraph(graph_ref, subgraph, dry_run)
    return SubgraphDelete(
        graph_ref=graph_ref, subgraph=subgraph, dry_run=dry_run, delete_response=response
    )
