"""
Graph Commands

Fetch, publish and check the schema of a non-federated graph.
"""

from __future__ import annotations

from rover.domain.errors import OperationCheckFailure
from rover.domain.models import ChangeSeverity, CheckRequestSuccessResult, GraphRef
from rover.domain.ports import StudioClient
from rover.domain.results import AsyncCheck, Check, Fetch, GraphPublish

from ._transport import translate_transport_errors


def fetch_graph(client: StudioClient, graph_ref: GraphRef) -> Fetch:
    with translate_transport_errors("fetching graph schema", graph_ref):
        response = client.fetch_graph(graph_ref)
    return Fetch(fetch_response=response)


def publish_graph(client: StudioClient, graph_ref: GraphRef, schema: str) -> GraphPublish:
    with translate_transport_errors("publishing graph schema", graph_ref):
        response = client.publish_graph(graph_ref, schema)
    return GraphPublish(graph_ref=graph_ref, publish_response=response)


def check_graph(
    client: StudioClient, graph_ref: GraphRef, schema: str, *, background: bool = False
) -> Check | AsyncCheck:
    """
    Check ``schema`` against recent operations on ``graph_ref``.

    Args:
        client: Registry client
        graph_ref: Graph whose traffic the schema is checked against
        schema: Proposed SDL
        background: Queue the check and return its workflow id instead of waiting

    Returns:
        Check for a passing check, AsyncCheck for a queued one

    Raises:
        OperationCheckFailure: If the check found breaking changes
    """
    with translate_transport_errors("checking graph schema", graph_ref):
        result = client.check_graph(graph_ref, schema, background)
    if isinstance(result, CheckRequestSuccessResult):
        return AsyncCheck(check_request=result)
    if result.result == ChangeSeverity.FAIL:
        raise OperationCheckFailure(graph_ref=graph_ref, check_response=result)
    return Check(check_response=result)
