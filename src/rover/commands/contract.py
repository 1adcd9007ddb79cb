"""
Contract Commands

Describe and publish the filter configuration of a contract variant.
"""

from __future__ import annotations

from rover.domain.models import GraphRef
from rover.domain.ports import StudioClient
from rover.domain.results import ContractDescribe, ContractPublish

from ._transport import translate_transport_errors


def describe_contract(client: StudioClient, graph_ref: GraphRef) -> ContractDescribe:
    with translate_transport_errors("describing contract", graph_ref):
        response = client.describe_contract(graph_ref)
    return ContractDescribe(describe_response=response)


def publish_contract(
    client: StudioClient,
    graph_ref: GraphRef,
    source_variant: str,
    include_tags: list[str],
    exclude_tags: list[str],
) -> ContractPublish:
    """
    Publish a new contract configuration for ``graph_ref``.

    Args:
        client: Registry client
        graph_ref: Contract variant to configure
        source_variant: Variant the contract filters
        include_tags: Tags whose elements are kept
        exclude_tags: Tags whose elements are removed

    Returns:
        ContractPublish with the new configuration description
    """
    with translate_transport_errors("publishing contract", graph_ref):
        response = client.publish_contract(graph_ref, source_variant, include_tags, exclude_tags)
    return ContractPublish(publish_response=response)
