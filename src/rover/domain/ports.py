"""
Collaborator Ports

Interfaces of the services command handlers call. Transport, authentication
and composition live behind these protocols; implementations either raise a
classified RoverError or let ConnectionError/TimeoutError escape for the
command to enrich.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .models import (
    CheckRequestSuccessResult,
    CheckResponse,
    CompositionOutput,
    ContractDescribeResponse,
    ContractPublishResponse,
    FetchResponse,
    GithubTemplate,
    GraphPublishResponse,
    GraphRef,
    SubgraphDeleteResponse,
    SubgraphListResponse,
    SubgraphPublishResponse,
)

if TYPE_CHECKING:
    from rover.profiles import Profile


@runtime_checkable
class StudioClient(Protocol):
    """Authenticated client for the graph registry."""

    def list_subgraphs(self, graph_ref: GraphRef) -> SubgraphListResponse: ...

    def fetch_subgraph(self, graph_ref: GraphRef, subgraph: str) -> FetchResponse: ...

    def publish_subgraph(
        self,
        graph_ref: GraphRef,
        subgraph: str,
        schema: str,
        routing_url: str | None,
    ) -> SubgraphPublishResponse: ...

    def delete_subgraph(
        self, graph_ref: GraphRef, subgraph: str, dry_run: bool
    ) -> SubgraphDeleteResponse: ...

    def fetch_graph(self, graph_ref: GraphRef) -> FetchResponse: ...

    def publish_graph(self, graph_ref: GraphRef, schema: str) -> GraphPublishResponse: ...

    def check_graph(
        self, graph_ref: GraphRef, schema: str, background: bool
    ) -> CheckResponse | CheckRequestSuccessResult: ...

    def fetch_supergraph(self, graph_ref: GraphRef) -> FetchResponse: ...

    def fetch_readme(self, graph_ref: GraphRef) -> tuple[str, str | None]: ...

    def publish_readme(self, graph_ref: GraphRef, content: str) -> tuple[str, str | None]: ...

    def describe_contract(self, graph_ref: GraphRef) -> ContractDescribeResponse: ...

    def publish_contract(
        self,
        graph_ref: GraphRef,
        source_variant: str,
        include_tags: list[str],
        exclude_tags: list[str],
    ) -> ContractPublishResponse: ...


@runtime_checkable
class CompositionEngine(Protocol):
    """Composes subgraph schemas into a supergraph."""

    def compose(self, subgraphs: dict[str, str]) -> CompositionOutput: ...


@runtime_checkable
class TemplateFetcher(Protocol):
    """Materializes a template repository into a local directory."""

    def fetch(self, template: GithubTemplate, path: Path) -> None: ...


@runtime_checkable
class Introspector(Protocol):
    """Runs an introspection query against a running GraphQL endpoint."""

    def introspect(self, endpoint: str, headers: dict[str, str]) -> str: ...


class ClientFactory(Protocol):
    """Build a registry client for a resolved profile."""

    def __call__(self, profile: Profile) -> StudioClient: ...
