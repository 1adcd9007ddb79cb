"""
Supergraph Commands

Fetch the composed supergraph from the registry, or compose one locally
from subgraph schema files.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rover.domain.errors import UnclassifiedError
from rover.domain.models import GraphRef
from rover.domain.ports import CompositionEngine, StudioClient
from rover.domain.results import CompositionResult, Fetch, SupergraphSchema

from ._transport import translate_transport_errors

logger = logging.getLogger(__name__)


def fetch_supergraph(client: StudioClient, graph_ref: GraphRef) -> Fetch:
    """
    Fetch the latest composed supergraph.

    Raises:
        NoSupergraphBuilds: If the registry never composed a supergraph
    """
    with translate_transport_errors("fetching supergraph schema", graph_ref):
        response = client.fetch_supergraph(graph_ref)
    return Fetch(fetch_response=response)


def read_subgraph_schemas(sources: dict[str, Path]) -> dict[str, str]:
    """
    Read each subgraph's SDL file.

    Raises:
        UnclassifiedError: If no subgraphs were given or a file cannot be read
    """
    if not sources:
        raise UnclassifiedError(text="At least one subgraph is required to compose a supergraph")
    schemas: dict[str, str] = {}
    for name, path in sources.items():
        try:
            schemas[name] = path.read_text(encoding="utf-8")
        except OSError as e:
            raise UnclassifiedError(
                text=f'Could not read the schema for subgraph "{name}" from {path}: {e}'
            ) from e
    return schemas


def compose_supergraph(
    composer: CompositionEngine,
    subgraphs: dict[str, str],
    *,
    include_hints: bool = True,
) -> CompositionResult | SupergraphSchema:
    """
    Compose ``subgraphs`` (name to SDL) into a supergraph.

    Returns:
        CompositionResult with hints, or the bare SupergraphSchema when
        ``include_hints`` is False

    Raises:
        BuildErrorsFailure: If composition failed
    """
    logger.debug("Composing %d subgraphs: %s", len(subgraphs), ", ".join(sorted(subgraphs)))
    output = composer.compose(subgraphs)
    if not include_hints:
        return SupergraphSchema(core_schema=output.supergraph_sdl)
    return CompositionResult(composition_output=output)
