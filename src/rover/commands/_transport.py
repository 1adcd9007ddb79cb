"""Enrich raw network failures from collaborators into TransportError."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from rover.domain.errors import TransportError
from rover.domain.models import GraphRef

logger = logging.getLogger(__name__)


@contextmanager
def translate_transport_errors(operation: str, graph_ref: GraphRef | None = None) -> Iterator[None]:
    """
    Re-raise ConnectionError/TimeoutError as TransportError (E004).

    Args:
        operation: What the command was doing, e.g. "fetching subgraph schema"
        graph_ref: Graph the request targeted, when there is one
    """
    try:
        yield
    except (ConnectionError, TimeoutError) as e:
        logger.debug("Transport failure while %s", operation, exc_info=True)
        raise TransportError(
            operation=operation, reason=str(e) or type(e).__name__, graph_ref=graph_ref
        ) from e
