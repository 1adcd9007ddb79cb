"""
Command Results

RoverOutput is the closed set of successful command outcomes. Every command
returns exactly one variant (or raises a RoverError). Both renderers keep one
table entry per member of OUTPUT_VARIANTS; adding a variant here without
adding it to those tables fails at import time.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import BuildErrorsFailure
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


class RoverOutput:
    """Marker base for command results"""

    __slots__ = ()


@dataclass(slots=True, frozen=True)
class ContractDescribe(RoverOutput):
    describe_response: ContractDescribeResponse


@dataclass(slots=True, frozen=True)
class ContractPublish(RoverOutput):
    publish_response: ContractPublishResponse


@dataclass(slots=True, frozen=True)
class DocsList(RoverOutput):
    shortlinks: dict[str, str]


@dataclass(slots=True, frozen=True)
class Fetch(RoverOutput):
    fetch_response: FetchResponse


@dataclass(slots=True, frozen=True)
class SupergraphSchema(RoverOutput):
    core_schema: str


@dataclass(slots=True, frozen=True)
class CompositionResult(RoverOutput):
    composition_output: CompositionOutput


@dataclass(slots=True, frozen=True)
class SubgraphList(RoverOutput):
    list_response: SubgraphListResponse


@dataclass(slots=True, frozen=True)
class Check(RoverOutput):
    check_response: CheckResponse


@dataclass(slots=True, frozen=True)
class AsyncCheck(RoverOutput):
    check_request: CheckRequestSuccessResult


@dataclass(slots=True, frozen=True)
class GraphPublish(RoverOutput):
    graph_ref: GraphRef
    publish_response: GraphPublishResponse


@dataclass(slots=True, frozen=True)
class SubgraphPublish(RoverOutput):
    graph_ref: GraphRef
    subgraph: str
    publish_response: SubgraphPublishResponse


@dataclass(slots=True, frozen=True)
class SubgraphDelete(RoverOutput):
    graph_ref: GraphRef
    subgraph: str
    dry_run: bool
    delete_response: SubgraphDeleteResponse


@dataclass(slots=True, frozen=True)
class TemplateList(RoverOutput):
    templates: tuple[GithubTemplate, ...]


@dataclass(slots=True, frozen=True)
class TemplateUseSuccess(RoverOutput):
    template: GithubTemplate
    path: Path


@dataclass(slots=True, frozen=True)
class Profiles(RoverOutput):
    profiles: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class Introspection(RoverOutput):
    introspection_response: str


@dataclass(slots=True, frozen=True)
class ErrorExplanation(RoverOutput):
    explanation_markdown: str


@dataclass(slots=True, frozen=True)
class ReadmeFetch(RoverOutput):
    graph_ref: GraphRef
    content: str
    last_updated_time: str | None = None


@dataclass(slots=True, frozen=True)
class ReadmePublish(RoverOutput):
    graph_ref: GraphRef
    new_content: str
    last_updated_time: str | None = None


@dataclass(slots=True, frozen=True)
class EmptySuccess(RoverOutput):
    """A command that succeeded without anything to print"""


OUTPUT_VARIANTS: tuple[type[RoverOutput], ...] = (
    ContractDescribe,
    ContractPublish,
    DocsList,
    Fetch,
    SupergraphSchema,
    CompositionResult,
    SubgraphList,
    Check,
    AsyncCheck,
    GraphPublish,
    SubgraphPublish,
    SubgraphDelete,
    TemplateList,
    TemplateUseSuccess,
    Profiles,
    Introspection,
    ErrorExplanation,
    ReadmeFetch,
    ReadmePublish,
    EmptySuccess,
)


def companion_error(output: RoverOutput) -> BuildErrorsFailure | None:
    """
    Build the advisory error for confirmations that carry build errors.

    A subgraph publish or delete can succeed while composition of the
    supergraph fails. The write happened, so the outcome stays a success,
    and the build errors are reported next to it as a BuildErrorsFailure.
    """
    if isinstance(output, SubgraphPublish):
        errors = output.publish_response.build_errors
    elif isinstance(output, SubgraphDelete):
        errors = output.delete_response.build_errors
    else:
        return None
    if errors.is_empty():
        return None
    return BuildErrorsFailure(source=errors, subgraph=output.subgraph, graph_ref=output.graph_ref)


def ensure_exhaustive(table: dict[type[RoverOutput], Any], table_name: str) -> None:
    """Raise TypeError unless ``table`` has exactly one entry per result variant."""
    missing = [variant.__name__ for variant in OUTPUT_VARIANTS if variant not in table]
    extra = [variant.__name__ for variant in table if variant not in OUTPUT_VARIANTS]
    if missing or extra:
        raise TypeError(
            f"{table_name} is out of sync with OUTPUT_VARIANTS: missing={missing} extra={extra}"
        )
