"""
Registry Response Models

Typed values returned by the registry client and the composition engine.
Command handlers wrap these in RoverOutput variants.
"""

from __future__ import annotations

import re
from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .build_errors import BuildErrors
from .errors import InvalidGraphRef, OperationCheckFailure

_GRAPH_REF_PATTERN = re.compile(r"^([A-Za-z][A-Za-z0-9_-]{0,63})(?:@([A-Za-z0-9_.-]{1,63}))?$")


class GraphRef(BaseModel):
    """A graph id plus variant, written ``name@variant``"""

    model_config = ConfigDict(frozen=True)

    name: str
    variant: str = "current"

    @classmethod
    def parse(cls, value: str) -> GraphRef:
        """Parse ``name`` or ``name@variant``, raising InvalidGraphRef (E001)."""
        match = _GRAPH_REF_PATTERN.match(value.strip())
        if match is None:
            raise InvalidGraphRef(value=value)
        name, variant = match.groups()
        return cls(name=name, variant=variant or "current")

    def __str__(self) -> str:
        return f"{self.name}@{self.variant}"


class SdlType(StrEnum):
    """Kind of schema document returned by a fetch"""

    GRAPH = "graph"
    SUBGRAPH = "subgraph"
    SUPERGRAPH = "supergraph"


class Sdl(BaseModel):
    contents: str
    type: SdlType
    routing_url: str | None = None  # subgraphs only


class FetchResponse(BaseModel):
    sdl: Sdl


class SubgraphUpdatedAt(BaseModel):
    local: datetime | None = None
    utc: datetime | None = None


class SubgraphInfo(BaseModel):
    """One row of a subgraph listing"""

    name: str
    url: str | None = None
    updated_at: SubgraphUpdatedAt = Field(default_factory=SubgraphUpdatedAt)


class SubgraphListResponse(BaseModel):
    subgraphs: list[SubgraphInfo]
    root_url: str
    graph_ref: GraphRef


class FieldChanges(BaseModel):
    additions: int = 0
    removals: int = 0
    edits: int = 0


class TypeChanges(BaseModel):
    additions: int = 0
    removals: int = 0
    edits: int = 0


class ChangeSummary(BaseModel):
    """Counts of field and type changes introduced by a publish"""

    field_changes: FieldChanges = Field(default_factory=FieldChanges)
    type_changes: TypeChanges = Field(default_factory=TypeChanges)

    def is_empty(self) -> bool:
        changes = (self.field_changes, self.type_changes)
        return all(c.additions == 0 and c.removals == 0 and c.edits == 0 for c in changes)

    def __str__(self) -> str:
        if self.is_empty():
            return "[No Changes]"
        fields = self.field_changes
        types = self.type_changes
        return (
            f"[Fields: +{fields.additions} -{fields.removals} △ {fields.edits}, "
            f"Types: +{types.additions} -{types.removals} △ {types.edits}]"
        )


class GraphPublishResponse(BaseModel):
    api_schema_hash: str
    change_summary: ChangeSummary = Field(default_factory=ChangeSummary)


class SubgraphPublishResponse(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    api_schema_hash: str | None = None
    supergraph_was_updated: bool
    subgraph_was_created: bool
    build_errors: BuildErrors = Field(default_factory=BuildErrors)
    launch_url: str | None = None
    launch_cli_copy: str | None = None


class SubgraphDeleteResponse(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    supergraph_was_updated: bool
    build_errors: BuildErrors = Field(default_factory=BuildErrors)


class ChangeSeverity(StrEnum):
    """Severity of a schema change or of a whole check"""

    PASS = "PASS"
    FAIL = "FAIL"


class SchemaChange(BaseModel):
    code: str
    description: str
    severity: ChangeSeverity


class CheckResponse(BaseModel):
    """Result of an operation check against recent client traffic"""

    target_url: str | None = None
    operation_check_count: int
    changes: list[SchemaChange]
    result: ChangeSeverity
    failure_count: int
    graph_ref: GraphRef
    core_schema_modified: bool

    @classmethod
    def try_new(
        cls,
        target_url: str | None,
        operation_check_count: int,
        changes: list[SchemaChange],
        result: ChangeSeverity,
        graph_ref: GraphRef,
        core_schema_modified: bool,
    ) -> CheckResponse:
        """
        Build a check response, raising OperationCheckFailure when it failed.

        Raises:
            OperationCheckFailure: If the overall result is FAIL
        """
        failure_count = sum(1 for change in changes if change.severity == ChangeSeverity.FAIL)
        response = cls(
            target_url=target_url,
            operation_check_count=operation_check_count,
            changes=changes,
            result=result,
            failure_count=failure_count,
            graph_ref=graph_ref,
            core_schema_modified=core_schema_modified,
        )
        if result == ChangeSeverity.FAIL:
            raise OperationCheckFailure(graph_ref=graph_ref, check_response=response)
        return response

    def get_json(self) -> dict[str, Any]:
        """Serialize the check to the envelope ``data`` fields."""
        return {
            "target_url": self.target_url,
            "operation_check_count": self.operation_check_count,
            "changes": [change.model_dump(mode="json") for change in self.changes],
            "failure_count": self.failure_count,
            "success": self.result == ChangeSeverity.PASS,
            "core_schema_modified": self.core_schema_modified,
        }


class CheckRequestSuccessResult(BaseModel):
    """A check that was queued rather than awaited"""

    workflow_id: str
    target_url: str

    def get_json(self) -> dict[str, Any]:
        return {"workflow_id": self.workflow_id, "target_url": self.target_url}


class ContractDescribeResponse(BaseModel):
    description: str
    root_url: str
    graph_ref: GraphRef


class ContractPublishResponse(BaseModel):
    config_description: str
    launch_url: str | None = None
    launch_cli_copy: str | None = None


class CompositionHint(BaseModel):
    message: str
    code: str | None = None


class CompositionOutput(BaseModel):
    supergraph_sdl: str
    hints: list[CompositionHint] = Field(default_factory=list)
    federation_version: str | None = None


class ProjectLanguage(StrEnum):
    """Languages the template catalog is filtered by"""

    GO = "go"
    JAVA = "java"
    JAVASCRIPT = "javascript"
    KOTLIN = "kotlin"
    PYTHON = "python"
    RUST = "rust"
    TYPESCRIPT = "typescript"


class GithubTemplate(BaseModel):
    """A starter project hosted on GitHub"""

    model_config = ConfigDict(frozen=True)

    id: str
    git_url: str
    display: str
    language: ProjectLanguage
