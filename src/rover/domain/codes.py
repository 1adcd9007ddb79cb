"""
Error Codes

The single table every rendering path reads error codes from. Codes are a
public contract for scripts: once a code is assigned to a kind it is never
reassigned.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ErrorKind(StrEnum):
    """Classified failure kinds plus the unclassified fallback"""

    INVALID_GRAPH_REF = "invalid_graph_ref"
    TRANSPORT = "transport"
    MALFORMED_RESPONSE = "malformed_response"
    GRAPH_NOT_FOUND = "graph_not_found"
    SUBGRAPH_NOT_FOUND = "subgraph_not_found"
    PROFILE_NOT_FOUND = "profile_not_found"
    AUTHENTICATION_FAILED = "authentication_failed"
    TEMPLATE_NOT_FOUND = "template_not_found"
    NO_SUPERGRAPH_BUILDS = "no_supergraph_builds"
    BUILD_ERRORS = "build_errors"
    OPERATION_CHECK_FAILURE = "operation_check_failure"
    UNKNOWN_ERROR_CODE = "unknown_error_code"
    UNCLASSIFIED = "unclassified"


class Severity(StrEnum):
    """Prefix style for itemized error lines"""

    ERROR = "error"
    WARNING = "warning"
    HINT = "hint"


@dataclass(slots=True, frozen=True)
class ErrorMetadata:
    """Stable code, item prefix style and long-form explanation for a kind."""

    code: str | None
    item_severity: Severity
    explanation: str


ERROR_METADATA: dict[ErrorKind, ErrorMetadata] = {
    ErrorKind.INVALID_GRAPH_REF: ErrorMetadata(
        code="E001",
        item_severity=Severity.HINT,
        explanation=(
            "This error occurs when a graph reference could not be parsed.\n\n"
            "Graph references are written `<NAME>` or `<NAME>@<VARIANT>`. The name must "
            "start with a letter and may only contain letters, numbers, `-` and `_`. "
            "When no variant is given, `current` is used."
        ),
    ),
    ErrorKind.TRANSPORT: ErrorMetadata(
        code="E004",
        item_severity=Severity.HINT,
        explanation=(
            "This error occurs when the registry could not be reached.\n\n"
            "Check your network connection and any proxy settings, then run the command "
            "again. If the problem persists, the registry may be experiencing an outage."
        ),
    ),
    ErrorKind.MALFORMED_RESPONSE: ErrorMetadata(
        code="E005",
        item_severity=Severity.HINT,
        explanation=(
            "This error occurs when the registry responded with data that could not be "
            "understood.\n\nThis is usually caused by an outdated client. Upgrade to the "
            "latest release and try again."
        ),
    ),
    ErrorKind.GRAPH_NOT_FOUND: ErrorMetadata(
        code="E008",
        item_severity=Severity.HINT,
        explanation=(
            "This error occurs when the requested graph does not exist or the credentials "
            "in use cannot access it.\n\nVerify the graph reference and make sure the "
            "**profile** you are using belongs to an account with access to the graph."
        ),
    ),
    ErrorKind.SUBGRAPH_NOT_FOUND: ErrorMetadata(
        code="E009",
        item_severity=Severity.HINT,
        explanation=(
            "This error occurs when the requested subgraph does not exist in the graph.\n\n"
            "Run `rover subgraph list <GRAPH_REF>` to see the subgraphs that exist."
        ),
    ),
    ErrorKind.PROFILE_NOT_FOUND: ErrorMetadata(
        code="E020",
        item_severity=Severity.HINT,
        explanation=(
            "This error occurs when a command names a configuration profile that does not "
            "exist.\n\nRun `rover profile list` to see the configured profiles."
        ),
    ),
    ErrorKind.AUTHENTICATION_FAILED: ErrorMetadata(
        code="E021",
        item_severity=Severity.HINT,
        explanation=(
            "This error occurs when no usable API key was found for the selected "
            "profile.\n\nStore an API key for the profile, or set the `ROVER_API_KEY` "
            "environment variable."
        ),
    ),
    ErrorKind.TEMPLATE_NOT_FOUND: ErrorMetadata(
        code="E024",
        item_severity=Severity.HINT,
        explanation=(
            "This error occurs when a template id does not match any known template.\n\n"
            "Run `rover template list` to see the available templates."
        ),
    ),
    ErrorKind.NO_SUPERGRAPH_BUILDS: ErrorMetadata(
        code="E027",
        item_severity=Severity.ERROR,
        explanation=(
            "This error occurs when a supergraph schema was requested but no subgraph "
            "publish has ever composed successfully.\n\nFix the **build errors** listed "
            "with the failure and publish the affected subgraphs again."
        ),
    ),
    ErrorKind.BUILD_ERRORS: ErrorMetadata(
        code="E029",
        item_severity=Severity.ERROR,
        explanation=(
            "This error occurs when subgraphs could not be composed into a supergraph.\n\n"
            "Every **build error** is listed with the failure, each with its own message "
            "and code. Resolve them and compose or publish again."
        ),
    ),
    ErrorKind.OPERATION_CHECK_FAILURE: ErrorMetadata(
        code="E030",
        item_severity=Severity.ERROR,
        explanation=(
            "This error occurs when a proposed schema would break operations that clients "
            "have sent recently.\n\nReview the failing changes at the check's target URL, "
            "or mark them as safe in the registry before publishing."
        ),
    ),
    ErrorKind.UNKNOWN_ERROR_CODE: ErrorMetadata(
        code="E031",
        item_severity=Severity.HINT,
        explanation=(
            "This error occurs when `rover explain` is given a code that does not exist.\n\n"
            "Error codes are written `E` followed by three digits, for example `E029`."
        ),
    ),
    ErrorKind.UNCLASSIFIED: ErrorMetadata(
        code=None,
        item_severity=Severity.ERROR,
        explanation="",
    ),
}


def code_for(kind: ErrorKind) -> str | None:
    return ERROR_METADATA[kind].code


def kind_for_code(code: str) -> ErrorKind | None:
    """Look up the kind owning ``code`` (case-insensitive)."""
    wanted = code.strip().upper()
    for kind, metadata in ERROR_METADATA.items():
        if metadata.code == wanted:
            return kind
    return None


def explanation_for(code: str) -> str | None:
    kind = kind_for_code(code)
    if kind is None:
        return None
    return ERROR_METADATA[kind].explanation
